"""Event service - catalog reads live here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from eventhub.domain.enums import EventStatus
from eventhub.domain.errors import EventNotFoundError, InvalidEventIdError
from eventhub.domain.models import Event
from eventhub.domain.value_objects import EventId, UserId
from eventhub.stores.interfaces import EventStore


def parse_event_id(event_id: str) -> EventId:
    """Raises InvalidEventIdError for anything that is not a UUID."""
    try:
        return EventId.from_string(event_id)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidEventIdError() from exc


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def list_live_events(self) -> list[Event]:
        """Return events open to participants, newest first."""
        return self._store.list_events(status=EventStatus.LIVE)

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def list_for_organizer(self, user_id: UserId, limit: int | None = None) -> list[Event]:
        return self._store.list_events(created_by=user_id, limit=limit)

    def list_pending_approval(self) -> list[Event]:
        """Admin approvals queue, newest first."""
        return self._store.list_events(status=EventStatus.PENDING_APPROVAL)

    def status_counts(self) -> dict[str, int]:
        counts = self._store.count_by_status()
        return {status.value: counts.get(status, 0) for status in EventStatus}
