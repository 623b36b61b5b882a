"""Event lifecycle transitions.

Each transition is read-then-write against the store with no lock held.
Two admins deciding the same event concurrently resolve to whichever write
lands last; the partial update only touches status, notes and updated_at.
"""

import logging
import uuid
from typing import Any, Mapping

from eventhub.domain.drafts import DEFAULT_EVENT_NAME
from eventhub.domain.enums import EventStatus, Role
from eventhub.domain.errors import (
    EventNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from eventhub.domain.fees import validate_fee_config
from eventhub.domain.lifecycle import RULES, Transition, resolve_transition
from eventhub.domain.models import Actor, Event, Notification
from eventhub.domain.value_objects import NotificationId
from eventhub.services.clock import Clock, utcnow
from eventhub.services.event_service import parse_event_id
from eventhub.stores.interfaces import EventStore, NotificationStore

logger = logging.getLogger(__name__)

EVENT_STATUS_NOTIFICATION = "event_status"

DECISION_MESSAGES = {
    Transition.APPROVE: (
        "Event Approved",
        "Your event has been approved and is now live!",
    ),
    Transition.REJECT: (
        "Event Needs Changes",
        "Your event submission was rejected. Please review and resubmit.",
    ),
}

# Plain text fields an organizer may edit while the event is a draft.
EDITABLE_EVENT_FIELDS = frozenset(
    {
        "name",
        "tagline",
        "description",
        "venue_name",
        "venue_address",
        "platform_name",
        "meeting_link",
        "contact_email",
        "contact_phone",
        "instagram_link",
        "youtube_link",
        "website_link",
        "rules_and_regulations",
    }
)


class LifecycleService:
    """Moves events through draft, approval, live and terminal states."""

    def __init__(
        self,
        events: EventStore,
        notifications: NotificationStore,
        clock: Clock = utcnow,
    ) -> None:
        self._events = events
        self._notifications = notifications
        self._clock = clock

    def submit_for_approval(self, event_id: str, actor: Actor) -> Event:
        """Send a draft to the admin queue.

        Raises:
            ValidationError: If the fee configuration or team bounds are incomplete.
        """
        event = self._load(event_id)
        self._authorize(Transition.SUBMIT, event, actor)
        resolve_transition(Transition.SUBMIT, event.status)
        validate_fee_config(event.fee)
        if event.is_team_event and not event.team_size.is_consistent():
            raise ValidationError(
                "Minimum team size cannot exceed the maximum",
                fields=("min_team_size", "max_team_size"),
            )
        return self._write(event, Transition.SUBMIT, actor)

    def save(self, event_id: str, changes: Mapping[str, Any], actor: Actor) -> Event:
        """Persist organizer edits to a draft."""
        unknown = sorted(set(changes) - EDITABLE_EVENT_FIELDS)
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(unknown)}", fields=unknown)
        if "tagline" in changes and not str(changes["tagline"] or "").strip():
            raise ValidationError("Tagline is required", fields=("tagline",))
        changes = dict(changes)
        if "name" in changes:
            changes["name"] = str(changes["name"] or "").strip() or DEFAULT_EVENT_NAME

        event = self._load(event_id)
        self._authorize(Transition.SAVE, event, actor)
        resolve_transition(Transition.SAVE, event.status)
        return self._write(event, Transition.SAVE, actor, extra=changes)

    def approve(self, event_id: str, actor: Actor, notes: str = "") -> Event:
        return self._decide(Transition.APPROVE, event_id, actor, notes)

    def reject(self, event_id: str, actor: Actor, notes: str = "") -> Event:
        return self._decide(Transition.REJECT, event_id, actor, notes)

    def complete(self, event_id: str, actor: Actor) -> Event:
        return self._simple(Transition.COMPLETE, event_id, actor)

    def cancel(self, event_id: str, actor: Actor) -> Event:
        return self._simple(Transition.CANCEL, event_id, actor)

    def apply(self, transition: Transition, event_id: str, actor: Actor, notes: str = "") -> Event:
        """Dispatch a transition by name; used by the HTTP layer."""
        if transition is Transition.SUBMIT:
            return self.submit_for_approval(event_id, actor)
        if transition in DECISION_MESSAGES:
            return self._decide(transition, event_id, actor, notes)
        if transition is Transition.SAVE:
            raise ValidationError("Use save() with the edited fields", fields=("transition",))
        return self._simple(transition, event_id, actor)

    def _simple(self, transition: Transition, event_id: str, actor: Actor) -> Event:
        event = self._load(event_id)
        self._authorize(transition, event, actor)
        resolve_transition(transition, event.status)
        return self._write(event, transition, actor)

    def _decide(self, transition: Transition, event_id: str, actor: Actor, notes: str) -> Event:
        event = self._load(event_id)
        self._authorize(transition, event, actor)
        resolve_transition(transition, event.status)

        notes = (notes or "").strip()
        updated = self._write(event, transition, actor, extra={"admin_notes": notes or None})
        self._notify_owner(updated, transition, notes)
        return updated

    def _load(self, event_id: str) -> Event:
        event = self._events.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _authorize(self, transition: Transition, event: Event, actor: Actor) -> None:
        rule = RULES[transition]
        if actor.role not in rule.actors:
            raise PermissionDeniedError(f"{actor.role.value} cannot {transition.value} events")
        if actor.role is Role.ORGANIZER and event.created_by != actor.user_id:
            raise PermissionDeniedError("Organizers can only manage their own events")

    def _write(
        self,
        event: Event,
        transition: Transition,
        actor: Actor,
        extra: dict[str, Any] | None = None,
    ) -> Event:
        target: EventStatus = RULES[transition].target
        patch: dict[str, Any] = {"status": target, "updated_at": self._clock()}
        patch.update(extra or {})
        updated = self._events.update_event(event.id, patch)
        logger.info(
            "Event %s %s: %s -> %s by %s",
            event.id,
            transition.value,
            event.status.value,
            target.value,
            actor.user_id,
        )
        return updated

    def _notify_owner(self, event: Event, transition: Transition, notes: str) -> Notification:
        title, default_body = DECISION_MESSAGES[transition]
        notification = Notification(
            id=NotificationId(uuid.uuid4()),
            recipient_id=event.created_by,
            title=title,
            body=notes or default_body,
            type=EVENT_STATUS_NOTIFICATION,
            created_at=self._clock(),
            related_id=str(event.id),
        )
        return self._notifications.create_notification(notification)
