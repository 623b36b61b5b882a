"""Unit tests for EventService, NotificationService and session resolution.

These test error handling and domain error mapping.
Run with: pytest tests/test_services.py -v
"""

import threading
import uuid
from types import SimpleNamespace

import pytest

from eventhub.domain import Notification, NotificationId
from eventhub.domain.enums import EventStatus, Role
from eventhub.domain.errors import (
    EventNotFoundError,
    InvalidEventIdError,
    NotificationNotFoundError,
    StoreError,
)
from eventhub.handlers import dependencies
from eventhub.services.event_service import EventService
from eventhub.services.notification_service import NotificationService
from eventhub.services.session import resolve_actor


class TestEventService:
    """Tests for EventService."""

    @pytest.fixture
    def service(self, event_store) -> EventService:
        return EventService(event_store)

    def test_get_event_invalid_id_raises_error(self, service):
        """get_event raises InvalidEventIdError for malformed UUID."""
        with pytest.raises(InvalidEventIdError):
            service.get_event("not-a-uuid")

    def test_get_event_not_found_raises_error(self, service):
        """get_event raises EventNotFoundError when store returns None."""
        with pytest.raises(EventNotFoundError):
            service.get_event(str(uuid.uuid4()))

    def test_live_catalog_newest_first(self, service, make_event, clock):
        """Only live events are listed, newest first."""
        older = make_event(status=EventStatus.LIVE)
        clock.advance(hours=1)
        newer = make_event(status=EventStatus.LIVE, created_at=clock())
        make_event(status=EventStatus.DRAFT)
        assert [e.id for e in service.list_live_events()] == [newer.id, older.id]

    def test_organizer_listing(self, service, make_event, organizer, other_organizer):
        """Organizers see their own events in any status."""
        mine = make_event(status=EventStatus.DRAFT)
        make_event(created_by=other_organizer.user_id)
        assert [e.id for e in service.list_for_organizer(organizer.user_id)] == [mine.id]

    def test_pending_queue_and_counts(self, service, make_event):
        """The approvals queue and dashboard counts reflect statuses."""
        pending = make_event(status=EventStatus.PENDING_APPROVAL)
        make_event(status=EventStatus.LIVE)
        assert [e.id for e in service.list_pending_approval()] == [pending.id]
        counts = service.status_counts()
        assert counts["pending_approval"] == 1
        assert counts["live"] == 1
        assert counts["cancelled"] == 0


class TestNotificationService:
    """Tests for NotificationService."""

    @pytest.fixture
    def notification(self, notification_store, organizer, clock) -> Notification:
        return notification_store.create_notification(
            Notification(
                id=NotificationId(uuid.uuid4()),
                recipient_id=organizer.user_id,
                title="Event Approved",
                body="Your event has been approved and is now live!",
                type="event_status",
                created_at=clock(),
            )
        )

    def test_mark_read_by_recipient(self, notification_store, notification, organizer):
        """The recipient can mark a notification read."""
        service = NotificationService(notification_store)
        assert service.mark_read(str(notification.id), organizer.user_id).read
        assert service.list_for_user(organizer.user_id)[0].read

    def test_mark_read_by_someone_else(self, notification_store, notification, admin):
        """Other users cannot see the notification."""
        service = NotificationService(notification_store)
        with pytest.raises(NotificationNotFoundError):
            service.mark_read(str(notification.id), admin.user_id)

    def test_mark_read_malformed_id(self, notification_store, organizer):
        """Malformed ids are treated as missing."""
        service = NotificationService(notification_store)
        with pytest.raises(NotificationNotFoundError):
            service.mark_read("nope", organizer.user_id)


class TestResolveActor:
    """Tests for resolve_actor."""

    def test_inline_when_timeout_zero(self, organizer):
        """A zero timeout runs the loader in the calling thread."""
        caller = threading.get_ident()
        seen = []

        def loader():
            seen.append(threading.get_ident())
            return organizer

        assert resolve_actor(loader, 0) == organizer
        assert seen == [caller]

    def test_timeout_returns_none(self):
        """A loader that outlives the deadline means no session."""
        release = threading.Event()

        def loader():
            release.wait(5)
            return None

        try:
            assert resolve_actor(loader, 0.05) is None
        finally:
            release.set()

    def test_store_failure_returns_none(self):
        """Store errors are logged and treated as no session."""

        def loader():
            raise StoreError("database is locked")

        assert resolve_actor(loader, 1) is None
        assert resolve_actor(loader, 0) is None


class TestWorkerConnections:
    """Tests for DB connection handling around off-thread actor resolution."""

    @pytest.fixture
    def calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr(dependencies, "close_old_connections", lambda: calls.append("close_old"))
        monkeypatch.setattr(dependencies, "connection", SimpleNamespace(close=lambda: calls.append("close")))
        return calls

    def test_connection_closed_after_load(self, calls):
        """Stale connections are dropped before the query and closed afterwards."""

        def loader():
            calls.append("load")
            return "actor"

        assert dependencies.with_own_connection(loader)() == "actor"
        assert calls == ["close_old", "load", "close"]

    def test_connection_closed_on_failure(self, calls):
        """The worker's connection is closed even when the query fails."""

        def loader():
            raise StoreError("database is locked")

        with pytest.raises(StoreError):
            dependencies.with_own_connection(loader)()
        assert calls == ["close_old", "close"]

    @pytest.mark.django_db(transaction=True)
    def test_worker_resolution_releases_connection(self, calls, make_account, settings):
        """Resolving on the executor loads the account and releases the connection."""
        settings.EVENTHUB = {**settings.EVENTHUB, "SESSION_TIMEOUT_SECONDS": 2}
        user, account = make_account(Role.ORGANIZER)

        actor = dependencies.optional_actor(SimpleNamespace(user=user))

        assert actor.user_id.value == account.id
        assert actor.role is Role.ORGANIZER
        assert calls == ["close_old", "close"]

    def test_inline_resolution_keeps_request_connection(self, calls, make_account):
        """Inline resolution runs on the request's own connection."""
        user, _ = make_account()
        assert dependencies.optional_actor(SimpleNamespace(user=user)) is not None
        assert calls == []
