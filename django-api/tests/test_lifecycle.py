"""Unit tests for the event lifecycle.

Run with: pytest tests/test_lifecycle.py -v
"""

import pytest

from eventhub.domain import FeeConfig
from eventhub.domain.drafts import DEFAULT_EVENT_NAME
from eventhub.domain.enums import EventStatus, FeeStructure, FeeType
from eventhub.domain.errors import (
    EventNotFoundError,
    InvalidTransitionError,
    PermissionDeniedError,
    ValidationError,
)
from eventhub.domain.lifecycle import (
    TERMINAL_STATES,
    Transition,
    resolve_transition,
)
from eventhub.services.lifecycle_service import EVENT_STATUS_NOTIFICATION, LifecycleService


@pytest.fixture
def service(event_store, notification_store, clock) -> LifecycleService:
    return LifecycleService(event_store, notification_store, clock)


class TestTransitionTable:
    """Tests for the pure state machine."""

    @pytest.mark.parametrize(
        "transition,current,target",
        [
            (Transition.SUBMIT, EventStatus.DRAFT, EventStatus.PENDING_APPROVAL),
            (Transition.SAVE, EventStatus.DRAFT, EventStatus.DRAFT),
            (Transition.APPROVE, EventStatus.PENDING_APPROVAL, EventStatus.LIVE),
            (Transition.REJECT, EventStatus.PENDING_APPROVAL, EventStatus.DRAFT),
            (Transition.COMPLETE, EventStatus.LIVE, EventStatus.COMPLETED),
            (Transition.CANCEL, EventStatus.LIVE, EventStatus.CANCELLED),
        ],
    )
    def test_allowed_transitions(self, transition, current, target):
        """Each transition moves its source state to its target."""
        assert resolve_transition(transition, current) is target

    @pytest.mark.parametrize("terminal", sorted(TERMINAL_STATES, key=lambda s: s.value))
    def test_terminal_states_have_no_exits(self, terminal):
        """Completed and cancelled events never change state."""
        for transition in Transition:
            with pytest.raises(InvalidTransitionError):
                resolve_transition(transition, terminal)

    def test_approve_from_draft_rejected(self):
        """Approval is only possible from pending_approval."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            resolve_transition(Transition.APPROVE, EventStatus.DRAFT)
        assert exc_info.value.current_status == "draft"


class TestLifecycleService:
    """Tests for LifecycleService."""

    def test_submit_moves_draft_to_pending(self, service, make_event, organizer):
        """An organizer can submit their own draft."""
        event = make_event()
        updated = service.submit_for_approval(str(event.id), organizer)
        assert updated.status is EventStatus.PENDING_APPROVAL

    def test_submit_requires_complete_fee_config(self, service, make_event, organizer):
        """A paid event without its amounts cannot be submitted."""
        event = make_event(fee=FeeConfig(fee_type=FeeType.PAID, fee_structure=FeeStructure.PER_PERSON))
        with pytest.raises(ValidationError):
            service.submit_for_approval(str(event.id), organizer)

    def test_approve_on_draft_leaves_status_unchanged(
        self, service, make_event, admin, event_store, notification_store
    ):
        """An invalid transition writes nothing and notifies no one."""
        event = make_event(status=EventStatus.DRAFT)
        with pytest.raises(InvalidTransitionError):
            service.approve(str(event.id), admin)
        assert event_store.get_event(event.id).status is EventStatus.DRAFT
        assert notification_store.notifications == {}

    def test_approve_goes_live_and_notifies_owner(
        self, service, make_event, admin, organizer, notification_store
    ):
        """Approval sets live and sends exactly one notification."""
        event = make_event(status=EventStatus.PENDING_APPROVAL)
        updated = service.approve(str(event.id), admin)

        assert updated.status is EventStatus.LIVE
        (notification,) = notification_store.list_for_recipient(organizer.user_id)
        assert notification.title == "Event Approved"
        assert notification.type == EVENT_STATUS_NOTIFICATION
        assert notification.related_id == str(event.id)

    def test_reject_returns_to_draft_with_notes(
        self, service, make_event, admin, organizer, notification_store
    ):
        """Rejection stores the admin notes and uses them as the body."""
        event = make_event(status=EventStatus.PENDING_APPROVAL)
        updated = service.reject(str(event.id), admin, notes="  Add a venue  ")

        assert updated.status is EventStatus.DRAFT
        assert updated.admin_notes == "Add a venue"
        notifications = notification_store.list_for_recipient(organizer.user_id)
        assert len(notifications) == 1
        assert notifications[0].title == "Event Needs Changes"
        assert notifications[0].body == "Add a venue"

    def test_reject_without_notes_uses_default_body(
        self, service, make_event, admin, organizer, notification_store
    ):
        """A rejection without notes gets the canned message."""
        event = make_event(status=EventStatus.PENDING_APPROVAL)
        updated = service.reject(str(event.id), admin)
        assert updated.admin_notes is None
        (notification,) = notification_store.list_for_recipient(organizer.user_id)
        assert notification.body.startswith("Your event submission was rejected")

    def test_organizer_cannot_approve(self, service, make_event, organizer):
        """Approval is admin-only."""
        event = make_event(status=EventStatus.PENDING_APPROVAL)
        with pytest.raises(PermissionDeniedError):
            service.approve(str(event.id), organizer)

    def test_other_organizer_cannot_cancel(self, service, make_event, other_organizer):
        """Organizers may only manage their own events."""
        event = make_event(status=EventStatus.LIVE)
        with pytest.raises(PermissionDeniedError):
            service.cancel(str(event.id), other_organizer)

    def test_cancel_after_complete_rejected(self, service, make_event, admin):
        """Completed events are terminal."""
        event = make_event(status=EventStatus.LIVE)
        service.complete(str(event.id), admin)
        with pytest.raises(InvalidTransitionError):
            service.cancel(str(event.id), admin)

    def test_save_updates_editable_fields(self, service, make_event, organizer, clock):
        """Draft edits persist and bump updated_at."""
        event = make_event()
        clock.advance(minutes=5)
        updated = service.save(str(event.id), {"name": "Hack Day"}, organizer)
        assert updated.name == "Hack Day"
        assert updated.updated_at > event.updated_at

    def test_save_blank_name_uses_default(self, service, make_event, organizer):
        """Blanking the name falls back to the untitled default."""
        event = make_event()
        updated = service.save(str(event.id), {"name": "   "}, organizer)
        assert updated.name == DEFAULT_EVENT_NAME

    def test_save_rejects_status_field(self, service, make_event, organizer):
        """Status can only change through transitions."""
        event = make_event()
        with pytest.raises(ValidationError):
            service.save(str(event.id), {"status": "live"}, organizer)

    def test_unknown_event(self, service, admin):
        """Transitions on a missing event raise EventNotFoundError."""
        with pytest.raises(EventNotFoundError):
            service.approve("2b0f3f0e-7a51-4c1c-a7ee-0d7f5f0b7d11", admin)
