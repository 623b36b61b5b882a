"""Unit tests for ticket issuance and check-in.

Run with: pytest tests/test_tickets.py -v
"""

import pytest

from eventhub.domain.enums import CheckInOutcome, EventStatus, TicketStatus
from eventhub.domain.errors import (
    DuplicateKeyError,
    IssuanceError,
    PermissionDeniedError,
    TicketInvalidError,
    TicketNotFoundError,
)
from eventhub.services.ticket_service import TicketService
from eventhub.stores.memory import InMemoryTicketStore


class CollidingTicketStore(InMemoryTicketStore):
    """Rejects the first ``collisions`` inserts as duplicates."""

    def __init__(self, collisions: int) -> None:
        super().__init__()
        self.collisions = collisions
        self.attempts = 0

    def create_ticket(self, ticket):
        self.attempts += 1
        if self.attempts <= self.collisions:
            raise DuplicateKeyError("tickets", ticket.code.value)
        return super().create_ticket(ticket)


@pytest.fixture
def live_event(make_event):
    return make_event(status=EventStatus.LIVE)


@pytest.fixture
def service(ticket_store, event_store, clock) -> TicketService:
    return TicketService(ticket_store, event_store, clock)


@pytest.fixture
def ticket(service, live_event, participant):
    return service.issue(live_event.id, "Asha", "asha@example.com", owner_id=participant.user_id)


class TestIssue:
    """Tests for TicketService.issue."""

    def test_issue_creates_active_ticket(self, ticket, ticket_store):
        """New tickets are active and stored under their code."""
        assert ticket.status is TicketStatus.ACTIVE
        assert ticket_store.get_ticket(ticket.code) == ticket

    def test_retries_after_collision(self, event_store, live_event, clock):
        """A duplicate code is regenerated and retried."""
        store = CollidingTicketStore(collisions=2)
        service = TicketService(store, event_store, clock, max_attempts=5)
        issued = service.issue(live_event.id, "Asha", "asha@example.com")
        assert store.attempts == 3
        assert store.get_ticket(issued.code) == issued

    def test_gives_up_after_max_attempts(self, event_store, live_event, clock):
        """Persistent collisions end in IssuanceError."""
        store = CollidingTicketStore(collisions=100)
        service = TicketService(store, event_store, clock, max_attempts=3)
        with pytest.raises(IssuanceError) as exc_info:
            service.issue(live_event.id, "Asha", "asha@example.com")
        assert exc_info.value.attempts == 3
        assert store.attempts == 3


class TestLookup:
    """Tests for TicketService.lookup."""

    def test_lookup_normalizes_input(self, service, ticket):
        """Lowercase input with whitespace still finds the ticket."""
        assert service.lookup(f"  {ticket.code.value.lower()} ") == ticket

    def test_lookup_missing(self, service):
        """Unknown codes raise TicketNotFoundError."""
        with pytest.raises(TicketNotFoundError):
            service.lookup("EVN-TKT-ZZZZZZ")

    def test_lookup_malformed(self, service):
        """Malformed codes are reported as missing tickets."""
        with pytest.raises(TicketNotFoundError) as exc_info:
            service.lookup(" evn-tkt-abc ")
        assert exc_info.value.ticket_code == "EVN-TKT-ABC"

    def test_lookup_for_owner_and_staff(self, service, ticket, participant, organizer):
        """The holder and the event's organizer can see a ticket."""
        assert service.lookup_for(ticket.code.value, participant) == ticket
        assert service.lookup_for(ticket.code.value, organizer) == ticket

    def test_lookup_for_stranger(self, service, ticket, other_organizer):
        """Other organizers cannot see the ticket."""
        with pytest.raises(PermissionDeniedError):
            service.lookup_for(ticket.code.value, other_organizer)


class TestCheckIn:
    """Tests for TicketService.check_in."""

    def test_first_scan_marks_used(self, service, ticket, organizer, clock):
        """An active ticket becomes used with staff and time recorded."""
        result = service.check_in(ticket.code.value, organizer)

        assert result.outcome is CheckInOutcome.CHECKED_IN
        assert result.ticket.status is TicketStatus.USED
        assert result.checked_in_at == clock()
        assert result.ticket.checked_in_by == organizer.user_id

    def test_second_scan_is_idempotent(self, service, ticket, organizer, admin, clock, ticket_store):
        """A re-scan reports the original check-in without writing."""
        first = service.check_in(ticket.code.value, organizer)
        clock.advance(minutes=10)
        second = service.check_in(ticket.code.value, admin)

        assert second.outcome is CheckInOutcome.ALREADY_CHECKED_IN
        assert second.checked_in_at == first.checked_in_at
        assert ticket_store.get_ticket(ticket.code).checked_in_by == organizer.user_id

    def test_cancelled_ticket_rejected(self, service, ticket, organizer, ticket_store):
        """Cancelled tickets fail hard and stay cancelled."""
        service.cancel(ticket.code.value, organizer)
        with pytest.raises(TicketInvalidError):
            service.check_in(ticket.code.value, organizer)
        assert ticket_store.get_ticket(ticket.code).status is TicketStatus.CANCELLED

    def test_participant_cannot_scan(self, service, ticket, participant):
        """Only organizers and admins scan tickets."""
        with pytest.raises(PermissionDeniedError):
            service.check_in(ticket.code.value, participant)

    def test_other_organizer_cannot_scan(self, service, ticket, other_organizer):
        """Organizers only scan tickets for their own events."""
        with pytest.raises(PermissionDeniedError):
            service.check_in(ticket.code.value, other_organizer)


class TestCancel:
    """Tests for TicketService.cancel."""

    def test_cancel_is_idempotent(self, service, ticket, organizer):
        """Cancelling twice returns the cancelled ticket."""
        service.cancel(ticket.code.value, organizer)
        again = service.cancel(ticket.code.value, organizer)
        assert again.status is TicketStatus.CANCELLED

    def test_used_ticket_cannot_be_cancelled(self, service, ticket, organizer):
        """Checked-in tickets cannot be voided."""
        service.check_in(ticket.code.value, organizer)
        with pytest.raises(TicketInvalidError):
            service.cancel(ticket.code.value, organizer)
