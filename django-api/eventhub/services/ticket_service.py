"""Ticket issuance, lookup and door check-in.

Check-in is read-then-write with no lock. A second scanner that reads the
ticket after the first write takes the idempotent "already checked in"
branch; truly simultaneous writes still resolve last-write-wins.
"""

import logging
from random import Random

from eventhub.domain.enums import CheckInOutcome, Role, TicketStatus
from eventhub.domain.errors import (
    DuplicateKeyError,
    EventNotFoundError,
    IssuanceError,
    PermissionDeniedError,
    TicketInvalidError,
    TicketNotFoundError,
)
from eventhub.domain.models import Actor, CheckInResult, Ticket
from eventhub.domain.tickets import generate_ticket_code, normalize_ticket_code
from eventhub.domain.value_objects import EventId, RegistrationId, UserId
from eventhub.services.clock import Clock, utcnow
from eventhub.stores.interfaces import EventStore, TicketStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5

STAFF_ROLES = frozenset({Role.ORGANIZER, Role.ADMIN})


class TicketService:
    """Mints unique ticket codes and enforces one check-in per ticket."""

    def __init__(
        self,
        tickets: TicketStore,
        events: EventStore,
        clock: Clock = utcnow,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: Random | None = None,
    ) -> None:
        self._tickets = tickets
        self._events = events
        self._clock = clock
        self._max_attempts = max_attempts
        self._rng = rng

    def issue(
        self,
        event_id: EventId,
        member_name: str,
        member_email: str,
        owner_id: UserId | None = None,
        registration_id: RegistrationId | None = None,
    ) -> Ticket:
        """Insert a ticket under a fresh code, regenerating on collision.

        Raises:
            IssuanceError: If every attempt collided with an existing code.
        """
        for attempt in range(1, self._max_attempts + 1):
            ticket = Ticket(
                code=generate_ticket_code(self._rng),
                event_id=event_id,
                member_name=member_name,
                member_email=member_email,
                issued_at=self._clock(),
                registration_id=registration_id,
                owner_id=owner_id,
            )
            try:
                return self._tickets.create_ticket(ticket)
            except DuplicateKeyError:
                logger.warning(
                    "Ticket code %s collided (attempt %d/%d)",
                    ticket.code,
                    attempt,
                    self._max_attempts,
                )
        raise IssuanceError(self._max_attempts)

    def lookup(self, raw_code: str) -> Ticket:
        """Find a ticket by code; input is trimmed and uppercased first.

        Raises:
            TicketNotFoundError: If the code is malformed or no ticket has it.
        """
        code = normalize_ticket_code(raw_code)
        ticket = self._tickets.get_ticket(code)
        if ticket is None:
            raise TicketNotFoundError(code.value)
        return ticket

    def lookup_for(self, raw_code: str, actor: Actor) -> Ticket:
        """Lookup restricted to the ticket holder and the event's staff."""
        ticket = self.lookup(raw_code)
        if ticket.owner_id is not None and ticket.owner_id == actor.user_id:
            return ticket
        self._authorize_staff(ticket, actor)
        return ticket

    def check_in(self, raw_code: str, staff: Actor) -> CheckInResult:
        """Mark a ticket used.

        Re-scanning a used ticket is not an error: it reports the original
        check-in time without writing.

        Raises:
            TicketNotFoundError: If no ticket has this code.
            TicketInvalidError: If the ticket was cancelled.
            PermissionDeniedError: If the staff member does not run this event.
        """
        ticket = self.lookup(raw_code)
        self._authorize_staff(ticket, staff)

        if ticket.status is TicketStatus.USED:
            logger.info("Ticket %s re-scanned; already checked in at %s", ticket.code, ticket.checked_in_at)
            return CheckInResult(outcome=CheckInOutcome.ALREADY_CHECKED_IN, ticket=ticket)
        if ticket.status is TicketStatus.CANCELLED:
            raise TicketInvalidError(ticket.code.value, ticket.status.value)

        # The store's copy is authoritative over what we just wrote.
        stored = self._tickets.update_ticket(
            ticket.code,
            {
                "status": TicketStatus.USED,
                "checked_in_at": self._clock(),
                "checked_in_by": staff.user_id,
            },
        )
        logger.info("Ticket %s checked in by %s", stored.code, staff.user_id)
        return CheckInResult(outcome=CheckInOutcome.CHECKED_IN, ticket=stored)

    def cancel(self, raw_code: str, actor: Actor) -> Ticket:
        """Void an unused ticket."""
        ticket = self.lookup(raw_code)
        self._authorize_staff(ticket, actor)
        if ticket.status is TicketStatus.CANCELLED:
            return ticket
        if ticket.status is TicketStatus.USED:
            raise TicketInvalidError(ticket.code.value, ticket.status.value)
        stored = self._tickets.update_ticket(ticket.code, {"status": TicketStatus.CANCELLED})
        logger.info("Ticket %s cancelled by %s", stored.code, actor.user_id)
        return stored

    def list_for_user(self, user_id: UserId) -> list[Ticket]:
        return self._tickets.list_for_owner(user_id)

    def _authorize_staff(self, ticket: Ticket, staff: Actor) -> None:
        if staff.role not in STAFF_ROLES:
            raise PermissionDeniedError("Only event staff can scan tickets")
        if staff.role is Role.ADMIN:
            return
        event = self._events.get_event(ticket.event_id)
        if event is None:
            raise EventNotFoundError(str(ticket.event_id))
        if event.created_by != staff.user_id:
            raise PermissionDeniedError("Tickets can only be scanned by the event organizer")
