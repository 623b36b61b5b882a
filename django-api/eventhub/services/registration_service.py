"""Participant registrations against live events.

The fee is computed once at registration time and stored with its
breakdown; later edits to an event's fee setup never touch it.
"""

import logging
import uuid
from dataclasses import replace
from random import Random
from typing import Sequence

from eventhub.domain.enums import EventStatus, PaymentStatus, RegistrationType
from eventhub.domain.errors import (
    EventNotFoundError,
    PermissionDeniedError,
    RegistrationClosedError,
    ValidationError,
)
from eventhub.domain.fees import calculate_fee, fee_breakdown
from eventhub.domain.models import Actor, Event, Registration, RegistrationMember
from eventhub.domain.tickets import generate_team_code
from eventhub.domain.value_objects import RegistrationId
from eventhub.services.clock import Clock, utcnow
from eventhub.services.event_service import parse_event_id
from eventhub.services.ticket_service import TicketService
from eventhub.stores.interfaces import EventStore, RegistrationStore, UserStore

logger = logging.getLogger(__name__)

TEAM_TYPES = frozenset({RegistrationType.TEAM_BULK, RegistrationType.TEAM_JOIN})


class RegistrationService:
    """Registers individuals and teams, issuing one ticket per member."""

    def __init__(
        self,
        events: EventStore,
        registrations: RegistrationStore,
        tickets: TicketService,
        users: UserStore,
        clock: Clock = utcnow,
        rng: Random | None = None,
    ) -> None:
        self._events = events
        self._registrations = registrations
        self._tickets = tickets
        self._users = users
        self._clock = clock
        self._rng = rng

    def register(
        self,
        event_id: str,
        members: Sequence[RegistrationMember],
        actor: Actor,
        registration_type: RegistrationType = RegistrationType.INDIVIDUAL,
        team_name: str | None = None,
    ) -> Registration:
        """Register ``members`` for a live event.

        Tickets are written before the registration row; if issuance fails
        part way the earlier tickets remain and the caller retries the whole
        registration.

        Raises:
            EventNotFoundError: If the event does not exist.
            RegistrationClosedError: If the event is not live.
            ValidationError: If the member list does not fit the event or
                names an account that does not exist.
            IssuanceError: If a ticket code could not be minted.
        """
        event = self._events.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        if event.status is not EventStatus.LIVE:
            raise RegistrationClosedError(event_id, event.status.value)

        team_name = (team_name or "").strip() or None
        self._validate_party(event, members, registration_type, team_name)
        self._check_member_accounts(members)

        party_size = event.party_size(len(members))
        total = calculate_fee(event.fee, party_size)
        registration_id = RegistrationId(uuid.uuid4())

        ticketed = []
        for member in members:
            ticket = self._tickets.issue(
                event_id=event.id,
                member_name=member.name,
                member_email=member.email,
                owner_id=member.user_id,
                registration_id=registration_id,
            )
            ticketed.append(replace(member, ticket_code=ticket.code))

        is_team = registration_type in TEAM_TYPES
        registration = Registration(
            id=registration_id,
            event_id=event.id,
            type=registration_type,
            members=tuple(ticketed),
            total_fee=total,
            fee_breakdown=fee_breakdown(event.fee, party_size),
            payment_status=PaymentStatus.PAID if total.is_zero else PaymentStatus.PENDING,
            registered_by=actor.user_id,
            registered_at=self._clock(),
            team_code=generate_team_code(self._rng) if is_team else None,
            team_name=team_name if is_team else None,
            team_leader_id=actor.user_id if is_team else None,
        )
        created = self._registrations.create_registration(registration)
        logger.info(
            "Registration %s for event %s: %d member(s), fee %s",
            created.id,
            event.id,
            len(created.members),
            created.total_fee,
        )
        return created

    def list_for_event(self, event_id: str, actor: Actor, limit: int | None = 20) -> list[Registration]:
        """Organizer view of an event's registrations."""
        event = self._events.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        if not actor.is_admin and event.created_by != actor.user_id:
            raise PermissionDeniedError("Only the organizer can view registrations")
        return self._registrations.list_for_event(event.id, limit=limit)

    def _validate_party(
        self,
        event: Event,
        members: Sequence[RegistrationMember],
        registration_type: RegistrationType,
        team_name: str | None,
    ) -> None:
        if not members:
            raise ValidationError("At least one member is required", fields=("members",))
        if any(not member.name.strip() or not member.email.strip() for member in members):
            raise ValidationError("Every member needs a name and email", fields=("members",))

        if registration_type is RegistrationType.INDIVIDUAL:
            if event.is_team_event:
                raise ValidationError("This is a team event", fields=("type",))
            if len(members) != 1:
                raise ValidationError(
                    "Individual registrations have exactly one member", fields=("members",)
                )
            return

        if not event.is_team_event:
            raise ValidationError("This event does not accept teams", fields=("type",))
        if not event.team_size.allows(len(members)):
            raise ValidationError(
                f"Teams must have between {event.team_size.min_size} and "
                f"{event.team_size.effective_max} members",
                fields=("members",),
            )
        if event.team_name_required and not team_name:
            raise ValidationError("Team name is required", fields=("team_name",))

    def _check_member_accounts(self, members: Sequence[RegistrationMember]) -> None:
        for member in members:
            if member.user_id is not None and self._users.get_account(member.user_id) is None:
                raise ValidationError(
                    f"No account exists for member {member.name}", fields=("members",)
                )
