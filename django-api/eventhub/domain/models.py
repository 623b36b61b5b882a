"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in eventhub/models.py (persistence layer).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from eventhub.domain.enums import (
    CheckInOutcome,
    EventLevel,
    EventMode,
    EventStatus,
    EventType,
    FeeStructure,
    FeeType,
    PaymentStatus,
    PrizePoolType,
    RegistrationType,
    Role,
    TicketStatus,
    TransactionType,
)
from eventhub.domain.value_objects import (
    EventId,
    Money,
    NotificationId,
    RegistrationId,
    TeamSize,
    TicketCode,
    UserId,
)


@dataclass(frozen=True)
class FeeConfig:
    """Registration fee configuration of an event."""

    fee_type: FeeType = FeeType.FREE
    fee_structure: FeeStructure | None = None
    fee_per_person: Money = field(default_factory=Money.zero)
    team_flat_fee: Money = field(default_factory=Money.zero)
    team_fee_cap: Money = field(default_factory=Money.zero)

    def normalized(self) -> "FeeConfig":
        """Free events carry no fee amounts and no structure."""
        if self.fee_type is FeeType.FREE:
            return FeeConfig()
        return self


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    tagline: str
    description: str
    event_type: EventType
    event_level: EventLevel
    event_mode: EventMode
    created_by: UserId
    status: EventStatus
    created_at: datetime
    updated_at: datetime
    fee: FeeConfig = field(default_factory=FeeConfig)
    team_size: TeamSize = field(default_factory=TeamSize)
    team_name_required: bool = False
    registration_start: datetime | None = None
    registration_end: datetime | None = None
    event_start: datetime | None = None
    event_end: datetime | None = None
    result_date: datetime | None = None
    venue_name: str | None = None
    venue_address: str | None = None
    platform_name: str | None = None
    meeting_link: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    prize_pool_amount: Money = field(default_factory=Money.zero)
    prize_pool_type: PrizePoolType = PrizePoolType.MONETARY
    prize_breakdown: tuple[tuple[str, str], ...] = ()
    certificate_types: tuple[str, ...] = ()
    instagram_link: str | None = None
    youtube_link: str | None = None
    website_link: str | None = None
    rules_and_regulations: str | None = None
    admin_notes: str | None = None

    @property
    def is_team_event(self) -> bool:
        return self.event_type is EventType.TEAM

    def party_size(self, members: int) -> int:
        """Individual events are always charged for one person."""
        return members if self.is_team_event else 1

    def with_changes(self, **changes: Any) -> "Event":
        return replace(self, **changes)


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a Ticket."""

    code: TicketCode
    event_id: EventId
    member_name: str
    member_email: str
    issued_at: datetime
    status: TicketStatus = TicketStatus.ACTIVE
    registration_id: RegistrationId | None = None
    owner_id: UserId | None = None
    checked_in_at: datetime | None = None
    checked_in_by: UserId | None = None


@dataclass(frozen=True)
class CheckInResult:
    """Outcome of scanning a ticket at the door."""

    outcome: CheckInOutcome
    ticket: Ticket

    @property
    def checked_in_at(self) -> datetime | None:
        return self.ticket.checked_in_at


@dataclass(frozen=True)
class RegistrationMember:
    """One participant inside a registration."""

    name: str
    email: str
    phone: str = ""
    college: str = ""
    user_id: UserId | None = None
    ticket_code: TicketCode | None = None


@dataclass(frozen=True)
class Registration:
    """Domain representation of a Registration."""

    id: RegistrationId
    event_id: EventId
    type: RegistrationType
    members: tuple[RegistrationMember, ...]
    total_fee: Money
    fee_breakdown: dict[str, str]
    payment_status: PaymentStatus
    registered_by: UserId
    registered_at: datetime
    team_code: str | None = None
    team_name: str | None = None
    team_leader_id: UserId | None = None


@dataclass(frozen=True)
class WalletTransaction:
    """Append-only ledger entry."""

    id: UUID
    user_id: UserId
    type: TransactionType
    amount: Money
    description: str
    created_at: datetime
    event_id: EventId | None = None

    @property
    def signed_amount(self) -> Decimal:
        return self.amount.amount if self.type is TransactionType.CREDIT else -self.amount.amount


@dataclass(frozen=True)
class Notification:
    """Domain representation of a Notification."""

    id: NotificationId
    recipient_id: UserId
    title: str
    body: str
    type: str
    created_at: datetime
    related_id: str | None = None
    read: bool = False


@dataclass(frozen=True)
class UserAccount:
    """Profile record carrying role and the denormalized wallet balance."""

    id: UserId
    name: str
    email: str
    role: Role
    wallet_balance: Money = field(default_factory=Money.zero)


@dataclass(frozen=True)
class Actor:
    """The resolved identity performing an operation."""

    user_id: UserId
    role: Role
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
