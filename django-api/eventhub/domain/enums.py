"""Enumerations shared by the domain, stores and handlers."""

from enum import Enum


class Role(Enum):
    PARTICIPANT = "participant"
    ORGANIZER = "organizer"
    VENDOR = "vendor"
    ADMIN = "admin"


class EventStatus(Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    LIVE = "live"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EventType(Enum):
    INDIVIDUAL = "individual"
    TEAM = "team"


class EventLevel(Enum):
    COLLEGE = "college"
    INTER_COLLEGE = "inter_college"
    STATE = "state"
    NATIONAL = "national"


class EventMode(Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"


class FeeType(Enum):
    FREE = "free"
    PAID = "paid"


class FeeStructure(Enum):
    PER_PERSON = "per_person"
    PER_TEAM_FLAT = "per_team_flat"
    PER_PERSON_WITH_CAP = "per_person_with_cap"


class PrizePoolType(Enum):
    MONETARY = "monetary"
    NON_MONETARY = "non_monetary"


class TicketStatus(Enum):
    ACTIVE = "active"
    USED = "used"
    CANCELLED = "cancelled"


class CheckInOutcome(Enum):
    CHECKED_IN = "checked_in"
    ALREADY_CHECKED_IN = "already_checked_in"


class RegistrationType(Enum):
    INDIVIDUAL = "individual"
    TEAM_BULK = "team_bulk"
    TEAM_JOIN = "team_join"


class PaymentStatus(Enum):
    PAID = "paid"
    PENDING = "pending"
    REFUNDED = "refunded"


class TransactionType(Enum):
    CREDIT = "credit"
    DEBIT = "debit"


def choices(enum_cls: type[Enum]) -> list[tuple[str, str]]:
    """Django-style choices from an enum."""
    return [(member.value, member.value.replace("_", " ").title()) for member in enum_cls]
