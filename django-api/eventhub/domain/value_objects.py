"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Self
from uuid import UUID

TICKET_PREFIX = "EVN-TKT-"
TICKET_SUFFIX_LENGTH = 6
TICKET_CODE_PATTERN = re.compile(rf"^{re.escape(TICKET_PREFIX)}[A-Z0-9]{{{TICKET_SUFFIX_LENGTH}}}$")


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Unique identifier for a user account."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RegistrationId:
    """Unique identifier for a Registration."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class NotificationId:
    """Unique identifier for a Notification."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TicketCode:
    """Human-readable ticket identifier, e.g. EVN-TKT-A3F9X2."""

    value: str

    def __post_init__(self) -> None:
        if not TICKET_CODE_PATTERN.match(self.value):
            raise ValueError(f"Invalid ticket code: {self.value!r}")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse user input; lookups are whitespace and case insensitive."""
        return cls(value=value.strip().upper())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    @classmethod
    def parse(cls, value: object) -> Self:
        """Build Money from a number or numeric string; blank means zero."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.zero()
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a valid amount: {value!r}") from exc
        if not amount.is_finite():
            raise ValueError(f"Not a valid amount: {value!r}")
        return cls(amount=amount)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        return Money(self.amount - other.amount)

    def __mul__(self, factor: int) -> "Money":
        return Money(self.amount * factor)

    def __lt__(self, other: "Money") -> bool:
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        return self.amount <= other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class TeamSize:
    """Team-size bounds; only meaningful for team events."""

    min_size: int = 2
    max_size: int = 5
    max_size_custom: int | None = None

    @property
    def effective_max(self) -> int:
        return self.max_size_custom if self.max_size_custom else self.max_size

    def is_consistent(self) -> bool:
        return 1 <= self.min_size <= self.effective_max

    def allows(self, members: int) -> bool:
        return self.min_size <= members <= self.effective_max
