"""Domain error codes for the eventhub module."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    TICKET_INVALID = "TICKET_INVALID"
    ISSUANCE_FAILED = "ISSUANCE_FAILED"
    STORE_FAILURE = "STORE_FAILURE"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    NOTIFICATION_NOT_FOUND = "NOTIFICATION_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    REGISTRATION_CLOSED = "REGISTRATION_CLOSED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when input to a fee computation or draft submission is malformed."""

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)
        self.fields = tuple(fields)


class InvalidTransitionError(DomainError):
    """Raised when a lifecycle transition is attempted from a disallowed state."""

    def __init__(self, transition: str, current_status: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Cannot {transition} an event that is {current_status}",
        )
        self.transition = transition
        self.current_status = current_status


class TicketInvalidError(DomainError):
    """Raised when a cancelled ticket is checked in."""

    def __init__(self, ticket_code: str, status: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_INVALID,
            message=f"Ticket is {status}",
        )
        self.ticket_code = ticket_code
        self.status = status


class IssuanceError(DomainError):
    """Raised when ticket code generation runs out of attempts."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            code=ErrorCode.ISSUANCE_FAILED,
            message="Could not issue a unique ticket, please retry the registration",
        )
        self.attempts = attempts


class StoreError(DomainError):
    """Raised when a data store operation fails."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.STORE_FAILURE) -> None:
        super().__init__(code=code, message=message)


class DuplicateKeyError(StoreError):
    """Raised by stores when an insert collides with an existing key."""

    def __init__(self, table: str, key: str) -> None:
        super().__init__(f"Duplicate key in {table}", code=ErrorCode.DUPLICATE_KEY)
        self.table = table
        self.key = key


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class TicketNotFoundError(DomainError):
    """Raised when a ticket code does not match any ticket."""

    def __init__(self, ticket_code: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message="Ticket not found",
        )
        self.ticket_code = ticket_code


class UserNotFoundError(DomainError):
    """Raised when a user account is not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
        )
        self.user_id = user_id


class NotificationNotFoundError(DomainError):
    """Raised when a notification is not found for its recipient."""

    def __init__(self, notification_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOTIFICATION_NOT_FOUND,
            message="Notification not found",
        )
        self.notification_id = notification_id


class PermissionDeniedError(DomainError):
    """Raised when the acting user may not perform an operation."""

    def __init__(self, message: str = "Not allowed") -> None:
        super().__init__(code=ErrorCode.PERMISSION_DENIED, message=message)


class RegistrationClosedError(DomainError):
    """Raised when registering for an event that is not live."""

    def __init__(self, event_id: str, status: str) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_CLOSED,
            message=f"Registrations are closed for events that are {status}",
        )
        self.event_id = event_id


class InsufficientFundsError(DomainError):
    """Raised when a debit exceeds the stored wallet balance."""

    def __init__(self, user_id: str, requested: str, available: str) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_FUNDS,
            message=f"Insufficient wallet balance: requested {requested}, available {available}",
        )
        self.user_id = user_id

