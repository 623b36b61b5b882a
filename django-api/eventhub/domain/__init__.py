from eventhub.domain.models import (
    Actor,
    CheckInResult,
    Event,
    FeeConfig,
    Notification,
    Registration,
    RegistrationMember,
    Ticket,
    UserAccount,
    WalletTransaction,
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

__all__ = [
    "Actor",
    "CheckInResult",
    "Event",
    "FeeConfig",
    "Notification",
    "Registration",
    "RegistrationMember",
    "Ticket",
    "UserAccount",
    "WalletTransaction",
    "EventId",
    "Money",
    "NotificationId",
    "RegistrationId",
    "TeamSize",
    "TicketCode",
    "UserId",
]
