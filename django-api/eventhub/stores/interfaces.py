"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every write is an
independent operation; no store offers cross-table transactions.

Implementations raise:
    DuplicateKeyError: when an insert collides with an existing key.
    StoreError: for any other backend failure (constraint, network, timeout).
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from eventhub.domain import (
    Event,
    EventId,
    Money,
    Notification,
    NotificationId,
    Registration,
    Ticket,
    TicketCode,
    UserAccount,
    UserId,
    WalletTransaction,
)
from eventhub.domain.enums import EventStatus


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(
        self,
        status: EventStatus | None = None,
        created_by: UserId | None = None,
        limit: int | None = None,
    ) -> list[Event]:
        """Return events matching the filters, ordered by created_at descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def create_event(self, event: Event) -> Event:
        """Insert a new event."""
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, patch: Mapping[str, Any]) -> Event:
        """Apply a partial update and return the stored event.

        Only the fields named in ``patch`` are written.
        """
        ...

    @abstractmethod
    def count_by_status(self) -> dict[EventStatus, int]:
        """Return the number of events per status."""
        ...


class TicketStore(ABC):
    """Interface for ticket persistence operations."""

    @abstractmethod
    def get_ticket(self, code: TicketCode) -> Ticket | None:
        """Return a ticket by code, or None if not found."""
        ...

    @abstractmethod
    def create_ticket(self, ticket: Ticket) -> Ticket:
        """Insert a ticket; raises DuplicateKeyError if the code exists."""
        ...

    @abstractmethod
    def update_ticket(self, code: TicketCode, patch: Mapping[str, Any]) -> Ticket:
        """Apply a partial update and return the stored ticket."""
        ...

    @abstractmethod
    def list_for_owner(self, owner_id: UserId) -> list[Ticket]:
        """Return an owner's tickets ordered by issued_at descending."""
        ...


class RegistrationStore(ABC):
    """Interface for registration persistence operations."""

    @abstractmethod
    def create_registration(self, registration: Registration) -> Registration:
        """Insert a registration."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId, limit: int | None = None) -> list[Registration]:
        """Return registrations for an event, newest first."""
        ...


class UserStore(ABC):
    """Interface for user account operations."""

    @abstractmethod
    def get_account(self, user_id: UserId) -> UserAccount | None:
        """Return an account by ID, or None if not found."""
        ...

    @abstractmethod
    def get_account_for_login(self, auth_user_id: int) -> UserAccount | None:
        """Return the account linked to an authenticated login, or None."""
        ...

    @abstractmethod
    def set_wallet_balance(self, user_id: UserId, balance: Money) -> UserAccount:
        """Overwrite the denormalized wallet balance."""
        ...


class WalletStore(ABC):
    """Interface for the append-only wallet ledger."""

    @abstractmethod
    def add_transaction(self, entry: WalletTransaction) -> WalletTransaction:
        """Append a ledger entry."""
        ...

    @abstractmethod
    def list_transactions(self, user_id: UserId) -> list[WalletTransaction]:
        """Return a user's ledger, newest first."""
        ...


class NotificationStore(ABC):
    """Interface for notification persistence operations."""

    @abstractmethod
    def create_notification(self, notification: Notification) -> Notification:
        """Insert a notification."""
        ...

    @abstractmethod
    def get_notification(self, notification_id: NotificationId) -> Notification | None:
        """Return a notification by ID, or None if not found."""
        ...

    @abstractmethod
    def list_for_recipient(self, recipient_id: UserId) -> list[Notification]:
        """Return a user's notifications, newest first."""
        ...

    @abstractmethod
    def mark_read(self, notification_id: NotificationId) -> Notification:
        """Flag a notification as read."""
        ...
