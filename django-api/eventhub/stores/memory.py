"""In-memory implementation of the stores.

Used by service unit tests and local tooling. Mirrors the Django store
semantics: inserts reject duplicate keys, updates are partial.
"""

from dataclasses import replace
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
from eventhub.domain.errors import DuplicateKeyError, StoreError
from eventhub.stores.interfaces import (
    EventStore,
    NotificationStore,
    RegistrationStore,
    TicketStore,
    UserStore,
    WalletStore,
)


def _newest_first(items, key):
    return sorted(reversed(list(items)), key=key, reverse=True)


class InMemoryEventStore(EventStore):
    def __init__(self) -> None:
        self.events: dict[EventId, Event] = {}

    def list_events(
        self,
        status: EventStatus | None = None,
        created_by: UserId | None = None,
        limit: int | None = None,
    ) -> list[Event]:
        matches = [
            event
            for event in self.events.values()
            if (status is None or event.status is status)
            and (created_by is None or event.created_by == created_by)
        ]
        ordered = _newest_first(matches, key=lambda event: event.created_at)
        return ordered[:limit] if limit is not None else ordered

    def get_event(self, event_id: EventId) -> Event | None:
        return self.events.get(event_id)

    def create_event(self, event: Event) -> Event:
        if event.id in self.events:
            raise DuplicateKeyError("events", str(event.id))
        self.events[event.id] = event
        return event

    def update_event(self, event_id: EventId, patch: Mapping[str, Any]) -> Event:
        current = self.events.get(event_id)
        if current is None:
            raise StoreError(f"events row {event_id} does not exist")
        updated = replace(current, **patch)
        self.events[event_id] = updated
        return updated

    def count_by_status(self) -> dict[EventStatus, int]:
        counts = {status: 0 for status in EventStatus}
        for event in self.events.values():
            counts[event.status] += 1
        return counts


class InMemoryTicketStore(TicketStore):
    def __init__(self) -> None:
        self.tickets: dict[TicketCode, Ticket] = {}

    def get_ticket(self, code: TicketCode) -> Ticket | None:
        return self.tickets.get(code)

    def create_ticket(self, ticket: Ticket) -> Ticket:
        if ticket.code in self.tickets:
            raise DuplicateKeyError("tickets", str(ticket.code))
        self.tickets[ticket.code] = ticket
        return ticket

    def update_ticket(self, code: TicketCode, patch: Mapping[str, Any]) -> Ticket:
        current = self.tickets.get(code)
        if current is None:
            raise StoreError(f"tickets row {code} does not exist")
        updated = replace(current, **patch)
        self.tickets[code] = updated
        return updated

    def list_for_owner(self, owner_id: UserId) -> list[Ticket]:
        owned = [ticket for ticket in self.tickets.values() if ticket.owner_id == owner_id]
        return _newest_first(owned, key=lambda ticket: ticket.issued_at)


class InMemoryRegistrationStore(RegistrationStore):
    def __init__(self) -> None:
        self.registrations: list[Registration] = []

    def create_registration(self, registration: Registration) -> Registration:
        self.registrations.append(registration)
        return registration

    def list_for_event(self, event_id: EventId, limit: int | None = None) -> list[Registration]:
        matches = [r for r in self.registrations if r.event_id == event_id]
        ordered = _newest_first(matches, key=lambda r: r.registered_at)
        return ordered[:limit] if limit is not None else ordered


class InMemoryUserStore(UserStore):
    def __init__(self, accounts: list[UserAccount] | None = None) -> None:
        self.accounts: dict[UserId, UserAccount] = {a.id: a for a in accounts or []}
        self.logins: dict[int, UserId] = {}

    def add(self, account: UserAccount, auth_user_id: int | None = None) -> UserAccount:
        self.accounts[account.id] = account
        if auth_user_id is not None:
            self.logins[auth_user_id] = account.id
        return account

    def get_account(self, user_id: UserId) -> UserAccount | None:
        return self.accounts.get(user_id)

    def get_account_for_login(self, auth_user_id: int) -> UserAccount | None:
        user_id = self.logins.get(auth_user_id)
        return self.accounts.get(user_id) if user_id else None

    def set_wallet_balance(self, user_id: UserId, balance: Money) -> UserAccount:
        current = self.accounts.get(user_id)
        if current is None:
            raise StoreError(f"users row {user_id} does not exist")
        updated = replace(current, wallet_balance=balance)
        self.accounts[user_id] = updated
        return updated


class InMemoryWalletStore(WalletStore):
    def __init__(self) -> None:
        self.transactions: list[WalletTransaction] = []

    def add_transaction(self, entry: WalletTransaction) -> WalletTransaction:
        self.transactions.append(entry)
        return entry

    def list_transactions(self, user_id: UserId) -> list[WalletTransaction]:
        owned = [t for t in self.transactions if t.user_id == user_id]
        return _newest_first(owned, key=lambda t: t.created_at)


class InMemoryNotificationStore(NotificationStore):
    def __init__(self) -> None:
        self.notifications: dict[NotificationId, Notification] = {}

    def create_notification(self, notification: Notification) -> Notification:
        self.notifications[notification.id] = notification
        return notification

    def get_notification(self, notification_id: NotificationId) -> Notification | None:
        return self.notifications.get(notification_id)

    def list_for_recipient(self, recipient_id: UserId) -> list[Notification]:
        owned = [n for n in self.notifications.values() if n.recipient_id == recipient_id]
        return _newest_first(owned, key=lambda n: n.created_at)

    def mark_read(self, notification_id: NotificationId) -> Notification:
        current = self.notifications.get(notification_id)
        if current is None:
            raise StoreError(f"notifications row {notification_id} does not exist")
        updated = replace(current, read=True)
        self.notifications[notification_id] = updated
        return updated
