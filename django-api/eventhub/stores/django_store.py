"""Django ORM implementation of the stores.

Every method is a single independent query or write. Backend failures are
translated to StoreError so services never see ORM exceptions.
"""

import functools
import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Mapping, TypeVar
from uuid import UUID

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, Model

from eventhub import models as orm
from eventhub.domain import (
    Event,
    EventId,
    FeeConfig,
    Money,
    Notification,
    NotificationId,
    Registration,
    RegistrationId,
    RegistrationMember,
    TeamSize,
    Ticket,
    TicketCode,
    UserAccount,
    UserId,
    WalletTransaction,
)
from eventhub.domain.enums import (
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
from eventhub.domain.errors import DuplicateKeyError, StoreError
from eventhub.stores.interfaces import (
    EventStore,
    NotificationStore,
    RegistrationStore,
    TicketStore,
    UserStore,
    WalletStore,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Domain field name -> ORM column, where they differ.
_FOREIGN_KEYS = {
    "created_by": "created_by_id",
    "checked_in_by": "checked_in_by_id",
}


def _translate_errors(table: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except DatabaseError as exc:
                logger.error("Store failure on %s: %s", table, exc)
                raise StoreError(f"{table}: {exc}") from exc

        return wrapper

    return decorator


def _insert(row: Model, table: str) -> None:
    """INSERT ``row``. Only a clash on its primary key is a DuplicateKeyError;
    foreign-key and check violations propagate as StoreError.
    """
    try:
        with transaction.atomic():
            row.save(force_insert=True)
    except IntegrityError as exc:
        if type(row).objects.filter(pk=row.pk).exists():
            logger.warning("Duplicate key on %s: %s", table, row.pk)
            raise DuplicateKeyError(table, str(row.pk)) from exc
        raise


def _column_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, (EventId, UserId, RegistrationId, NotificationId)):
        return value.value
    if isinstance(value, TicketCode):
        return value.value
    return value


def _columns(patch: Mapping[str, Any]) -> dict[str, Any]:
    return {_FOREIGN_KEYS.get(name, name): _column_value(value) for name, value in patch.items()}


def _optional_user(value: UUID | None) -> UserId | None:
    return UserId(value) if value else None


def _event_to_domain(row: orm.Event) -> Event:
    return Event(
        id=EventId(row.id),
        name=row.name,
        tagline=row.tagline,
        description=row.description,
        event_type=EventType(row.event_type),
        event_level=EventLevel(row.event_level),
        event_mode=EventMode(row.event_mode),
        created_by=UserId(row.created_by_id),
        status=EventStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
        fee=FeeConfig(
            fee_type=FeeType(row.fee_type),
            fee_structure=FeeStructure(row.fee_structure) if row.fee_structure else None,
            fee_per_person=Money(Decimal(row.fee_per_person)),
            team_flat_fee=Money(Decimal(row.team_flat_fee)),
            team_fee_cap=Money(Decimal(row.team_fee_cap)),
        ).normalized(),
        team_size=TeamSize(
            min_size=row.min_team_size,
            max_size=row.max_team_size,
            max_size_custom=row.max_team_size_custom,
        ),
        team_name_required=row.team_name_required,
        registration_start=row.registration_start,
        registration_end=row.registration_end,
        event_start=row.event_start,
        event_end=row.event_end,
        result_date=row.result_date,
        venue_name=row.venue_name,
        venue_address=row.venue_address,
        platform_name=row.platform_name,
        meeting_link=row.meeting_link,
        contact_email=row.contact_email,
        contact_phone=row.contact_phone,
        prize_pool_amount=Money(Decimal(row.prize_pool_amount)),
        prize_pool_type=PrizePoolType(row.prize_pool_type),
        prize_breakdown=tuple(
            (item["position"], item["amount"]) for item in row.prize_breakdown or []
        ),
        certificate_types=tuple(row.certificate_types or []),
        instagram_link=row.instagram_link,
        youtube_link=row.youtube_link,
        website_link=row.website_link,
        rules_and_regulations=row.rules_and_regulations,
        admin_notes=row.admin_notes,
    )


def _event_to_columns(event: Event) -> dict[str, Any]:
    return {
        "id": event.id.value,
        "name": event.name,
        "tagline": event.tagline,
        "description": event.description,
        "event_type": event.event_type.value,
        "event_level": event.event_level.value,
        "event_mode": event.event_mode.value,
        "created_by_id": event.created_by.value,
        "status": event.status.value,
        "created_at": event.created_at,
        "updated_at": event.updated_at,
        "fee_type": event.fee.fee_type.value,
        "fee_structure": event.fee.fee_structure.value if event.fee.fee_structure else None,
        "fee_per_person": event.fee.fee_per_person.amount,
        "team_flat_fee": event.fee.team_flat_fee.amount,
        "team_fee_cap": event.fee.team_fee_cap.amount,
        "min_team_size": event.team_size.min_size,
        "max_team_size": event.team_size.max_size,
        "max_team_size_custom": event.team_size.max_size_custom,
        "team_name_required": event.team_name_required,
        "registration_start": event.registration_start,
        "registration_end": event.registration_end,
        "event_start": event.event_start,
        "event_end": event.event_end,
        "result_date": event.result_date,
        "venue_name": event.venue_name,
        "venue_address": event.venue_address,
        "platform_name": event.platform_name,
        "meeting_link": event.meeting_link,
        "contact_email": event.contact_email,
        "contact_phone": event.contact_phone,
        "prize_pool_amount": event.prize_pool_amount.amount,
        "prize_pool_type": event.prize_pool_type.value,
        "prize_breakdown": [
            {"position": position, "amount": amount} for position, amount in event.prize_breakdown
        ],
        "certificate_types": list(event.certificate_types),
        "instagram_link": event.instagram_link,
        "youtube_link": event.youtube_link,
        "website_link": event.website_link,
        "rules_and_regulations": event.rules_and_regulations,
        "admin_notes": event.admin_notes,
    }


def _ticket_to_domain(row: orm.Ticket) -> Ticket:
    return Ticket(
        code=TicketCode(row.code),
        event_id=EventId(row.event_id),
        member_name=row.member_name,
        member_email=row.member_email,
        issued_at=row.issued_at,
        status=TicketStatus(row.status),
        registration_id=RegistrationId(row.registration_id) if row.registration_id else None,
        owner_id=_optional_user(row.owner_id),
        checked_in_at=row.checked_in_at,
        checked_in_by=_optional_user(row.checked_in_by_id),
    )


def _member_to_json(member: RegistrationMember) -> dict[str, Any]:
    return {
        "uid": str(member.user_id) if member.user_id else None,
        "name": member.name,
        "email": member.email,
        "phone": member.phone,
        "college": member.college,
        "ticket_id": str(member.ticket_code) if member.ticket_code else None,
    }


def _member_from_json(data: Mapping[str, Any]) -> RegistrationMember:
    return RegistrationMember(
        name=data["name"],
        email=data["email"],
        phone=data.get("phone", ""),
        college=data.get("college", ""),
        user_id=UserId.from_string(data["uid"]) if data.get("uid") else None,
        ticket_code=TicketCode(data["ticket_id"]) if data.get("ticket_id") else None,
    )


def _registration_to_domain(row: orm.Registration) -> Registration:
    return Registration(
        id=RegistrationId(row.id),
        event_id=EventId(row.event_id),
        type=RegistrationType(row.type),
        members=tuple(_member_from_json(member) for member in row.members),
        total_fee=Money(Decimal(row.total_fee)),
        fee_breakdown=dict(row.fee_breakdown),
        payment_status=PaymentStatus(row.payment_status),
        registered_by=UserId(row.registered_by_id),
        registered_at=row.registered_at,
        team_code=row.team_code,
        team_name=row.team_name,
        team_leader_id=_optional_user(row.team_leader_id),
    )


def _account_to_domain(row: orm.UserAccount) -> UserAccount:
    return UserAccount(
        id=UserId(row.id),
        name=row.name,
        email=row.email,
        role=Role(row.role),
        wallet_balance=Money(Decimal(row.wallet_balance)),
    )


def _transaction_to_domain(row: orm.WalletTransaction) -> WalletTransaction:
    return WalletTransaction(
        id=row.id,
        user_id=UserId(row.user_id),
        type=TransactionType(row.type),
        amount=Money(Decimal(row.amount)),
        description=row.description,
        created_at=row.created_at,
        event_id=EventId(row.event_id) if row.event_id else None,
    )


def _notification_to_domain(row: orm.Notification) -> Notification:
    return Notification(
        id=NotificationId(row.id),
        recipient_id=UserId(row.recipient_id),
        title=row.title,
        body=row.body,
        type=row.type,
        created_at=row.created_at,
        related_id=row.related_id,
        read=row.read,
    )


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    @_translate_errors("events")
    def list_events(
        self,
        status: EventStatus | None = None,
        created_by: UserId | None = None,
        limit: int | None = None,
    ) -> list[Event]:
        queryset = orm.Event.objects.order_by("-created_at")
        if status is not None:
            queryset = queryset.filter(status=status.value)
        if created_by is not None:
            queryset = queryset.filter(created_by_id=created_by.value)
        if limit is not None:
            queryset = queryset[:limit]
        return [_event_to_domain(row) for row in queryset]

    @_translate_errors("events")
    def get_event(self, event_id: EventId) -> Event | None:
        row = orm.Event.objects.filter(pk=event_id.value).first()
        return _event_to_domain(row) if row else None

    @_translate_errors("events")
    def create_event(self, event: Event) -> Event:
        row = orm.Event(**_event_to_columns(event))
        _insert(row, "events")
        return _event_to_domain(row)

    @_translate_errors("events")
    def update_event(self, event_id: EventId, patch: Mapping[str, Any]) -> Event:
        # save() rather than update() so post_save reaches the cache signals.
        row = orm.Event.objects.filter(pk=event_id.value).first()
        if row is None:
            raise StoreError(f"events row {event_id} does not exist")
        columns = _columns(patch)
        for name, value in columns.items():
            setattr(row, name, value)
        row.save(update_fields=list(columns))
        return _event_to_domain(row)

    @_translate_errors("events")
    def count_by_status(self) -> dict[EventStatus, int]:
        counts = {status: 0 for status in EventStatus}
        rows = orm.Event.objects.order_by().values("status").annotate(total=Count("id"))
        for row in rows:
            counts[EventStatus(row["status"])] = row["total"]
        return counts


class DjangoTicketStore(TicketStore):
    """Relational ticket store using Django ORM."""

    @_translate_errors("tickets")
    def get_ticket(self, code: TicketCode) -> Ticket | None:
        row = orm.Ticket.objects.filter(pk=code.value).first()
        return _ticket_to_domain(row) if row else None

    @_translate_errors("tickets")
    def create_ticket(self, ticket: Ticket) -> Ticket:
        row = orm.Ticket(
            code=ticket.code.value,
            event_id=ticket.event_id.value,
            registration_id=ticket.registration_id.value if ticket.registration_id else None,
            member_name=ticket.member_name,
            member_email=ticket.member_email,
            owner_id=ticket.owner_id.value if ticket.owner_id else None,
            status=ticket.status.value,
            checked_in_at=ticket.checked_in_at,
            checked_in_by_id=ticket.checked_in_by.value if ticket.checked_in_by else None,
            issued_at=ticket.issued_at,
        )
        _insert(row, "tickets")
        return _ticket_to_domain(row)

    @_translate_errors("tickets")
    def update_ticket(self, code: TicketCode, patch: Mapping[str, Any]) -> Ticket:
        updated = orm.Ticket.objects.filter(pk=code.value).update(**_columns(patch))
        if not updated:
            raise StoreError(f"tickets row {code} does not exist")
        return _ticket_to_domain(orm.Ticket.objects.get(pk=code.value))

    @_translate_errors("tickets")
    def list_for_owner(self, owner_id: UserId) -> list[Ticket]:
        rows = orm.Ticket.objects.filter(owner_id=owner_id.value).order_by("-issued_at")
        return [_ticket_to_domain(row) for row in rows]


class DjangoRegistrationStore(RegistrationStore):
    """Relational registration store using Django ORM."""

    @_translate_errors("registrations")
    def create_registration(self, registration: Registration) -> Registration:
        row = orm.Registration(
            id=registration.id.value,
            event_id=registration.event_id.value,
            type=registration.type.value,
            team_code=registration.team_code,
            team_name=registration.team_name,
            team_leader_id=registration.team_leader_id.value if registration.team_leader_id else None,
            members=[_member_to_json(member) for member in registration.members],
            total_fee=registration.total_fee.amount,
            fee_breakdown=dict(registration.fee_breakdown),
            payment_status=registration.payment_status.value,
            registered_by_id=registration.registered_by.value,
            registered_at=registration.registered_at,
        )
        _insert(row, "registrations")
        return _registration_to_domain(row)

    @_translate_errors("registrations")
    def list_for_event(self, event_id: EventId, limit: int | None = None) -> list[Registration]:
        queryset = orm.Registration.objects.filter(event_id=event_id.value).order_by("-registered_at")
        if limit is not None:
            queryset = queryset[:limit]
        return [_registration_to_domain(row) for row in queryset]


class DjangoUserStore(UserStore):
    """Relational user account store using Django ORM."""

    @_translate_errors("users")
    def get_account(self, user_id: UserId) -> UserAccount | None:
        row = orm.UserAccount.objects.filter(pk=user_id.value).first()
        return _account_to_domain(row) if row else None

    @_translate_errors("users")
    def get_account_for_login(self, auth_user_id: int) -> UserAccount | None:
        row = orm.UserAccount.objects.filter(user_id=auth_user_id).first()
        return _account_to_domain(row) if row else None

    @_translate_errors("users")
    def set_wallet_balance(self, user_id: UserId, balance: Money) -> UserAccount:
        updated = orm.UserAccount.objects.filter(pk=user_id.value).update(
            wallet_balance=balance.amount
        )
        if not updated:
            raise StoreError(f"users row {user_id} does not exist")
        return _account_to_domain(orm.UserAccount.objects.get(pk=user_id.value))


class DjangoWalletStore(WalletStore):
    """Relational wallet ledger using Django ORM."""

    @_translate_errors("wallet_transactions")
    def add_transaction(self, entry: WalletTransaction) -> WalletTransaction:
        row = orm.WalletTransaction(
            id=entry.id,
            user_id=entry.user_id.value,
            type=entry.type.value,
            amount=entry.amount.amount,
            description=entry.description,
            event_id=entry.event_id.value if entry.event_id else None,
            created_at=entry.created_at,
        )
        _insert(row, "wallet_transactions")
        return _transaction_to_domain(row)

    @_translate_errors("wallet_transactions")
    def list_transactions(self, user_id: UserId) -> list[WalletTransaction]:
        rows = orm.WalletTransaction.objects.filter(user_id=user_id.value).order_by("-created_at")
        return [_transaction_to_domain(row) for row in rows]


class DjangoNotificationStore(NotificationStore):
    """Relational notification store using Django ORM."""

    @_translate_errors("notifications")
    def create_notification(self, notification: Notification) -> Notification:
        row = orm.Notification(
            id=notification.id.value,
            recipient_id=notification.recipient_id.value,
            title=notification.title,
            body=notification.body,
            type=notification.type,
            related_id=notification.related_id,
            read=notification.read,
            created_at=notification.created_at,
        )
        _insert(row, "notifications")
        return _notification_to_domain(row)

    @_translate_errors("notifications")
    def get_notification(self, notification_id: NotificationId) -> Notification | None:
        row = orm.Notification.objects.filter(pk=notification_id.value).first()
        return _notification_to_domain(row) if row else None

    @_translate_errors("notifications")
    def list_for_recipient(self, recipient_id: UserId) -> list[Notification]:
        rows = orm.Notification.objects.filter(recipient_id=recipient_id.value).order_by(
            "-created_at"
        )
        return [_notification_to_domain(row) for row in rows]

    @_translate_errors("notifications")
    def mark_read(self, notification_id: NotificationId) -> Notification:
        updated = orm.Notification.objects.filter(pk=notification_id.value).update(read=True)
        if not updated:
            raise StoreError(f"notifications row {notification_id} does not exist")
        return _notification_to_domain(orm.Notification.objects.get(pk=notification_id.value))
