"""Wires services to the Django stores and resolves the acting user."""

from typing import Callable, TypeVar

from django.db import close_old_connections, connection
from rest_framework.exceptions import NotAuthenticated
from rest_framework.request import Request

from eventhub.conf import get_setting
from eventhub.domain.models import Actor
from eventhub.services.draft_service import DraftService
from eventhub.services.event_service import EventService
from eventhub.services.lifecycle_service import LifecycleService
from eventhub.services.notification_service import NotificationService
from eventhub.services.registration_service import RegistrationService
from eventhub.services.session import resolve_actor
from eventhub.services.ticket_service import TicketService
from eventhub.services.wallet_service import WalletService
from eventhub.stores.django_store import (
    DjangoEventStore,
    DjangoNotificationStore,
    DjangoRegistrationStore,
    DjangoTicketStore,
    DjangoUserStore,
    DjangoWalletStore,
)

T = TypeVar("T")


def event_service() -> EventService:
    return EventService(DjangoEventStore())


def lifecycle_service() -> LifecycleService:
    return LifecycleService(DjangoEventStore(), DjangoNotificationStore())


def draft_service() -> DraftService:
    return DraftService(DjangoEventStore())


def ticket_service() -> TicketService:
    return TicketService(
        DjangoTicketStore(),
        DjangoEventStore(),
        max_attempts=get_setting("TICKET_ISSUE_MAX_ATTEMPTS"),
    )


def registration_service() -> RegistrationService:
    return RegistrationService(
        DjangoEventStore(), DjangoRegistrationStore(), ticket_service(), DjangoUserStore()
    )


def wallet_service() -> WalletService:
    return WalletService(DjangoUserStore(), DjangoWalletStore())


def notification_service() -> NotificationService:
    return NotificationService(DjangoNotificationStore())


def with_own_connection(func: Callable[[], T]) -> Callable[[], T]:
    """Wrap ``func`` for a worker thread.

    Worker threads never see request_started/request_finished, so the
    wrapper drops a stale connection before the query and closes the
    thread's connection afterwards.
    """

    def run() -> T:
        close_old_connections()
        try:
            return func()
        finally:
            connection.close()

    return run


def optional_actor(request: Request) -> Actor | None:
    """The actor behind ``request``, or None when there is no usable session."""
    user = request.user
    if not user or not user.is_authenticated:
        return None
    users = DjangoUserStore()

    def load() -> Actor | None:
        account = users.get_account_for_login(user.pk)
        if account is None:
            return None
        return Actor(user_id=account.id, role=account.role, email=account.email)

    timeout = get_setting("SESSION_TIMEOUT_SECONDS")
    if timeout > 0:
        load = with_own_connection(load)
    return resolve_actor(load, timeout)


def current_actor(request: Request) -> Actor:
    actor = optional_actor(request)
    if actor is None:
        raise NotAuthenticated()
    return actor
