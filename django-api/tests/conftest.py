"""Pytest configuration and shared fixtures."""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from eventhub.domain import Actor, Event, EventId, Money, UserAccount, UserId
from eventhub.domain.enums import EventLevel, EventMode, EventStatus, EventType, Role
from eventhub.stores.memory import (
    InMemoryEventStore,
    InMemoryNotificationStore,
    InMemoryRegistrationStore,
    InMemoryTicketStore,
    InMemoryUserStore,
    InMemoryWalletStore,
)

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock; advance() moves it forward."""

    def __init__(self, start: datetime = NOW) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def inline_session_resolution(settings):
    # The test database transaction is not visible from worker threads.
    settings.EVENTHUB = {**settings.EVENTHUB, "SESSION_TIMEOUT_SECONDS": 0}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# In-memory stores


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def ticket_store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def registration_store() -> InMemoryRegistrationStore:
    return InMemoryRegistrationStore()


@pytest.fixture
def notification_store() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def wallet_store() -> InMemoryWalletStore:
    return InMemoryWalletStore()


def _actor(role: Role) -> Actor:
    return Actor(user_id=UserId(uuid.uuid4()), role=role, email=f"{role.value}@example.com")


@pytest.fixture
def organizer() -> Actor:
    return _actor(Role.ORGANIZER)


@pytest.fixture
def other_organizer() -> Actor:
    return _actor(Role.ORGANIZER)


@pytest.fixture
def admin() -> Actor:
    return _actor(Role.ADMIN)


@pytest.fixture
def participant() -> Actor:
    return _actor(Role.PARTICIPANT)


@pytest.fixture
def make_event(event_store, organizer, clock):
    """Insert an event into the in-memory store; keyword arguments override defaults."""

    def _make(**overrides) -> Event:
        values = {
            "id": EventId(uuid.uuid4()),
            "name": "Hack Night",
            "tagline": "Build something in a night",
            "description": "",
            "event_type": EventType.INDIVIDUAL,
            "event_level": EventLevel.COLLEGE,
            "event_mode": EventMode.OFFLINE,
            "created_by": organizer.user_id,
            "status": EventStatus.DRAFT,
            "created_at": clock(),
            "updated_at": clock(),
        }
        values.update(overrides)
        return event_store.create_event(Event(**values))

    return _make


@pytest.fixture
def make_wallet_user(user_store):
    def _make(balance: str = "0") -> UserAccount:
        return user_store.add(
            UserAccount(
                id=UserId(uuid.uuid4()),
                name="Wallet Owner",
                email="owner@example.com",
                role=Role.PARTICIPANT,
                wallet_balance=Money(Decimal(balance)),
            )
        )

    return _make


# Database


@pytest.fixture
def make_account(db, django_user_model):
    """Create an auth user with its eventhub account; returns (user, account row)."""

    def _make(role: Role = Role.PARTICIPANT, balance: str = "0"):
        from eventhub import models as orm

        username = f"{role.value}-{uuid.uuid4().hex[:8]}"
        user = django_user_model.objects.create_user(username=username, password="secret")
        account = orm.UserAccount.objects.create(
            user=user,
            name=username,
            email=f"{username}@example.com",
            role=role.value,
            wallet_balance=Decimal(balance),
        )
        return user, account

    return _make


@pytest.fixture
def make_db_event(db):
    def _make(owner, **overrides):
        from eventhub import models as orm

        values = {
            "name": "Hack Night",
            "tagline": "Build something in a night",
            "event_type": EventType.INDIVIDUAL.value,
            "event_level": EventLevel.COLLEGE.value,
            "event_mode": EventMode.OFFLINE.value,
            "status": EventStatus.LIVE.value,
            "created_by": owner,
        }
        values.update(overrides)
        return orm.Event.objects.create(**values)

    return _make
