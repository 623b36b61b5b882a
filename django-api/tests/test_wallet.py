"""Unit tests for the wallet ledger.

Run with: pytest tests/test_wallet.py -v
"""

import uuid
from decimal import Decimal

import pytest

from eventhub.domain import Money, UserAccount, UserId
from eventhub.domain.enums import Role, TransactionType
from eventhub.domain.errors import (
    InsufficientFundsError,
    StoreError,
    UserNotFoundError,
    ValidationError,
)
from eventhub.services.wallet_service import WalletService
from eventhub.stores.memory import InMemoryUserStore


class FailingBalanceStore(InMemoryUserStore):
    """Accepts reads but fails every balance write while ``failing`` is set."""

    failing = True

    def set_wallet_balance(self, user_id, balance):
        if self.failing:
            raise StoreError("connection reset")
        return super().set_wallet_balance(user_id, balance)


@pytest.fixture
def service(user_store, wallet_store, clock) -> WalletService:
    return WalletService(user_store, wallet_store, clock)


class TestCreditDebit:
    """Tests for credit and debit."""

    def test_sequence_matches_ledger(self, service, make_wallet_user, clock):
        """Credits 500 and 1000 then debit 200 leave 1300 in both views."""
        user = make_wallet_user()
        service.credit(user.id, "500", "Top-up")
        clock.advance(seconds=1)
        service.credit(user.id, Decimal("1000"), "Top-up")
        clock.advance(seconds=1)
        service.debit(user.id, 200, "Registration fee")

        assert service.balance(user.id) == Money(Decimal("1300"))
        assert service.ledger_balance(user.id) == Decimal("1300")
        assert service.verify_balance(user.id)

    def test_history_newest_first(self, service, make_wallet_user, clock):
        """History lists the latest movement first."""
        user = make_wallet_user()
        service.credit(user.id, "50", "first")
        clock.advance(seconds=1)
        service.credit(user.id, "75", "second")
        assert [t.description for t in service.history(user.id)] == ["second", "first"]

    @pytest.mark.parametrize("amount", ["0", "-5", "abc"])
    def test_rejects_non_positive_amounts(self, service, make_wallet_user, amount):
        """Only strictly positive amounts move money."""
        user = make_wallet_user()
        with pytest.raises(ValidationError):
            service.credit(user.id, amount, "bad")

    def test_debit_beyond_balance(self, service, make_wallet_user, wallet_store):
        """Overdrafts are refused before anything is written."""
        user = make_wallet_user(balance="100")
        with pytest.raises(InsufficientFundsError):
            service.debit(user.id, "150", "Too much")
        assert wallet_store.transactions == []

    def test_unknown_user(self, service):
        """Movements for a missing account raise UserNotFoundError."""
        with pytest.raises(UserNotFoundError):
            service.credit(UserId(uuid.uuid4()), "10", "ghost")

    def test_debit_records_signed_amount(self, service, make_wallet_user):
        """Debits count negatively in the ledger."""
        user = make_wallet_user(balance="0")
        service.credit(user.id, "40", "in")
        entry = service.debit(user.id, "15", "out")
        assert entry.type is TransactionType.DEBIT
        assert entry.signed_amount == Decimal("-15")


class TestDivergence:
    """Tests for partial failure and repair."""

    def test_failed_balance_write_then_recompute(self, wallet_store, clock):
        """A lost balance write leaves the ledger ahead until recomputed."""
        users = FailingBalanceStore()
        service = WalletService(users, wallet_store, clock)
        user = users.add(
            UserAccount(id=UserId(uuid.uuid4()), name="A", email="a@example.com", role=Role.PARTICIPANT)
        )

        with pytest.raises(StoreError):
            service.credit(user.id, "250", "Top-up")

        assert len(wallet_store.transactions) == 1
        assert service.balance(user.id).is_zero
        assert not service.verify_balance(user.id)

        users.failing = False
        repaired = service.recompute_balance(user.id)
        assert repaired.wallet_balance == Money(Decimal("250"))
        assert service.verify_balance(user.id)

    def test_recompute_is_noop_when_consistent(self, service, make_wallet_user):
        """Recomputing a consistent wallet changes nothing."""
        user = make_wallet_user()
        service.credit(user.id, "10", "in")
        assert service.recompute_balance(user.id).wallet_balance == Money(Decimal("10"))
