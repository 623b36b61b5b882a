"""Wallet ledger with a denormalized balance.

Every movement is two independent writes: the ledger entry first, then the
user's stored balance. The ledger is the source of truth; if the second
write fails the balance is repaired with recompute_balance().
"""

import logging
import uuid
from decimal import Decimal

from eventhub.domain.enums import TransactionType
from eventhub.domain.errors import (
    InsufficientFundsError,
    StoreError,
    UserNotFoundError,
    ValidationError,
)
from eventhub.domain.models import UserAccount, WalletTransaction
from eventhub.domain.value_objects import EventId, Money, UserId
from eventhub.services.clock import Clock, utcnow
from eventhub.stores.interfaces import UserStore, WalletStore

logger = logging.getLogger(__name__)


def _positive_amount(amount: Money | Decimal | str | int) -> Money:
    try:
        money = amount if isinstance(amount, Money) else Money.parse(amount)
    except ValueError as exc:
        raise ValidationError("Amount must be a positive number", fields=("amount",)) from exc
    if money.is_zero:
        raise ValidationError("Amount must be a positive number", fields=("amount",))
    return money


class WalletService:
    """Credits, debits and balance reconciliation."""

    def __init__(self, users: UserStore, ledger: WalletStore, clock: Clock = utcnow) -> None:
        self._users = users
        self._ledger = ledger
        self._clock = clock

    def credit(
        self,
        user_id: UserId,
        amount: Money | Decimal | str | int,
        description: str,
        event_id: EventId | None = None,
    ) -> WalletTransaction:
        return self._record(user_id, TransactionType.CREDIT, amount, description, event_id)

    def debit(
        self,
        user_id: UserId,
        amount: Money | Decimal | str | int,
        description: str,
        event_id: EventId | None = None,
    ) -> WalletTransaction:
        """Raises InsufficientFundsError if the stored balance cannot cover it."""
        return self._record(user_id, TransactionType.DEBIT, amount, description, event_id)

    def balance(self, user_id: UserId) -> Money:
        """The stored (denormalized) balance."""
        return self._account(user_id).wallet_balance

    def ledger_balance(self, user_id: UserId) -> Decimal:
        """Sum of credits minus debits."""
        return sum(
            (transaction.signed_amount for transaction in self._ledger.list_transactions(user_id)),
            Decimal("0"),
        )

    def history(self, user_id: UserId) -> list[WalletTransaction]:
        return self._ledger.list_transactions(user_id)

    def verify_balance(self, user_id: UserId) -> bool:
        return self.balance(user_id).amount == self.ledger_balance(user_id)

    def recompute_balance(self, user_id: UserId) -> UserAccount:
        """Overwrite the stored balance with the ledger total."""
        account = self._account(user_id)
        total = self.ledger_balance(user_id)
        if total < 0:
            raise StoreError(f"Ledger for {user_id} sums to a negative balance")
        if account.wallet_balance.amount != total:
            logger.warning(
                "Repairing wallet balance for %s: stored %s, ledger %s",
                user_id,
                account.wallet_balance,
                total,
            )
        return self._users.set_wallet_balance(user_id, Money(total))

    def _record(
        self,
        user_id: UserId,
        kind: TransactionType,
        amount: Money | Decimal | str | int,
        description: str,
        event_id: EventId | None,
    ) -> WalletTransaction:
        money = _positive_amount(amount)
        account = self._account(user_id)
        previous = account.wallet_balance

        if kind is TransactionType.DEBIT and previous < money:
            raise InsufficientFundsError(str(user_id), str(money), str(previous))

        transaction = self._ledger.add_transaction(
            WalletTransaction(
                id=uuid.uuid4(),
                user_id=user_id,
                type=kind,
                amount=money,
                description=description,
                created_at=self._clock(),
                event_id=event_id,
            )
        )

        new_balance = previous + money if kind is TransactionType.CREDIT else previous - money
        try:
            self._users.set_wallet_balance(user_id, new_balance)
        except StoreError:
            logger.error(
                "Wallet %s diverged from ledger after %s %s (transaction %s); run recompute_balance",
                user_id,
                kind.value,
                money,
                transaction.id,
            )
            raise
        logger.info("Wallet %s %s %s -> balance %s", user_id, kind.value, money, new_balance)
        return transaction

    def _account(self, user_id: UserId) -> UserAccount:
        account = self._users.get_account(user_id)
        if account is None:
            raise UserNotFoundError(str(user_id))
        return account
