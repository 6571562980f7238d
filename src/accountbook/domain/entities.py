"""Domain model entities for accountbook.

These are pure data classes representing business concepts, independent of
database schema. State changes on an account go through its transition
methods, which return a new instance and enforce the account invariants.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from accountbook.domain.errors import ErrorCode, account_error, insufficient_balance

ACCOUNT_NUMBER_LENGTH = 10


class AccountStatus(str, Enum):
    """Lifecycle state of an account."""

    IN_USE = "IN_USE"
    UNREGISTERED = "UNREGISTERED"


class TransactionType(str, Enum):
    """Kind of balance movement."""

    USE = "USE"
    CANCEL = "CANCEL"


class TransactionResult(str, Enum):
    """Outcome of a balance movement attempt."""

    SUCCESS = "SUCCESS"
    FAIL = "FAIL"


@dataclass(frozen=True)
class AccountUser:
    """Account owner domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity."""

    id: Optional[int]
    user_id: int
    account_number: str
    status: AccountStatus
    balance: int
    registered_at: datetime
    unregistered_at: Optional[datetime] = None

    def __post_init__(self):
        if len(self.account_number) != ACCOUNT_NUMBER_LENGTH:
            raise account_error(
                ErrorCode.INVALID_REQUEST,
                f"Account number must be {ACCOUNT_NUMBER_LENGTH} characters",
            )
        if self.balance < 0:
            raise account_error(ErrorCode.INVALID_REQUEST, "Balance cannot be negative")

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.IN_USE

    def debit(self, amount: int) -> "Account":
        """Return a copy with ``amount`` taken off the balance.

        Raises:
            AccountError: If the account is closed or the balance would go negative
        """
        require_positive_amount(amount)
        if not self.is_active:
            raise account_error(ErrorCode.ACCOUNT_CLOSED)
        if amount > self.balance:
            raise account_error(
                ErrorCode.INSUFFICIENT_BALANCE,
                insufficient_balance(self.account_number, self.balance, amount),
            )
        return replace(self, balance=self.balance - amount)

    def credit(self, amount: int) -> "Account":
        """Return a copy with ``amount`` added to the balance.

        Raises:
            AccountError: If the account is closed
        """
        require_positive_amount(amount)
        if not self.is_active:
            raise account_error(ErrorCode.ACCOUNT_CLOSED)
        return replace(self, balance=self.balance + amount)

    def close(self, closed_at: datetime) -> "Account":
        """Return an unregistered copy stamped with ``closed_at``.

        Raises:
            AccountError: If the account is already closed or still holds a balance
        """
        if self.status == AccountStatus.UNREGISTERED:
            raise account_error(ErrorCode.ALREADY_CLOSED)
        if self.balance != 0:
            raise account_error(ErrorCode.BALANCE_NOT_EMPTY)
        return replace(self, status=AccountStatus.UNREGISTERED, unregistered_at=closed_at)


@dataclass(frozen=True)
class Transaction:
    """Append-only ledger entry for one balance movement attempt."""

    id: Optional[int]
    transaction_id: str
    transaction_type: TransactionType
    result: TransactionResult
    account_id: int
    amount: int
    balance_snapshot: int
    transacted_at: datetime


@dataclass(frozen=True)
class AccountDescriptor:
    """Account projection returned to callers of the services."""

    user_id: int
    account_number: str
    balance: int
    status: AccountStatus
    registered_at: datetime
    unregistered_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, account: Account) -> "AccountDescriptor":
        return cls(
            user_id=account.user_id,
            account_number=account.account_number,
            balance=account.balance,
            status=account.status,
            registered_at=account.registered_at,
            unregistered_at=account.unregistered_at,
        )


@dataclass(frozen=True)
class TransactionRecord:
    """Transaction projection returned to callers of the services."""

    account_number: str
    transaction_type: TransactionType
    result: TransactionResult
    transaction_id: str
    amount: int
    balance_snapshot: int
    transacted_at: datetime

    @classmethod
    def from_entity(cls, transaction: Transaction, account_number: str) -> "TransactionRecord":
        return cls(
            account_number=account_number,
            transaction_type=transaction.transaction_type,
            result=transaction.result,
            transaction_id=transaction.transaction_id,
            amount=transaction.amount,
            balance_snapshot=transaction.balance_snapshot,
            transacted_at=transaction.transacted_at,
        )


def require_positive_amount(amount) -> None:
    """Reject absent, non-integer or non-positive amounts."""
    # bool is an int subclass
    if amount is None or isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise account_error(ErrorCode.INVALID_REQUEST, f"Amount must be a positive integer, got {amount!r}")
