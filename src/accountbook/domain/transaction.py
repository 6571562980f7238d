"""Transaction domain service."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable, Optional

from accountbook.config import LedgerConfig
from accountbook.domain.entities import (
    Account,
    Transaction,
    TransactionRecord,
    TransactionResult,
    TransactionType,
    require_positive_amount,
)
from accountbook.domain.errors import (
    AccountError,
    ErrorCode,
    account_error,
    account_not_found,
    insufficient_balance,
    partial_cancel,
    transaction_not_found,
    user_not_found,
)
from accountbook.logging_config import get_logger
from accountbook.utils.clock import utc_now
from accountbook.utils.identifiers import new_transaction_id

if TYPE_CHECKING:
    from accountbook.database.base import Database

logger = get_logger(__name__)


class TransactionService:
    """Service for balance use and cancellation.

    Every balance-affecting call runs load, validate, mutate and record in a
    single unit of work. Recording a failed attempt is a separate call so the
    caller decides when an attempt counts as failed.
    """

    def __init__(
        self,
        db: Database,
        config: Optional[LedgerConfig] = None,
        clock: Callable[[], datetime] = utc_now,
        transaction_id_source: Callable[[], str] = new_transaction_id,
    ):
        """Initialize transaction service.

        Args:
            db: Database instance
            config: Business limits; defaults to LedgerConfig()
            clock: Source of the current time
            transaction_id_source: Source of opaque transaction ids
        """
        self.db = db
        self.config = config or LedgerConfig()
        self.clock = clock
        self.transaction_id_source = transaction_id_source

    def use_balance(self, user_id: int, account_number: str, amount: int) -> TransactionRecord:
        """Debit an account and record a successful USE transaction.

        Args:
            user_id: ID of the requesting user, who must own the account
            account_number: Account to debit
            amount: Positive amount in the smallest currency unit

        Returns:
            Record of the new transaction

        Raises:
            AccountError: USER_NOT_FOUND, ACCOUNT_NOT_FOUND, OWNER_MISMATCH,
                ACCOUNT_CLOSED, INSUFFICIENT_BALANCE, INVALID_REQUEST or
                CONCURRENT_MODIFICATION
        """
        require_positive_amount(amount)
        try:
            with self.db.unit_of_work():
                user = self.db.get_user(user_id)
                if user is None:
                    raise account_error(ErrorCode.USER_NOT_FOUND, user_not_found(user_id))

                account = self._require_account(account_number, for_update=True)
                self._validate_use_balance(user.id, account, amount)

                account = self.db.save_account(account.debit(amount))
                transaction = self._record(
                    TransactionType.USE, TransactionResult.SUCCESS, amount, account
                )
        except AccountError as exc:
            logger.warning(
                "balance.use_rejected",
                user_id=user_id,
                account_number=account_number,
                amount=amount,
                code=exc.code.value,
            )
            raise

        logger.info(
            "balance.used",
            account_number=account_number,
            amount=amount,
            balance=account.balance,
            transaction_id=transaction.transaction_id,
        )
        return TransactionRecord.from_entity(transaction, account.account_number)

    def save_failed_use(self, account_number: str, amount: int) -> None:
        """Record a failed USE attempt without touching the balance.

        Raises:
            AccountError: ACCOUNT_NOT_FOUND
        """
        self._save_failed(TransactionType.USE, account_number, amount)
        logger.info("balance.use_failed_recorded", account_number=account_number, amount=amount)

    def cancel_balance(self, transaction_id: str, account_number: str, amount: int) -> TransactionRecord:
        """Fully reverse a prior transaction and record a successful CANCEL.

        Args:
            transaction_id: Opaque id of the transaction to cancel
            account_number: Account the original transaction was recorded on
            amount: Must equal the original amount; partial cancels are refused

        Raises:
            AccountError: TRANSACTION_NOT_FOUND, ACCOUNT_NOT_FOUND,
                TRANSACTION_ACCOUNT_MISMATCH, PARTIAL_CANCEL_NOT_ALLOWED,
                CANCEL_WINDOW_EXPIRED, INVALID_REQUEST or CONCURRENT_MODIFICATION
        """
        require_positive_amount(amount)
        try:
            with self.db.unit_of_work():
                original = self.db.get_transaction_by_transaction_id(transaction_id)
                if original is None:
                    raise account_error(
                        ErrorCode.TRANSACTION_NOT_FOUND, transaction_not_found(transaction_id)
                    )

                account = self._require_account(account_number, for_update=True)
                self._validate_cancel_balance(original, account, amount)

                account = self.db.save_account(account.credit(amount))
                transaction = self._record(
                    TransactionType.CANCEL, TransactionResult.SUCCESS, amount, account
                )
        except AccountError as exc:
            logger.warning(
                "balance.cancel_rejected",
                transaction_id=transaction_id,
                account_number=account_number,
                amount=amount,
                code=exc.code.value,
            )
            raise

        logger.info(
            "balance.cancelled",
            account_number=account_number,
            amount=amount,
            balance=account.balance,
            cancelled_transaction_id=transaction_id,
            transaction_id=transaction.transaction_id,
        )
        return TransactionRecord.from_entity(transaction, account.account_number)

    def save_failed_cancel(self, account_number: str, amount: int) -> None:
        """Record a failed CANCEL attempt without touching the balance.

        Raises:
            AccountError: ACCOUNT_NOT_FOUND
        """
        self._save_failed(TransactionType.CANCEL, account_number, amount)
        logger.info("balance.cancel_failed_recorded", account_number=account_number, amount=amount)

    def query_transaction(self, transaction_id: str) -> TransactionRecord:
        """Look up a transaction by its opaque id.

        Raises:
            AccountError: TRANSACTION_NOT_FOUND
        """
        with self.db.unit_of_work():
            transaction = self.db.get_transaction_by_transaction_id(transaction_id)
            if transaction is None:
                raise account_error(
                    ErrorCode.TRANSACTION_NOT_FOUND, transaction_not_found(transaction_id)
                )

            account = self.db.get_account(transaction.account_id)
            if account is None:
                raise account_error(
                    ErrorCode.ACCOUNT_NOT_FOUND, f"Account {transaction.account_id} not found"
                )
        return TransactionRecord.from_entity(transaction, account.account_number)

    def list_transactions(self, account_number: str) -> list[TransactionRecord]:
        """List every transaction recorded on an account, oldest first.

        Raises:
            AccountError: ACCOUNT_NOT_FOUND
        """
        with self.db.unit_of_work():
            account = self._require_account(account_number)
            transactions = self.db.list_transactions_for_account(account.id)
        return [TransactionRecord.from_entity(txn, account.account_number) for txn in transactions]

    def _require_account(self, account_number: str, for_update: bool = False) -> Account:
        account = self.db.get_account_by_number(account_number, for_update=for_update)
        if account is None:
            raise account_error(ErrorCode.ACCOUNT_NOT_FOUND, account_not_found(account_number))
        return account

    def _validate_use_balance(self, user_id: int, account: Account, amount: int) -> None:
        if account.user_id != user_id:
            raise account_error(ErrorCode.OWNER_MISMATCH)
        if not account.is_active:
            raise account_error(ErrorCode.ACCOUNT_CLOSED)
        if amount > account.balance:
            raise account_error(
                ErrorCode.INSUFFICIENT_BALANCE,
                insufficient_balance(account.account_number, account.balance, amount),
            )

    def _validate_cancel_balance(self, original: Transaction, account: Account, amount: int) -> None:
        if (
            original.transaction_type != TransactionType.USE
            or original.result != TransactionResult.SUCCESS
        ):
            raise account_error(
                ErrorCode.INVALID_REQUEST, "Only successful USE transactions can be cancelled"
            )
        if original.account_id != account.id:
            raise account_error(ErrorCode.TRANSACTION_ACCOUNT_MISMATCH)
        if original.amount != amount:
            raise account_error(
                ErrorCode.PARTIAL_CANCEL_NOT_ALLOWED, partial_cancel(original.amount, amount)
            )
        cutoff = self.clock() - timedelta(days=self.config.cancel_window_days)
        if original.transacted_at < cutoff:
            raise account_error(ErrorCode.CANCEL_WINDOW_EXPIRED)

    def _save_failed(self, transaction_type: TransactionType, account_number: str, amount: int) -> None:
        require_positive_amount(amount)
        with self.db.unit_of_work():
            account = self._require_account(account_number)
            self._record(transaction_type, TransactionResult.FAIL, amount, account)

    def _record(
        self,
        transaction_type: TransactionType,
        result: TransactionResult,
        amount: int,
        account: Account,
    ) -> Transaction:
        """Append a ledger entry snapshotting the account's current balance."""
        return self.db.add_transaction(
            Transaction(
                id=None,
                transaction_id=self.transaction_id_source(),
                transaction_type=transaction_type,
                result=result,
                account_id=account.id,
                amount=amount,
                balance_snapshot=account.balance,
                transacted_at=self.clock(),
            )
        )
