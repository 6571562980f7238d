"""Account domain service."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from accountbook.config import LedgerConfig
from accountbook.domain.entities import (
    Account,
    AccountDescriptor,
    AccountStatus,
    AccountUser,
)
from accountbook.domain.errors import (
    AccountError,
    ErrorCode,
    account_error,
    account_not_found,
    max_accounts_exceeded,
    user_not_found,
)
from accountbook.logging_config import get_logger
from accountbook.utils.clock import utc_now
from accountbook.utils.identifiers import ACCOUNT_NUMBER_MIN, random_account_number

if TYPE_CHECKING:
    from accountbook.database.base import Database

logger = get_logger(__name__)

# Full create retries after losing an account-number race to another writer
CREATE_ATTEMPTS = 3


class AccountService:
    """Service for the account lifecycle: open, close and list."""

    def __init__(
        self,
        db: Database,
        config: Optional[LedgerConfig] = None,
        clock: Callable[[], datetime] = utc_now,
        account_number_source: Optional[Callable[[], str]] = None,
    ):
        """Initialize account service.

        Args:
            db: Database instance
            config: Business limits; defaults to LedgerConfig()
            clock: Source of the current time
            account_number_source: Source of candidate account numbers. When
                omitted, config.account_number_strategy picks between random
                and sequential numbering.
        """
        self.db = db
        self.config = config or LedgerConfig()
        self.clock = clock
        self.account_number_source = account_number_source

    def create_account(self, user_id: int, initial_balance: int) -> AccountDescriptor:
        """Open a new account for a user.

        Args:
            user_id: Owner ID
            initial_balance: Opening balance in the smallest currency unit

        Returns:
            Descriptor of the new account

        Raises:
            AccountError: USER_NOT_FOUND, MAX_ACCOUNTS_PER_USER_EXCEEDED,
                INVALID_REQUEST, ACCOUNT_NUMBER_EXHAUSTED or DUPLICATE_ACCOUNT_NUMBER
        """
        if (
            initial_balance is None
            or isinstance(initial_balance, bool)
            or not isinstance(initial_balance, int)
            or initial_balance < 0
        ):
            raise account_error(
                ErrorCode.INVALID_REQUEST,
                f"Initial balance must be a non-negative integer, got {initial_balance!r}",
            )

        try:
            account = self._open_account(user_id, initial_balance)
        except AccountError as exc:
            logger.warning("account.create_rejected", user_id=user_id, code=exc.code.value)
            raise

        logger.info(
            "account.created",
            user_id=user_id,
            account_number=account.account_number,
            initial_balance=initial_balance,
        )
        return AccountDescriptor.from_entity(account)

    def close_account(self, user_id: int, account_number: str) -> AccountDescriptor:
        """Close (unregister) an account with an empty balance.

        The row is kept; only its status and unregistration time change.

        Raises:
            AccountError: USER_NOT_FOUND, ACCOUNT_NOT_FOUND, OWNER_MISMATCH,
                ALREADY_CLOSED, BALANCE_NOT_EMPTY or CONCURRENT_MODIFICATION
        """
        try:
            with self.db.unit_of_work():
                user = self._require_user(user_id)
                account = self.db.get_account_by_number(account_number, for_update=True)
                if account is None:
                    raise account_error(ErrorCode.ACCOUNT_NOT_FOUND, account_not_found(account_number))

                if account.user_id != user.id:
                    raise account_error(ErrorCode.OWNER_MISMATCH)

                account = self.db.save_account(account.close(self.clock()))
        except AccountError as exc:
            logger.warning(
                "account.close_rejected",
                user_id=user_id,
                account_number=account_number,
                code=exc.code.value,
            )
            raise

        logger.info("account.closed", user_id=user_id, account_number=account_number)
        return AccountDescriptor.from_entity(account)

    def list_accounts_for_user(self, user_id: int) -> list[AccountDescriptor]:
        """List a user's accounts in storage order.

        Raises:
            AccountError: USER_NOT_FOUND
        """
        with self.db.unit_of_work():
            user = self._require_user(user_id)
            accounts = self.db.list_accounts_for_user(user.id)
        return [AccountDescriptor.from_entity(acc) for acc in accounts]

    def get_account(self, account_number: str) -> AccountDescriptor:
        """Get an account by number.

        Raises:
            AccountError: ACCOUNT_NOT_FOUND
        """
        with self.db.unit_of_work():
            account = self.db.get_account_by_number(account_number)
        if account is None:
            raise account_error(ErrorCode.ACCOUNT_NOT_FOUND, account_not_found(account_number))
        return AccountDescriptor.from_entity(account)

    def _open_account(self, user_id: int, initial_balance: int) -> Account:
        """Insert the account, starting over when a concurrent insert takes its number."""
        for attempt in range(1, CREATE_ATTEMPTS + 1):
            try:
                with self.db.unit_of_work():
                    user = self._require_user(user_id)
                    self._validate_create_account(user)

                    return self.db.save_account(
                        Account(
                            id=None,
                            user_id=user.id,
                            account_number=self._allocate_account_number(),
                            status=AccountStatus.IN_USE,
                            balance=initial_balance,
                            registered_at=self.clock(),
                        )
                    )
            except AccountError as exc:
                if exc.code != ErrorCode.DUPLICATE_ACCOUNT_NUMBER or attempt == CREATE_ATTEMPTS:
                    raise
                logger.info("account.number_race", user_id=user_id, attempt=attempt)

    def _require_user(self, user_id: int) -> AccountUser:
        user = self.db.get_user(user_id)
        if user is None:
            raise account_error(ErrorCode.USER_NOT_FOUND, user_not_found(user_id))
        return user

    def _validate_create_account(self, user: AccountUser) -> None:
        limit = self.config.max_accounts_per_user
        if self.db.count_accounts_for_user(user.id) >= limit:
            raise account_error(
                ErrorCode.MAX_ACCOUNTS_PER_USER_EXCEEDED, max_accounts_exceeded(user.id, limit)
            )

    def _allocate_account_number(self) -> str:
        """Draw candidate numbers until one is not used by any account."""
        candidate = None
        for _ in range(self.config.max_account_number_attempts):
            candidate = self._next_candidate(candidate)
            if not self.db.account_number_exists(candidate):
                return candidate
            logger.debug("account.number_collision", account_number=candidate)
        raise account_error(ErrorCode.ACCOUNT_NUMBER_EXHAUSTED)

    def _next_candidate(self, previous: Optional[str]) -> str:
        if self.account_number_source is not None:
            return self.account_number_source()
        if self.config.account_number_strategy == "sequential":
            if previous is not None:
                return str(int(previous) + 1)
            latest = self.db.get_latest_account()
            if latest is None:
                return str(ACCOUNT_NUMBER_MIN)
            return str(int(latest.account_number) + 1)
        return random_account_number()
