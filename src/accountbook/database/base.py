"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from accountbook.domain.entities import Account, AccountUser, Transaction


class Database(ABC):
    """Abstract database interface for accountbook.

    Write methods commit immediately when called on their own. Inside
    ``unit_of_work()`` they only flush, and the block commits or rolls back
    as a whole.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[None]:
        """Run the enclosed block as one atomic database transaction."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, name: str) -> int:
        """Create an account owner. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[AccountUser]:
        """Get account owner by ID."""
        pass

    # Account operations
    @abstractmethod
    def save_account(self, account: Account) -> Account:
        """Insert a new account (id is None) or update an existing one.

        Returns the stored account with its ID assigned.
        """
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_number(self, account_number: str, for_update: bool = False) -> Optional[Account]:
        """Get account by account number.

        Args:
            account_number: 10-digit account number
            for_update: Lock the row until the current unit of work ends
        """
        pass

    @abstractmethod
    def get_latest_account(self) -> Optional[Account]:
        """Get the most recently created account."""
        pass

    @abstractmethod
    def list_accounts_for_user(self, user_id: int) -> list[Account]:
        """List all accounts owned by a user, in creation order."""
        pass

    @abstractmethod
    def count_accounts_for_user(self, user_id: int) -> int:
        """Count accounts owned by a user, closed ones included."""
        pass

    @abstractmethod
    def account_number_exists(self, account_number: str) -> bool:
        """Check whether any account, active or closed, uses this number."""
        pass

    # Transaction operations
    @abstractmethod
    def add_transaction(self, transaction: Transaction) -> Transaction:
        """Append a transaction. Returns it with its ID assigned."""
        pass

    @abstractmethod
    def get_transaction_by_transaction_id(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by its opaque transaction ID."""
        pass

    @abstractmethod
    def list_transactions_for_account(self, account_id: int) -> list[Transaction]:
        """List transactions recorded against an account, oldest first."""
        pass
