"""Tests for Database interface returning domain models."""

import pytest
from dataclasses import replace
from datetime import datetime, UTC

from accountbook.database.factories import create_database, create_sqlite_database
from accountbook.domain import entities
from accountbook.domain.errors import (
    ConflictError,
    ErrorCode,
    NotFoundError,
    StorageUnavailableError,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def new_account(user_id: int, account_number: str = "1000000000", balance: int = 1000):
    return entities.Account(
        id=None,
        user_id=user_id,
        account_number=account_number,
        status=entities.AccountStatus.IN_USE,
        balance=balance,
        registered_at=NOW,
    )


def new_transaction(account_id: int, transaction_id: str = "a" * 32):
    return entities.Transaction(
        id=None,
        transaction_id=transaction_id,
        transaction_type=entities.TransactionType.USE,
        result=entities.TransactionResult.SUCCESS,
        account_id=account_id,
        amount=300,
        balance_snapshot=700,
        transacted_at=NOW,
    )


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_user_returns_domain_model(self, temp_db):
        """Test that get_user returns a domain AccountUser entity."""
        user_id = temp_db.create_user("Kim")

        user = temp_db.get_user(user_id)

        assert isinstance(user, entities.AccountUser)
        assert user.id == user_id
        assert user.name == "Kim"
        assert user.created_at.tzinfo is not None

    def test_get_missing_user_returns_none(self, temp_db):
        """Test that an unknown user id yields None."""
        assert temp_db.get_user(999) is None

    def test_save_account_inserts_and_assigns_id(self, temp_db):
        """Test that saving a new account assigns an id."""
        user_id = temp_db.create_user("Kim")

        account = temp_db.save_account(new_account(user_id))

        assert isinstance(account, entities.Account)
        assert account.id is not None
        assert temp_db.get_account(account.id) == account
        assert temp_db.get_account_by_number("1000000000") == account

    def test_save_account_updates_existing(self, temp_db):
        """Test that saving an account with an id updates the row."""
        user_id = temp_db.create_user("Kim")
        account = temp_db.save_account(new_account(user_id))

        temp_db.save_account(account.debit(400))

        assert temp_db.get_account(account.id).balance == 600

    def test_save_unknown_account_id(self, temp_db):
        """Test that updating an account that does not exist fails."""
        user_id = temp_db.create_user("Kim")
        ghost = replace(new_account(user_id), id=42)

        with pytest.raises(NotFoundError):
            temp_db.save_account(ghost)

    def test_get_account_by_number_for_update(self, temp_db):
        """Test that the locking read returns the same account."""
        user_id = temp_db.create_user("Kim")
        account = temp_db.save_account(new_account(user_id))

        with temp_db.unit_of_work():
            locked = temp_db.get_account_by_number("1000000000", for_update=True)

        assert locked == account

    def test_account_queries(self, temp_db):
        """Test counting, listing and existence checks."""
        user_id = temp_db.create_user("Kim")
        other_id = temp_db.create_user("Lee")
        temp_db.save_account(new_account(user_id, "1000000000"))
        temp_db.save_account(new_account(user_id, "1000000001"))
        temp_db.save_account(new_account(other_id, "1000000002"))

        assert temp_db.count_accounts_for_user(user_id) == 2
        assert [a.account_number for a in temp_db.list_accounts_for_user(user_id)] == [
            "1000000000",
            "1000000001",
        ]
        assert temp_db.account_number_exists("1000000002")
        assert not temp_db.account_number_exists("1000000003")
        assert temp_db.get_latest_account().account_number == "1000000002"

    def test_get_latest_account_empty(self, temp_db):
        """Test that an empty store has no latest account."""
        assert temp_db.get_latest_account() is None

    def test_transactions(self, temp_db):
        """Test appending and looking up transactions."""
        user_id = temp_db.create_user("Kim")
        account = temp_db.save_account(new_account(user_id))

        first = temp_db.add_transaction(new_transaction(account.id, "a" * 32))
        second = temp_db.add_transaction(new_transaction(account.id, "b" * 32))

        assert isinstance(first, entities.Transaction)
        assert first.id is not None
        assert temp_db.get_transaction_by_transaction_id("b" * 32) == second
        assert temp_db.get_transaction_by_transaction_id("c" * 32) is None
        assert temp_db.list_transactions_for_account(account.id) == [first, second]


class TestUnitOfWork:
    """Tests for atomic units of work."""

    def test_commit_on_success(self, temp_db):
        """Test that writes inside a unit of work are visible to a new connection."""
        with temp_db.unit_of_work():
            user_id = temp_db.create_user("Kim")
            temp_db.save_account(new_account(user_id))

        other = create_sqlite_database(temp_db.database_path)
        try:
            assert other.account_number_exists("1000000000")
        finally:
            other.disconnect()

    def test_rollback_on_error(self, temp_db):
        """Test that an exception discards every write in the block."""
        user_id = temp_db.create_user("Kim")

        with pytest.raises(RuntimeError):
            with temp_db.unit_of_work():
                temp_db.save_account(new_account(user_id))
                raise RuntimeError("boom")

        assert not temp_db.account_number_exists("1000000000")
        assert temp_db.get_user(user_id) is not None

    def test_nested_blocks_join_outer(self, temp_db):
        """Test that an inner block does not commit on its own."""
        user_id = temp_db.create_user("Kim")

        with pytest.raises(RuntimeError):
            with temp_db.unit_of_work():
                with temp_db.unit_of_work():
                    temp_db.save_account(new_account(user_id))
                raise RuntimeError("boom")

        assert not temp_db.account_number_exists("1000000000")


class TestStorageErrors:
    """Tests for translation of storage failures."""

    def test_unreachable_database(self, tmp_path):
        """Test that an unusable URL raises StorageUnavailableError."""
        missing = tmp_path / "missing" / "dir" / "ledger.db"
        with pytest.raises(StorageUnavailableError):
            create_database(f"sqlite:///{missing}")

    def test_constraint_violation_is_translated(self, temp_db):
        """Test that a duplicate transaction id surfaces as a storage error."""
        user_id = temp_db.create_user("Kim")
        account = temp_db.save_account(new_account(user_id))
        temp_db.add_transaction(new_transaction(account.id, "a" * 32))

        with pytest.raises(StorageUnavailableError):
            temp_db.add_transaction(new_transaction(account.id, "a" * 32))

        # Session is usable again after the failed write
        assert len(temp_db.list_transactions_for_account(account.id)) == 1

    def test_duplicate_account_number_is_a_conflict(self, temp_db):
        """Test that inserting a taken account number is a retryable conflict."""
        user_id = temp_db.create_user("Kim")
        temp_db.save_account(new_account(user_id))

        with pytest.raises(ConflictError) as exc_info:
            temp_db.save_account(new_account(user_id))

        assert exc_info.value.code == ErrorCode.DUPLICATE_ACCOUNT_NUMBER
        assert temp_db.count_accounts_for_user(user_id) == 1

    def test_storage_error_is_not_a_domain_error(self):
        """Test that infrastructure failures stay outside the ValueError hierarchy."""
        assert not issubclass(StorageUnavailableError, ValueError)


class TestConcurrentWrites:
    """Tests for writes racing through two handles on one database file."""

    def test_stale_save_is_rejected(self, temp_db):
        """Test that saving an account changed by another handle fails instead of overwriting."""
        user_id = temp_db.create_user("Kim")
        temp_db.save_account(new_account(user_id))
        other = create_sqlite_database(temp_db.database_path)
        try:
            with pytest.raises(ConflictError) as exc_info:
                with temp_db.unit_of_work():
                    account = temp_db.get_account_by_number("1000000000", for_update=True)
                    other.save_account(other.get_account_by_number("1000000000").debit(300))
                    temp_db.save_account(account.debit(300))

            assert exc_info.value.code == ErrorCode.CONCURRENT_MODIFICATION
            assert temp_db.get_account_by_number("1000000000").balance == 700
        finally:
            other.disconnect()

    def test_unit_of_work_sees_other_handles_commits(self, temp_db):
        """Test that a new unit of work does not reuse rows loaded earlier."""
        user_id = temp_db.create_user("Kim")
        temp_db.save_account(new_account(user_id))
        other = create_sqlite_database(temp_db.database_path)
        try:
            other.save_account(other.get_account_by_number("1000000000").debit(300))

            with temp_db.unit_of_work():
                account = temp_db.get_account_by_number("1000000000", for_update=True)
                temp_db.save_account(account.debit(300))

            assert temp_db.get_account_by_number("1000000000").balance == 400
        finally:
            other.disconnect()
