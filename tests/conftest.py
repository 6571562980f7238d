"""Shared pytest fixtures for accountbook tests."""

import os
import tempfile
from datetime import UTC, datetime, timedelta

import pytest

from accountbook.config import LedgerConfig
from accountbook.database.factories import create_sqlite_database
from accountbook.domain.account import AccountService
from accountbook.domain.transaction import TransactionService
from accountbook.domain.user import UserService
from accountbook.logging_config import configure_logging


class FakeClock:
    """Settable clock for services that stamp times."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(autouse=True)
def _logging():
    """Configure structlog before any module-level logger is used."""
    configure_logging("WARNING")


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    db.session_factory.kw["bind"].dispose()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """A clock fixed at 2024-03-01 12:00 UTC."""
    return FakeClock(datetime(2024, 3, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def config():
    """Default business limits."""
    return LedgerConfig()


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def account_service(temp_db, config, clock):
    """Create an AccountService with a temporary database and fixed clock."""
    return AccountService(temp_db, config, clock=clock)


@pytest.fixture
def transaction_service(temp_db, config, clock):
    """Create a TransactionService with a temporary database and fixed clock."""
    return TransactionService(temp_db, config, clock=clock)


@pytest.fixture
def sample_user(user_service):
    """Create a sample account owner."""
    return user_service.create_user("Test User")


@pytest.fixture
def sample_account(account_service, sample_user):
    """Open an account holding 1,000 for the sample user."""
    return account_service.create_account(user_id=sample_user.id, initial_balance=1000)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
