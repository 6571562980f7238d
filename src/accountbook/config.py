"""Configuration management for accountbook."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_DB_DIR = Path.home() / ".accountbook"


def default_database_path() -> str:
    """Return the default SQLite database path, creating its directory."""
    DEFAULT_DB_DIR.mkdir(exist_ok=True)
    return str(DEFAULT_DB_DIR / "accountbook.db")


@dataclass
class LedgerConfig:
    """Business limits and infrastructure settings."""

    database_url: Optional[str] = None
    max_accounts_per_user: int = 10
    cancel_window_days: int = 365
    max_account_number_attempts: int = 100
    account_number_strategy: str = "random"
    log_level: str = "INFO"
    log_json: bool = False

    def resolve_database_url(self) -> str:
        """Return the configured URL, or a SQLite URL under the home directory."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{default_database_path()}"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables.

        ACCOUNTBOOK_DB_URL wins over ACCOUNTBOOK_DB_PATH when both are set.
        """
        database_url = os.getenv("ACCOUNTBOOK_DB_URL")
        if database_url is None and os.getenv("ACCOUNTBOOK_DB_PATH"):
            database_url = f"sqlite:///{os.environ['ACCOUNTBOOK_DB_PATH']}"

        return cls(
            database_url=database_url,
            max_accounts_per_user=int(os.getenv("ACCOUNTBOOK_MAX_ACCOUNTS", "10")),
            cancel_window_days=int(os.getenv("ACCOUNTBOOK_CANCEL_WINDOW_DAYS", "365")),
            account_number_strategy=os.getenv("ACCOUNTBOOK_ACCOUNT_NUMBER_STRATEGY", "random"),
            log_level=os.getenv("ACCOUNTBOOK_LOG_LEVEL", "INFO"),
            log_json=os.getenv("ACCOUNTBOOK_LOG_JSON", "false").lower() == "true",
        )
