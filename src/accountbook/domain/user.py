"""Account owner domain service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from accountbook.domain.entities import AccountUser
from accountbook.domain.errors import ErrorCode, account_error, user_not_found
from accountbook.logging_config import get_logger

if TYPE_CHECKING:
    from accountbook.database.base import Database

logger = get_logger(__name__)


class UserService:
    """Service for managing account owners."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(self, name: str) -> AccountUser:
        """Create an account owner.

        Args:
            name: Display name

        Returns:
            The stored user

        Raises:
            AccountError: If the name is blank
        """
        if name is None or not name.strip():
            raise account_error(ErrorCode.INVALID_REQUEST, "User name cannot be empty")

        user_id = self.db.create_user(name.strip())
        logger.info("user.created", user_id=user_id)
        return self.get_user(user_id)

    def get_user(self, user_id: int) -> AccountUser:
        """Get account owner by ID.

        Raises:
            AccountError: USER_NOT_FOUND
        """
        with self.db.unit_of_work():
            user = self.db.get_user(user_id)
        if user is None:
            raise account_error(ErrorCode.USER_NOT_FOUND, user_not_found(user_id))
        return user
