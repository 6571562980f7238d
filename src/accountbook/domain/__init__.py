"""Domain layer for accountbook application."""

from accountbook.domain.account import AccountService
from accountbook.domain.transaction import TransactionService
from accountbook.domain.user import UserService

__all__ = [
    "AccountService",
    "TransactionService",
    "UserService",
]
