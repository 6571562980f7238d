"""Shared domain error codes, messages and error types."""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Business rule violations reported by the ledger services."""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"
    OWNER_MISMATCH = "OWNER_MISMATCH"
    ACCOUNT_CLOSED = "ACCOUNT_CLOSED"
    ALREADY_CLOSED = "ALREADY_CLOSED"
    BALANCE_NOT_EMPTY = "BALANCE_NOT_EMPTY"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    MAX_ACCOUNTS_PER_USER_EXCEEDED = "MAX_ACCOUNTS_PER_USER_EXCEEDED"
    TRANSACTION_ACCOUNT_MISMATCH = "TRANSACTION_ACCOUNT_MISMATCH"
    PARTIAL_CANCEL_NOT_ALLOWED = "PARTIAL_CANCEL_NOT_ALLOWED"
    CANCEL_WINDOW_EXPIRED = "CANCEL_WINDOW_EXPIRED"
    INVALID_REQUEST = "INVALID_REQUEST"
    ACCOUNT_NUMBER_EXHAUSTED = "ACCOUNT_NUMBER_EXHAUSTED"
    DUPLICATE_ACCOUNT_NUMBER = "DUPLICATE_ACCOUNT_NUMBER"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"


DEFAULT_MESSAGES = {
    ErrorCode.USER_NOT_FOUND: "User not found",
    ErrorCode.ACCOUNT_NOT_FOUND: "Account not found",
    ErrorCode.TRANSACTION_NOT_FOUND: "Transaction not found",
    ErrorCode.OWNER_MISMATCH: "Account does not belong to the requesting user",
    ErrorCode.ACCOUNT_CLOSED: "Account is closed",
    ErrorCode.ALREADY_CLOSED: "Account is already closed",
    ErrorCode.BALANCE_NOT_EMPTY: "Account balance is not empty",
    ErrorCode.INSUFFICIENT_BALANCE: "Amount exceeds account balance",
    ErrorCode.MAX_ACCOUNTS_PER_USER_EXCEEDED: "User already owns the maximum number of accounts",
    ErrorCode.TRANSACTION_ACCOUNT_MISMATCH: "Transaction does not belong to this account",
    ErrorCode.PARTIAL_CANCEL_NOT_ALLOWED: "Partial cancellation is not allowed",
    ErrorCode.CANCEL_WINDOW_EXPIRED: "Transaction is too old to cancel",
    ErrorCode.INVALID_REQUEST: "Invalid request",
    ErrorCode.ACCOUNT_NUMBER_EXHAUSTED: "Could not allocate a unique account number",
    ErrorCode.DUPLICATE_ACCOUNT_NUMBER: "Account number was taken by another account",
    ErrorCode.CONCURRENT_MODIFICATION: "Account was modified concurrently, retry the request",
}


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class AccountError(DomainError):
    """Business rule violation carrying a discriminating error code."""

    def __init__(self, code: ErrorCode, message: Optional[str] = None):
        self.code = code
        super().__init__(message or DEFAULT_MESSAGES[code])


class ValidationError(AccountError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(AccountError):
    """Requested domain entity does not exist."""


class ConflictError(AccountError):
    """Domain conflict, such as a state transition that is not allowed."""


class StorageUnavailableError(RuntimeError):
    """The backing store could not be reached or failed mid-operation."""


_NOT_FOUND_CODES = {
    ErrorCode.USER_NOT_FOUND,
    ErrorCode.ACCOUNT_NOT_FOUND,
    ErrorCode.TRANSACTION_NOT_FOUND,
}

_CONFLICT_CODES = {
    ErrorCode.ACCOUNT_CLOSED,
    ErrorCode.ALREADY_CLOSED,
    ErrorCode.BALANCE_NOT_EMPTY,
    ErrorCode.MAX_ACCOUNTS_PER_USER_EXCEEDED,
    ErrorCode.ACCOUNT_NUMBER_EXHAUSTED,
    ErrorCode.DUPLICATE_ACCOUNT_NUMBER,
    ErrorCode.CONCURRENT_MODIFICATION,
}


def account_error(code: ErrorCode, message: Optional[str] = None) -> AccountError:
    """Build the error subclass matching the category of ``code``."""
    if code in _NOT_FOUND_CODES:
        return NotFoundError(code, message)
    if code in _CONFLICT_CODES:
        return ConflictError(code, message)
    return ValidationError(code, message)


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def account_not_found(account_number: str) -> str:
    """Return message for missing account."""
    return f"Account {account_number} not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def insufficient_balance(account_number: str, balance: int, amount: int) -> str:
    """Return message when a debit exceeds the balance."""
    return f"Amount {amount} exceeds balance {balance} of account {account_number}"


def partial_cancel(original_amount: int, amount: int) -> str:
    """Return message when a cancel amount differs from the original."""
    return (
        f"Cancel amount {amount} must equal the original transaction amount "
        f"{original_amount}"
    )


def max_accounts_exceeded(user_id: int, limit: int) -> str:
    """Return message when a user already holds the account limit."""
    return f"User {user_id} already has {limit} account{'s' if limit != 1 else ''}"
