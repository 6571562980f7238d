"""Mapper functions to convert between domain models and SQLAlchemy models.

Relationships are flattened to id references on the way out, so domain
entities never hold a live object graph.
"""

from accountbook.domain import entities as domain
from accountbook.database.models import (
    Account as ORMAccount,
    AccountUser as ORMAccountUser,
    Transaction as ORMTransaction,
)
from accountbook.utils.clock import as_utc


def account_user_to_domain(orm_user: ORMAccountUser) -> domain.AccountUser:
    """Convert SQLAlchemy AccountUser model to domain AccountUser entity."""
    return domain.AccountUser(
        id=orm_user.id,
        name=orm_user.name,
        created_at=as_utc(orm_user.created_at),
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        account_number=orm_account.account_number,
        status=orm_account.status,
        balance=orm_account.balance,
        registered_at=as_utc(orm_account.registered_at),
        unregistered_at=(
            as_utc(orm_account.unregistered_at) if orm_account.unregistered_at is not None else None
        ),
    )


def apply_account(orm_account: ORMAccount, account: domain.Account) -> ORMAccount:
    """Copy the mutable state of a domain Account onto its ORM row."""
    orm_account.user_id = account.user_id
    orm_account.account_number = account.account_number
    orm_account.status = account.status
    orm_account.balance = account.balance
    orm_account.registered_at = as_utc(account.registered_at)
    orm_account.unregistered_at = (
        as_utc(account.unregistered_at) if account.unregistered_at is not None else None
    )
    return orm_account


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        transaction_id=orm_transaction.transaction_id,
        transaction_type=orm_transaction.transaction_type,
        result=orm_transaction.result,
        account_id=orm_transaction.account_id,
        amount=orm_transaction.amount,
        balance_snapshot=orm_transaction.balance_snapshot,
        transacted_at=as_utc(orm_transaction.transacted_at),
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Build a new SQLAlchemy Transaction row from a domain Transaction."""
    return ORMTransaction(
        transaction_id=transaction.transaction_id,
        transaction_type=transaction.transaction_type,
        result=transaction.result,
        account_id=transaction.account_id,
        amount=transaction.amount,
        balance_snapshot=transaction.balance_snapshot,
        transacted_at=as_utc(transaction.transacted_at),
    )
