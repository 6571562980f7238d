"""Balance use, cancel and lookup commands."""

from typing import Callable

import click

from accountbook.cli.error_handling import handle_domain_error, handle_errors
from accountbook.cli.validation import account_number_param, transaction_amount_param
from accountbook.domain.entities import TransactionRecord
from accountbook.domain.errors import AccountError, ErrorCode
from accountbook.domain.transaction import TransactionService
from accountbook.logging_config import get_logger

logger = get_logger(__name__)

# Attempts rejected for these reasons have no account to attach a FAIL entry to
_UNRECORDABLE = {ErrorCode.ACCOUNT_NOT_FOUND, ErrorCode.INVALID_REQUEST}


@click.group()
def balance_group():
    """Use, cancel and look up balance transactions."""
    pass


def _echo_record(record: TransactionRecord) -> None:
    click.echo(f"Transaction ID: {record.transaction_id}")
    click.echo(f"  Account: {record.account_number}")
    click.echo(f"  Type: {record.transaction_type.value}")
    click.echo(f"  Result: {record.result.value}")
    click.echo(f"  Amount: {record.amount:,}")
    click.echo(f"  Balance after: {record.balance_snapshot:,}")
    click.echo(f"  Transacted: {record.transacted_at:%Y-%m-%d %H:%M:%S}")


def _fail(
    ctx: click.Context,
    error: AccountError,
    save_failed: Callable[[str, int], None],
    account_number: str,
    amount: int,
) -> None:
    """Record the failed attempt when possible, then report the original error."""
    if error.code not in _UNRECORDABLE:
        try:
            save_failed(account_number, amount)
        except AccountError as record_error:
            logger.warning(
                "balance.failure_not_recorded",
                account_number=account_number,
                code=record_error.code.value,
            )
    else:
        logger.info("balance.failure_not_recorded", account_number=account_number, code=error.code.value)
    handle_domain_error(ctx, error)


@balance_group.command("use")
@click.argument("user_id", type=click.IntRange(min=1))
@click.argument("account_number", callback=account_number_param)
@click.argument("amount", callback=transaction_amount_param)
@click.pass_context
@handle_errors
def use_balance(ctx, user_id: int, account_number: str, amount: int):
    """Use AMOUNT from an account owned by USER_ID.

    A rejected use is still recorded on the account as a failed transaction.

    Examples:
        accountbook balance use 12 1000000000 3,000
    """
    service = TransactionService(ctx.obj["db"], ctx.obj["config"])
    try:
        record = service.use_balance(user_id=user_id, account_number=account_number, amount=amount)
    except AccountError as e:
        _fail(ctx, e, service.save_failed_use, account_number, amount)
        return

    click.echo("Balance used.")
    _echo_record(record)


@balance_group.command("cancel")
@click.argument("transaction_id")
@click.argument("account_number", callback=account_number_param)
@click.argument("amount", callback=transaction_amount_param)
@click.pass_context
@handle_errors
def cancel_balance(ctx, transaction_id: str, account_number: str, amount: int):
    """Cancel a previous use in full.

    AMOUNT must equal the amount of the original transaction. Transactions
    older than the cancel window cannot be cancelled.

    Examples:
        accountbook balance cancel 3f2b...e9 1000000000 3,000
    """
    service = TransactionService(ctx.obj["db"], ctx.obj["config"])
    try:
        record = service.cancel_balance(
            transaction_id=transaction_id, account_number=account_number, amount=amount
        )
    except AccountError as e:
        _fail(ctx, e, service.save_failed_cancel, account_number, amount)
        return

    click.echo("Balance cancelled.")
    _echo_record(record)


@balance_group.command("show")
@click.argument("transaction_id")
@click.pass_context
@handle_errors
def show_transaction(ctx, transaction_id: str):
    """Show a transaction by its transaction ID."""
    service = TransactionService(ctx.obj["db"], ctx.obj["config"])
    _echo_record(service.query_transaction(transaction_id))


@balance_group.command("history")
@click.argument("account_number", callback=account_number_param)
@click.pass_context
@handle_errors
def transaction_history(ctx, account_number: str):
    """List every transaction recorded on an account, oldest first."""
    service = TransactionService(ctx.obj["db"], ctx.obj["config"])

    records = service.list_transactions(account_number)
    if not records:
        click.echo("No transactions found.")
        return

    click.echo(f"\nTransactions for account {account_number}:")
    click.echo("-" * 80)
    for record in records:
        click.echo(
            f"{record.transacted_at:%Y-%m-%d %H:%M} | {record.transaction_type.value:6s} | "
            f"{record.result.value:7s} | {record.amount:>13,} | {record.balance_snapshot:>15,} | "
            f"{record.transaction_id}"
        )


def register_commands(cli):
    """Register balance commands with main CLI."""
    cli.add_command(balance_group, name="balance")
