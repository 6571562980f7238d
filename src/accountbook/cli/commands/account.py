"""Account management commands."""

import click

from accountbook.cli.error_handling import handle_errors
from accountbook.cli.validation import account_number_param, initial_balance_param
from accountbook.domain.account import AccountService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("open")
@click.argument("user_id", type=click.IntRange(min=1))
@click.option(
    "--initial-balance",
    default="0",
    callback=initial_balance_param,
    help="Opening balance in whole currency units (default: 0)",
)
@click.pass_context
@handle_errors
def open_account(ctx, user_id: int, initial_balance: int):
    """Open a new account for a user.

    Examples:
        accountbook account open 12
        accountbook account open 12 --initial-balance 10,000
    """
    service = AccountService(ctx.obj["db"], ctx.obj["config"])
    account = service.create_account(user_id=user_id, initial_balance=initial_balance)
    click.echo(f"Opened account {account.account_number} for user {account.user_id}")
    click.echo(f"  Balance: {account.balance:,}")
    click.echo(f"  Registered: {account.registered_at:%Y-%m-%d %H:%M:%S}")


@account_group.command("close")
@click.argument("user_id", type=click.IntRange(min=1))
@click.argument("account_number", callback=account_number_param)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@handle_errors
def close_account(ctx, user_id: int, account_number: str, yes: bool):
    """Close an account.

    The account must belong to USER_ID and hold no balance. Closed accounts
    are kept for history and cannot be reopened.

    Examples:
        accountbook account close 12 1000000000
        accountbook account close 12 1000000000 --yes
    """
    service = AccountService(ctx.obj["db"], ctx.obj["config"])

    if not yes and not click.confirm(f"Are you sure you want to close account {account_number}?"):
        click.echo("Close cancelled.")
        return

    account = service.close_account(user_id=user_id, account_number=account_number)
    click.echo(f"Closed account {account.account_number}")
    click.echo(f"  Unregistered: {account.unregistered_at:%Y-%m-%d %H:%M:%S}")


@account_group.command("list")
@click.argument("user_id", type=click.IntRange(min=1))
@click.pass_context
@handle_errors
def list_accounts(ctx, user_id: int):
    """List a user's accounts."""
    service = AccountService(ctx.obj["db"], ctx.obj["config"])

    accounts = service.list_accounts_for_user(user_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo(f"\nAccounts for user {user_id}:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"{acc.account_number} | {acc.status.value:12s} | Balance: {acc.balance:>15,}")


@account_group.command("show")
@click.argument("account_number", callback=account_number_param)
@click.pass_context
@handle_errors
def show_account(ctx, account_number: str):
    """Show a single account."""
    service = AccountService(ctx.obj["db"], ctx.obj["config"])
    account = service.get_account(account_number)

    click.echo(f"Account: {account.account_number}")
    click.echo(f"  Owner: {account.user_id}")
    click.echo(f"  Status: {account.status.value}")
    click.echo(f"  Balance: {account.balance:,}")
    click.echo(f"  Registered: {account.registered_at:%Y-%m-%d %H:%M:%S}")
    if account.unregistered_at is not None:
        click.echo(f"  Unregistered: {account.unregistered_at:%Y-%m-%d %H:%M:%S}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
