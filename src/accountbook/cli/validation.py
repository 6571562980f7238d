"""Click parameter callbacks enforcing request bounds."""

import click

from accountbook.domain.entities import ACCOUNT_NUMBER_LENGTH
from accountbook.utils.amount_parser import parse_amount, validate_transaction_amount


def account_number_param(ctx: click.Context, param: click.Parameter, value: str) -> str:
    """Require an account number of exactly ACCOUNT_NUMBER_LENGTH characters."""
    value = value.strip()
    if len(value) != ACCOUNT_NUMBER_LENGTH:
        raise click.BadParameter(f"must be exactly {ACCOUNT_NUMBER_LENGTH} characters")
    return value


def transaction_amount_param(ctx: click.Context, param: click.Parameter, value: str) -> int:
    """Parse a use/cancel amount and check it against the accepted range."""
    try:
        return validate_transaction_amount(parse_amount(value))
    except ValueError as e:
        raise click.BadParameter(str(e))


def initial_balance_param(ctx: click.Context, param: click.Parameter, value: str) -> int:
    """Parse an opening balance, which may be zero but not negative."""
    try:
        amount = parse_amount(value)
    except ValueError as e:
        raise click.BadParameter(str(e))
    if amount < 0:
        raise click.BadParameter("cannot be negative")
    return amount
