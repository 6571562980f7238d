"""Utility functions for accountbook."""

from accountbook.utils.amount_parser import parse_amount, validate_transaction_amount
from accountbook.utils.clock import as_utc, utc_now
from accountbook.utils.identifiers import new_transaction_id, random_account_number

__all__ = [
    "parse_amount",
    "validate_transaction_amount",
    "as_utc",
    "utc_now",
    "new_transaction_id",
    "random_account_number",
]
