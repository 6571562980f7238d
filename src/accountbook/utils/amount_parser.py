"""Amount parsing utilities."""

import re

MIN_TRANSACTION_AMOUNT = 10
MAX_TRANSACTION_AMOUNT = 1_000_000_000


def parse_amount(amount_str: str) -> int:
    """Parse an amount string into an integer in the smallest currency unit.

    Handles various formats:
    - "1000"
    - "1,000"
    - "1_000"
    - "₩1,000" / "$1,000"

    Fractional amounts are rejected; amounts are always whole units.

    Args:
        amount_str: Amount string

    Returns:
        Integer amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols
    cleaned = re.sub(r"[$€£¥₩]", "", amount_str.strip())

    # Remove thousands separators
    cleaned = cleaned.replace(",", "").replace("_", "").strip()

    if not re.fullmatch(r"-?\d+", cleaned):
        raise ValueError(f"Could not parse amount '{amount_str}': expected a whole number")
    return int(cleaned)


def validate_transaction_amount(amount: int) -> int:
    """Check a use/cancel amount against the accepted request range.

    Raises:
        ValueError: If the amount is outside [MIN_TRANSACTION_AMOUNT, MAX_TRANSACTION_AMOUNT]
    """
    if amount < MIN_TRANSACTION_AMOUNT or amount > MAX_TRANSACTION_AMOUNT:
        raise ValueError(
            f"Amount must be between {MIN_TRANSACTION_AMOUNT:,} and {MAX_TRANSACTION_AMOUNT:,}, got {amount:,}"
        )
    return amount
