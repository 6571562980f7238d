"""Generators for account numbers and opaque transaction ids."""

import random
import uuid

ACCOUNT_NUMBER_MIN = 1_000_000_000
ACCOUNT_NUMBER_MAX = 1_999_999_999

_random = random.SystemRandom()


def random_account_number() -> str:
    """Return a random 10-digit account number.

    Uniqueness is not guaranteed; callers check against storage and draw again
    on collision.
    """
    return str(_random.randint(ACCOUNT_NUMBER_MIN, ACCOUNT_NUMBER_MAX))


def new_transaction_id() -> str:
    """Return an opaque, non-sequential transaction id (32 hex characters)."""
    return uuid.uuid4().hex
