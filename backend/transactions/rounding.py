# transactions/rounding.py
"""
Rounding helpers for minor-unit amounts.

Every rounding in the ledger goes through `round_half_up`, which rounds
halves away from zero (2.5 -> 3, -2.5 -> -3). Each value is rounded on its
own; no remainder is carried between currencies.
"""

from decimal import Decimal, ROUND_HALF_UP


def to_decimal(value) -> Decimal:
    """Convert ints, floats, strings and Decimals without float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_half_up(value, places: int = 0):
    """
    Round `value` half away from zero.

    Returns an int when `places` is 0, a Decimal otherwise.
    """
    exponent = Decimal(1).scaleb(-places)
    rounded = to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return rounded


def to_negative(value):
    """Outflows are stored as negative numbers whatever the input sign."""
    return -abs(value)
