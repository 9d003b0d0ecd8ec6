"""Money arithmetic.

Amounts are persisted as floats and never combined as floats: every sum or
product goes through Decimal and is rounded half-up to cents.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(amount) -> Decimal:
    """Coerce a float/int/str/Decimal amount to a cent-quantized Decimal."""
    if amount is None:
        return ZERO
    if isinstance(amount, float):
        amount = repr(amount)
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity: int) -> Decimal:
    return (to_decimal(unit_price) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)


def total(amounts) -> Decimal:
    return sum((to_decimal(a) for a in amounts), ZERO)


def to_float(amount) -> float:
    """Convert to the float stored in ``Float`` fields."""
    return float(to_decimal(amount))
