"""
Money helpers.

Amounts are Decimals. Every stored adjustment amount is rounded to cents
(ROUND_HALF_UP) once, when the adjustment is created; totals only add
already rounded values.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal('0')
CENT = Decimal('0.01')
HUNDRED = Decimal('100')


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal going through str so floats keep their printed value."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value: Number) -> Decimal:
    """Round to cents, half up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage_of(amount: Number, percentage: Number) -> Decimal:
    """`percentage` percent of `amount`, unrounded."""
    return to_decimal(amount) * to_decimal(percentage) / HUNDRED


def sum_money(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def extract_vat(total: Number, vat_rate: Number) -> Decimal:
    """VAT contained in a VAT-inclusive total: total - total / (1 + rate)."""
    total = to_decimal(total)
    return total - total / (1 + to_decimal(vat_rate))
