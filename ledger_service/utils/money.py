"""
Money helpers shared by the ledger engine and the write path.

All amounts are ``Decimal`` in a single implicit currency. Equality and
validity checks go through a fixed tolerance instead of exact comparison.
"""

from decimal import Decimal, ROUND_DOWN
from typing import Iterable, List

from ledger_service.core.config import settings

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Convert ints, floats and strings to Decimal without float artefacts"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_decimal(value: Decimal, precision: Decimal = CENT) -> Decimal:
    """
    Round a Decimal value to the specified precision.

    Example:
        >>> round_decimal(Decimal("43.333333"))
        Decimal('43.33')
    """
    return to_decimal(value).quantize(precision)


def is_zero(value: Decimal, tolerance: Decimal = None) -> bool:
    """True when ``value`` is closer to zero than the tolerance"""
    if tolerance is None:
        tolerance = settings.money_tolerance
    return abs(to_decimal(value)) < tolerance


def amounts_match(a: Decimal, b: Decimal, tolerance: Decimal = None) -> bool:
    """True when two amounts differ by at most the tolerance"""
    if tolerance is None:
        tolerance = settings.money_tolerance
    return abs(to_decimal(a) - to_decimal(b)) <= tolerance


def clamp_non_negative(value: Decimal) -> Decimal:
    """Round to cents and never go below zero"""
    value = round_decimal(value)
    return value if value > ZERO else ZERO


def validate_split_sum(split_amounts: Iterable[Decimal], amount: Decimal, tolerance: Decimal = None) -> None:
    """
    Check that split amounts add up to the expense amount.

    Raises:
        ValueError: If the sum is off by more than the tolerance
    """
    total = sum((to_decimal(a) for a in split_amounts), ZERO)
    if not amounts_match(total, amount, tolerance):
        raise ValueError(
            f"Split amounts don't add up to the total: splits={total}, amount={amount}"
        )


def distribute_equally(amount: Decimal, count: int) -> List[Decimal]:
    """
    Divide ``amount`` into ``count`` cent-rounded shares summing exactly to it.

    Leftover cents go to the first shares, one cent each.

    Example:
        >>> distribute_equally(Decimal("100"), 3)
        [Decimal('33.34'), Decimal('33.33'), Decimal('33.33')]
    """
    if count <= 0:
        return []
    amount = round_decimal(amount)
    base = (amount / count).quantize(CENT, rounding=ROUND_DOWN)
    remainder = int((amount - base * count) / CENT)
    return [base + CENT if i < remainder else base for i in range(count)]


def distribute_by_percentage(amount: Decimal, percentages: List[Decimal]) -> List[Decimal]:
    """
    Divide ``amount`` by percentages (expected to total 100).

    The last share absorbs the rounding difference so the shares sum to the
    amount whenever the percentages total exactly 100.
    """
    amount = round_decimal(amount)
    shares = [round_decimal(amount * to_decimal(p) / Decimal("100")) for p in percentages]
    if shares and sum(to_decimal(p) for p in percentages) == Decimal("100"):
        shares[-1] += amount - sum(shares, ZERO)
    return shares
