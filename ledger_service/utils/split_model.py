"""
Predicates over expense and split records.

Records are duck-typed: ORM rows and pydantic schemas both work as long as
an expense exposes ``paid_by_user_id`` and ``splits``, and a split exposes
``user_id``, ``amount`` and ``paid``.
"""

from decimal import Decimal

from ledger_service.utils.money import ZERO, to_decimal


def is_outstanding(split, payer_id: str) -> bool:
    """A split counts towards a debt unless it is the payer's own or already paid"""
    return split.user_id != payer_id and not split.paid


def involves(expense, user_id: str) -> bool:
    """True if the user paid the expense or appears among its splits"""
    if expense.paid_by_user_id == user_id:
        return True
    return any(split.user_id == user_id for split in expense.splits)


def involves_both(expense, user_a: str, user_b: str) -> bool:
    return involves(expense, user_a) and involves(expense, user_b)


def outstanding_amount(expense, user_id: str) -> Decimal:
    """
    What ``user_id`` still owes the payer of ``expense``.

    Every outstanding listing of the user counts, so a user listed twice
    owes both shares.
    """
    total = ZERO
    for split in expense.splits:
        if split.user_id == user_id and is_outstanding(split, expense.paid_by_user_id):
            total += to_decimal(split.amount)
    return total
