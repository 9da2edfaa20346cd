"""
Expense aggregation.

Folds expense records for one scope into running totals:

- pair scope: what a counterpart owes the subject and what the subject owes
  the counterpart, from expenses involving both of them
- group scope: a directional debtor -> creditor ledger plus a flat signed
  total per member
- counterpart scope: one pair tally per counterpart of a subject, used by
  the dashboard and the per-member group view

Sign convention for tallies: ``owed`` is what the counterpart owes the
subject, ``owing`` is what the subject owes the counterpart, and
``net = owed - owing`` is positive when the subject is owed money.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List

from ledger_service.utils.money import ZERO, to_decimal
from ledger_service.utils.split_model import (
    involves_both,
    is_outstanding,
    outstanding_amount,
)

logger = logging.getLogger(__name__)


class Tally:
    """Directional running totals between a subject and one counterpart"""

    __slots__ = ("owed", "owing")

    def __init__(self, owed: Decimal = ZERO, owing: Decimal = ZERO):
        self.owed = owed
        self.owing = owing

    @property
    def net(self) -> Decimal:
        return self.owed - self.owing

    def copy(self) -> "Tally":
        return Tally(self.owed, self.owing)

    def __eq__(self, other):
        if not isinstance(other, Tally):
            return NotImplemented
        return self.owed == other.owed and self.owing == other.owing

    def __repr__(self):
        return f"Tally(owed={self.owed}, owing={self.owing})"


class GroupTally:
    """
    Group-wide totals.

    ``ledger[debtor][creditor]`` is what ``debtor`` owes ``creditor`` and
    ``totals[member]`` is the member's signed balance within the group.
    Every member has a row and a total from the start; ids first seen in
    records are appended in encounter order.
    """

    def __init__(self, member_ids: Iterable[str]):
        self.member_ids: List[str] = []
        self.totals: Dict[str, Decimal] = {}
        self.ledger: Dict[str, Dict[str, Decimal]] = {}
        for member_id in member_ids:
            self.add_member(member_id)

    def add_member(self, member_id: str) -> None:
        if member_id in self.totals:
            return
        for other in self.member_ids:
            self.ledger[other][member_id] = ZERO
        self.ledger[member_id] = {other: ZERO for other in self.member_ids}
        self.member_ids.append(member_id)
        self.totals[member_id] = ZERO

    def ensure_member(self, member_id: str) -> None:
        if member_id not in self.totals:
            logger.warning(f"User {member_id} appears in group records but is not a current member")
            self.add_member(member_id)

    def copy(self) -> "GroupTally":
        clone = GroupTally([])
        clone.member_ids = list(self.member_ids)
        clone.totals = dict(self.totals)
        clone.ledger = {debtor: dict(row) for debtor, row in self.ledger.items()}
        return clone


def aggregate_pair_expenses(expenses: Iterable, subject_id: str, counterpart_id: str) -> Tally:
    """
    Tally the expenses shared between two users.

    Only expenses paid by one of the pair and involving the other count.
    When the subject paid, the counterpart's outstanding splits add to
    ``owed``; when the counterpart paid, the subject's outstanding splits add
    to ``owing``.
    """
    tally = Tally()

    for expense in expenses:
        if not involves_both(expense, subject_id, counterpart_id):
            continue

        if expense.paid_by_user_id == subject_id:
            tally.owed += outstanding_amount(expense, counterpart_id)
        elif expense.paid_by_user_id == counterpart_id:
            tally.owing += outstanding_amount(expense, subject_id)

    return tally


def aggregate_group_expenses(expenses: Iterable, member_ids: Iterable[str]) -> GroupTally:
    """
    Build the raw directional ledger and signed totals for a group.

    Every outstanding split records ``debtor -> payer`` for the split amount.
    Repeated listings of one user within an expense's splits each count.
    """
    tally = GroupTally(member_ids)

    for expense in expenses:
        payer = expense.paid_by_user_id
        for split in expense.splits:
            if not is_outstanding(split, payer):
                continue
            debtor = split.user_id
            amount = to_decimal(split.amount)

            tally.ensure_member(payer)
            tally.ensure_member(debtor)

            tally.totals[payer] += amount
            tally.totals[debtor] -= amount
            tally.ledger[debtor][payer] += amount

    return tally


def aggregate_counterpart_expenses(expenses: Iterable, subject_id: str, counterpart_ids: Iterable[str] = ()) -> Dict[str, Tally]:
    """
    Tally every counterpart of the subject at once.

    When the subject paid, each other participant's outstanding split adds
    to that participant's ``owed``. When someone else paid, the subject's
    outstanding splits add to the payer's ``owing``. Repeated listings each
    count in both directions. Counterparts listed up front keep their
    position; others are added as they are met.
    """
    tallies: Dict[str, Tally] = {cid: Tally() for cid in counterpart_ids if cid != subject_id}

    for expense in expenses:
        payer = expense.paid_by_user_id
        if payer == subject_id:
            for split in expense.splits:
                if not is_outstanding(split, payer):
                    continue
                tallies.setdefault(split.user_id, Tally()).owed += to_decimal(split.amount)
        else:
            owing = outstanding_amount(expense, subject_id)
            if owing:
                tallies.setdefault(payer, Tally()).owing += owing

    return tallies
