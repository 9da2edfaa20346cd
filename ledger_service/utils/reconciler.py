"""
Settlement reconciliation.

Applies settlement records on top of the tallies built by
``ledger_service.utils.aggregator``. Each function returns a new structure
and leaves its input untouched. Counters stay signed here; clamping at zero
happens once, in the projector.
"""

import logging
from typing import Dict, Iterable

from ledger_service.utils.aggregator import GroupTally, Tally
from ledger_service.utils.money import to_decimal

logger = logging.getLogger(__name__)


def reconcile_pair_settlements(tally: Tally, settlements: Iterable, subject_id: str, counterpart_id: str) -> Tally:
    """
    Reduce a pair tally by the settlements made between the two users.

    Subject paid: the subject's debt (``owing``) goes down.
    Counterpart paid: what the counterpart owes (``owed``) goes down.
    """
    result = tally.copy()
    pair = {subject_id, counterpart_id}

    for settlement in settlements:
        if {settlement.paid_by_user_id, settlement.received_by_user_id} != pair:
            continue
        amount = to_decimal(settlement.amount)
        if settlement.paid_by_user_id == subject_id:
            result.owing -= amount
        else:
            result.owed -= amount

    return result


def reconcile_group_settlements(tally: GroupTally, settlements: Iterable) -> GroupTally:
    """
    Apply group settlements to the raw ledger and the signed totals.

    A payment mirrors an expense where the payer covers the receiver:
    the payer's total goes up, the receiver's goes down, and the payer's
    standing debt to the receiver shrinks. The ledger cell may go negative
    here; ``net_pairwise_ledger`` resolves it.
    """
    result = tally.copy()

    for settlement in settlements:
        payer = settlement.paid_by_user_id
        receiver = settlement.received_by_user_id
        amount = to_decimal(settlement.amount)

        result.ensure_member(payer)
        result.ensure_member(receiver)

        result.totals[payer] += amount
        result.totals[receiver] -= amount
        result.ledger[payer][receiver] -= amount

    return result


def reconcile_counterpart_settlements(tallies: Dict[str, Tally], settlements: Iterable, subject_id: str) -> Dict[str, Tally]:
    """
    Apply settlements to per-counterpart tallies of one subject.

    Settlements that do not involve the subject are ignored.
    """
    result = {cid: tally.copy() for cid, tally in tallies.items()}

    for settlement in settlements:
        amount = to_decimal(settlement.amount)
        if settlement.paid_by_user_id == subject_id:
            counterpart = settlement.received_by_user_id
            result.setdefault(counterpart, Tally()).owing -= amount
        elif settlement.received_by_user_id == subject_id:
            counterpart = settlement.paid_by_user_id
            result.setdefault(counterpart, Tally()).owed -= amount
        else:
            logger.debug(f"Skipping settlement {getattr(settlement, 'id', None)} not involving {subject_id}")

    return result
