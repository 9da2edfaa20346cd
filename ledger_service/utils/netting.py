"""
Pairwise netting of a group's directional ledger.

Each unordered pair of members is collapsed into a single direction whose
magnitude is the difference between the two raw directions. Pairs are
visited once, in lexicographic order of member ids.

Netting is pairwise only: a cycle such as A owes B, B owes C, C owes A of
equal amounts stays as three separate entries. Cancelling debts across
three or more members is not attempted.
"""

from decimal import Decimal
from typing import Dict, Iterable, Optional

from ledger_service.utils.aggregator import GroupTally
from ledger_service.utils.money import ZERO, is_zero

Ledger = Dict[str, Dict[str, Decimal]]


def net_pairwise_ledger(ledger: Ledger, member_ids: Optional[Iterable[str]] = None) -> Ledger:
    """
    Return a netted copy of ``ledger``.

    After netting, for every pair at most one of ``ledger[a][b]`` and
    ``ledger[b][a]`` is non-zero, and it equals
    ``|raw[a][b] - raw[b][a]|``. Differences below the money tolerance
    net to zero in both directions. All cells are non-negative.

    Args:
        ledger: ``ledger[debtor][creditor]`` amounts, possibly negative
        member_ids: Members to net; defaults to the ledger's rows

    Returns:
        A new ledger; the input is not modified
    """
    ids = sorted(member_ids if member_ids is not None else ledger.keys())
    netted = {debtor: dict(row) for debtor, row in ledger.items()}
    for member_id in ids:
        netted.setdefault(member_id, {})

    for i, a in enumerate(ids):
        for b in ids[i + 1:]:
            diff = netted[a].get(b, ZERO) - netted[b].get(a, ZERO)
            if is_zero(diff):
                netted[a][b] = ZERO
                netted[b][a] = ZERO
            elif diff > 0:
                netted[a][b] = diff
                netted[b][a] = ZERO
            else:
                netted[b][a] = -diff
                netted[a][b] = ZERO

    return netted


def net_group_tally(tally: GroupTally) -> GroupTally:
    """Net the ledger of a group tally; totals are already net"""
    result = tally.copy()
    result.ledger = net_pairwise_ledger(tally.ledger, tally.member_ids)
    return result
