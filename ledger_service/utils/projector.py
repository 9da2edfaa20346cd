"""
Balance projection.

Shapes reconciled tallies and netted ledgers into the payloads returned to
API callers. This is the only place amounts are rounded and outstanding
amounts are clamped at zero; signed balances are rounded but never clamped.

Every "who owes / is owed" list is sorted by amount, descending. Ties keep
the order in which counterparts were first met (members in join order,
then records in insertion order); Python's sort is stable.
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Tuple

from ledger_service.core.config import settings
from ledger_service.schemas.balance_schema import (
    BalanceEntry,
    CounterpartBalance,
    DashboardBalance,
    DebtFrom,
    DebtTo,
    MemberBalance,
    OweDetails,
    PairBalance,
)
from ledger_service.schemas.user_schema import UserDisplay
from ledger_service.utils.aggregator import GroupTally, Tally
from ledger_service.utils.money import ZERO, clamp_non_negative, is_zero, round_decimal


def display_for(users: Mapping[str, UserDisplay], user_id: str) -> UserDisplay:
    """Display data for ``user_id``, or a placeholder for a deleted user"""
    user = users.get(user_id)
    if user is None:
        return UserDisplay(id=user_id, name=settings.unknown_user_name)
    return user


def sort_by_amount(entries: List) -> List:
    return sorted(entries, key=lambda entry: entry.amount, reverse=True)


def clamp_tally(tally: Tally) -> Tuple[Decimal, Decimal]:
    """``(you_are_owed, you_owe)`` for a 1:1 tally, neither below zero"""
    return clamp_non_negative(tally.owed), clamp_non_negative(tally.owing)


def outstanding_net(tally: Tally) -> Decimal:
    """Signed net of a 1:1 tally after clamping both directions"""
    you_are_owed, you_owe = clamp_tally(tally)
    return you_are_owed - you_owe


def project_pair(tally: Tally, counterpart: UserDisplay) -> PairBalance:
    you_are_owed, you_owe = clamp_tally(tally)
    return PairBalance(
        counterpart=counterpart,
        you_are_owed=you_are_owed,
        you_owe=you_owe,
        net_balance=you_are_owed - you_owe,
    )


def project_counterparts(tallies: Mapping[str, Tally], users: Mapping[str, UserDisplay]) -> List[CounterpartBalance]:
    """One entry per counterpart, in tally order"""
    result = []
    for user_id, tally in tallies.items():
        user = display_for(users, user_id)
        you_are_owed, you_owe = clamp_tally(tally)
        result.append(CounterpartBalance(
            user_id=user_id,
            name=user.name,
            image_url=user.image_url,
            you_are_owed=you_are_owed,
            you_owe=you_owe,
            net_balance=you_are_owed - you_owe,
        ))
    return result


def project_group(tally: GroupTally, users: Mapping[str, UserDisplay]) -> List[MemberBalance]:
    """
    Per-member breakdown of a netted group tally.

    ``owes`` lists every creditor the member has a positive ledger cell
    towards; ``owed_by`` is the mirror image.
    """
    ids = tally.member_ids
    result = []

    for member_id in ids:
        user = display_for(users, member_id)
        owes = [
            DebtTo(to=other, amount=clamp_non_negative(tally.ledger[member_id].get(other, ZERO)))
            for other in ids
            if other != member_id
        ]
        owed_by = [
            DebtFrom(from_=other, amount=clamp_non_negative(tally.ledger[other].get(member_id, ZERO)))
            for other in ids
            if other != member_id
        ]
        result.append(MemberBalance(
            id=member_id,
            name=user.name,
            image_url=user.image_url,
            total_balance=round_decimal(tally.totals[member_id]),
            owes=sort_by_amount([debt for debt in owes if not is_zero(debt.amount)]),
            owed_by=sort_by_amount([debt for debt in owed_by if not is_zero(debt.amount)]),
        ))

    return result


def combine_counterpart_nets(
    personal: Mapping[str, Tally],
    groups: Iterable[GroupTally],
    subject_id: str,
) -> Dict[str, Decimal]:
    """
    Signed net per counterpart across 1:1 tallies and netted group ledgers.

    1:1 tallies are clamped the same way as the pair view, so a payment
    beyond what was owed never turns into a debt the other way.

    Positive means the counterpart owes the subject.
    """
    nets: Dict[str, Decimal] = {}

    for user_id, tally in personal.items():
        nets[user_id] = nets.get(user_id, ZERO) + outstanding_net(tally)

    for group in groups:
        if subject_id not in group.ledger:
            continue
        for other in group.member_ids:
            if other == subject_id:
                continue
            owed_to_me = group.ledger[other].get(subject_id, ZERO)
            i_owe = group.ledger[subject_id].get(other, ZERO)
            nets[other] = nets.get(other, ZERO) + owed_to_me - i_owe

    return nets


def project_dashboard(nets: Mapping[str, Decimal], users: Mapping[str, UserDisplay]) -> DashboardBalance:
    """
    Scalar view over signed per-counterpart nets.

    Counterparts whose net rounds to zero appear in neither list.
    """
    you_owe_list = []
    owed_by_list = []

    for user_id, net in nets.items():
        net = round_decimal(net)
        if is_zero(net):
            continue
        user = display_for(users, user_id)
        entry = BalanceEntry(user_id=user_id, name=user.name, image_url=user.image_url, amount=abs(net))
        if net > 0:
            owed_by_list.append(entry)
        else:
            you_owe_list.append(entry)

    you_are_owed = sum((entry.amount for entry in owed_by_list), ZERO)
    you_owe = sum((entry.amount for entry in you_owe_list), ZERO)

    return DashboardBalance(
        you_owe=you_owe,
        you_are_owed=you_are_owed,
        total_balance=you_are_owed - you_owe,
        owe_details=OweDetails(
            you_owe=sort_by_amount(you_owe_list),
            you_are_owed_by=sort_by_amount(owed_by_list),
        ),
    )
