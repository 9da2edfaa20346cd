"""
Balance queries.

Each query fetches the records for one scope, runs them through the ledger
engine (aggregate, reconcile, net, project) and resolves display data for
the users involved. Nothing is cached: balances are recomputed from the full
history on every call.
"""
import logging
from sqlalchemy.orm import Session
from typing import Iterable, List
from ledger_service.core.exceptions import CounterpartNotFound, InvalidCounterpart, InvalidEntityType
from ledger_service.schemas.balance_schema import (
    DashboardBalance, GroupBalances, GroupSettlementBalances, PairBalance
)
from ledger_service.schemas.expense_schema import ExpenseOut
from ledger_service.schemas.settlement_schema import SettlementOut
from ledger_service.services.expense_service import (
    list_group_expenses, list_personal_expenses_involving, list_personal_expenses_paid_by
)
from ledger_service.services.group_service import (
    get_group_for_member, get_member_details, get_member_ids, get_user_groups, summarize_group
)
from ledger_service.services.settlement_service import (
    list_group_settlements, list_personal_settlements_between, list_personal_settlements_involving
)
from ledger_service.services.user_service import get_user, resolve_users
from ledger_service.schemas.user_schema import UserDisplay
from ledger_service.utils.aggregator import (
    GroupTally, aggregate_counterpart_expenses, aggregate_group_expenses, aggregate_pair_expenses
)
from ledger_service.utils.netting import net_group_tally
from ledger_service.utils.projector import (
    combine_counterpart_nets, project_counterparts, project_dashboard, project_group, project_pair
)
from ledger_service.utils.reconciler import (
    reconcile_counterpart_settlements, reconcile_group_settlements, reconcile_pair_settlements
)

logger = logging.getLogger(__name__)


def compute_group_tally(expenses: Iterable, settlements: Iterable, member_ids: Iterable[str]) -> GroupTally:
    """Aggregate, reconcile and net one group's records"""
    tally = aggregate_group_expenses(expenses, member_ids)
    tally = reconcile_group_settlements(tally, settlements)
    return net_group_tally(tally)


def get_pair_balance(db: Session, user_id: str, counterpart_id: str) -> PairBalance:
    """Balance between the caller and one other user, outside any group"""
    if counterpart_id == user_id:
        raise InvalidCounterpart()

    counterpart = get_user(db, counterpart_id)
    if not counterpart:
        raise CounterpartNotFound()

    expenses = list_personal_expenses_paid_by(db, user_id) + list_personal_expenses_paid_by(db, counterpart_id)
    settlements = list_personal_settlements_between(db, user_id, counterpart_id)

    tally = aggregate_pair_expenses(expenses, user_id, counterpart_id)
    tally = reconcile_pair_settlements(tally, settlements, user_id, counterpart_id)
    logger.debug(f"Pair balance {user_id} / {counterpart_id}: {tally}")

    return project_pair(tally, UserDisplay.model_validate(counterpart))


def get_group_settlement_balances(db: Session, user_id: str, group_id: str) -> GroupSettlementBalances:
    """The caller's balance against every other member of a group"""
    group = get_group_for_member(db, group_id, user_id)

    other_ids = [member_id for member_id in get_member_ids(group) if member_id != user_id]
    tallies = aggregate_counterpart_expenses(list_group_expenses(db, group.id), user_id, other_ids)
    tallies = reconcile_counterpart_settlements(tallies, list_group_settlements(db, group.id), user_id)

    users = resolve_users(db, tallies.keys())
    return GroupSettlementBalances(
        group=summarize_group(group),
        balances=project_counterparts(tallies, users)
    )


def get_settlement_data(db: Session, user_id: str, entity_type: str, entity_id: str):
    """Balances for a settlement page of a user or a group"""
    if entity_type == "user":
        return get_pair_balance(db, user_id, entity_id)
    if entity_type == "group":
        return get_group_settlement_balances(db, user_id, entity_id)
    raise InvalidEntityType()


def get_group_balances(db: Session, user_id: str, group_id: str) -> GroupBalances:
    """Full pairwise breakdown of a group, with its records and members"""
    group = get_group_for_member(db, group_id, user_id)

    expenses = list_group_expenses(db, group.id)
    settlements = list_group_settlements(db, group.id)
    tally = compute_group_tally(expenses, settlements, get_member_ids(group))

    members = get_member_details(db, group)
    users = resolve_users(db, tally.member_ids)

    return GroupBalances(
        group=summarize_group(group),
        members=members,
        expenses=[ExpenseOut.model_validate(expense) for expense in expenses],
        settlements=[SettlementOut.model_validate(settlement) for settlement in settlements],
        balances=project_group(tally, users),
        user_lookup_map={member.id: member for member in members}
    )


def get_dashboard_balance(db: Session, user_id: str) -> DashboardBalance:
    """The caller's balance across all 1:1 counterparts and groups"""
    personal = aggregate_counterpart_expenses(list_personal_expenses_involving(db, user_id), user_id)
    personal = reconcile_counterpart_settlements(
        personal, list_personal_settlements_involving(db, user_id), user_id
    )

    group_tallies: List[GroupTally] = []
    for group in get_user_groups(db, user_id):
        group_tallies.append(compute_group_tally(
            list_group_expenses(db, group.id),
            list_group_settlements(db, group.id),
            get_member_ids(group)
        ))

    nets = combine_counterpart_nets(personal, group_tallies, user_id)
    users = resolve_users(db, nets.keys())
    return project_dashboard(nets, users)
