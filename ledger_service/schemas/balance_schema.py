from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Literal
from decimal import Decimal

from ledger_service.schemas.user_schema import UserDisplay
from ledger_service.schemas.group_schema import GroupSummary, GroupMemberDetail
from ledger_service.schemas.expense_schema import ExpenseOut
from ledger_service.schemas.settlement_schema import SettlementOut


class BalanceEntry(BaseModel):
    """One counterpart in a "who owes me" / "whom I owe" list"""
    user_id: str
    name: str
    image_url: Optional[str] = None
    amount: Decimal


class OweDetails(BaseModel):
    you_owe: List[BalanceEntry] = []
    you_are_owed_by: List[BalanceEntry] = []


class DashboardBalance(BaseModel):
    """Scalar view: the subject's balance across every counterpart and group"""
    you_owe: Decimal
    you_are_owed: Decimal
    total_balance: Decimal
    owe_details: OweDetails


class PairBalance(BaseModel):
    """Pair view: the subject against one counterpart, outside any group"""
    type: Literal["user"] = "user"
    counterpart: UserDisplay
    you_are_owed: Decimal
    you_owe: Decimal
    net_balance: Decimal


class DebtTo(BaseModel):
    to: str
    amount: Decimal


class DebtFrom(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from")
    amount: Decimal


class MemberBalance(BaseModel):
    """Group view entry built from the netted pairwise ledger"""
    id: str
    name: str
    image_url: Optional[str] = None
    total_balance: Decimal
    owes: List[DebtTo] = []
    owed_by: List[DebtFrom] = []


class CounterpartBalance(BaseModel):
    """The subject against one other member of a group"""
    user_id: str
    name: str
    image_url: Optional[str] = None
    you_are_owed: Decimal
    you_owe: Decimal
    net_balance: Decimal


class GroupSettlementBalances(BaseModel):
    type: Literal["group"] = "group"
    group: GroupSummary
    balances: List[CounterpartBalance] = []


class GroupBalances(BaseModel):
    group: GroupSummary
    members: List[GroupMemberDetail] = []
    expenses: List[ExpenseOut] = []
    settlements: List[SettlementOut] = []
    balances: List[MemberBalance] = []
    user_lookup_map: Dict[str, GroupMemberDetail] = {}
