from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ledger_service.api.v1.deps import get_current_user_id
from ledger_service.db.database import get_db
from ledger_service.services.balance_service import (
    get_dashboard_balance, get_group_balances, get_pair_balance
)
from ledger_service.schemas.balance_schema import DashboardBalance, GroupBalances, PairBalance

router = APIRouter(prefix="/balances", tags=["balances"])


@router.get("/dashboard", response_model=DashboardBalance)
def get_my_balance(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Total balance across all counterparts and groups"""
    return get_dashboard_balance(db, user_id)


@router.get("/users/{counterpart_id}", response_model=PairBalance)
def get_balance_with_user(
    counterpart_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Balance with one other user, outside groups"""
    return get_pair_balance(db, user_id, counterpart_id)


@router.get("/groups/{group_id}", response_model=GroupBalances)
def get_balances_in_group(
    group_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Netted pairwise balances of every group member"""
    return get_group_balances(db, user_id, group_id)
