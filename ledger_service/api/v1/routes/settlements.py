from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Union
from ledger_service.api.v1.deps import get_current_user_id
from ledger_service.db.database import get_db
from ledger_service.services.settlement_service import create_settlement
from ledger_service.services.balance_service import get_settlement_data
from ledger_service.schemas.settlement_schema import SettlementCreate, SettlementOut
from ledger_service.schemas.balance_schema import GroupSettlementBalances, PairBalance

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.post("/", response_model=SettlementOut)
def create_new_settlement(
    settlement_data: SettlementCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Record a payment between two users"""
    return create_settlement(db, settlement_data, user_id)


@router.get("/{entity_type}/{entity_id}", response_model=Union[PairBalance, GroupSettlementBalances])
def get_settlement_page_data(
    entity_type: str,
    entity_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Balances to settle with a user or within a group ("user" | "group")"""
    return get_settlement_data(db, user_id, entity_type, entity_id)
