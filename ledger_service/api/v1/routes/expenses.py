from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from ledger_service.api.v1.deps import get_current_user_id
from ledger_service.db.database import get_db
from ledger_service.services.expense_service import create_expense, list_group_expenses
from ledger_service.services.group_service import get_group_for_member
from ledger_service.schemas.expense_schema import ExpenseCreate, ExpenseOut

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("/", response_model=ExpenseOut)
def create_new_expense(
    expense_data: ExpenseCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create a new expense with splits"""
    return create_expense(db, expense_data, user_id)


@router.get("/groups/{group_id}", response_model=List[ExpenseOut])
def get_group_expenses_list(
    group_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get all expenses for a group"""
    group = get_group_for_member(db, group_id, user_id)
    return list_group_expenses(db, group.id)
