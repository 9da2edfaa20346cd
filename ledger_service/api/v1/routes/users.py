from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from ledger_service.api.v1.deps import get_current_user_id
from ledger_service.core.exceptions import UserNotFound
from ledger_service.db.database import get_db
from ledger_service.services.user_service import create_user, get_user, search_users
from ledger_service.schemas.user_schema import UserCreate, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserOut)
def register_user(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """Register a user profile"""
    return create_user(db, user_data)


@router.get("/me", response_model=UserOut)
def get_me(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get the current user's profile"""
    user = get_user(db, user_id)
    if not user:
        raise UserNotFound()
    return user


@router.get("/search", response_model=List[UserOut])
def search(
    query: str = Query(..., description="Name or email fragment, at least 2 characters"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Search other users by name or email"""
    return search_users(db, query, user_id)
