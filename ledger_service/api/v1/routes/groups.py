from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from ledger_service.api.v1.deps import get_current_user_id
from ledger_service.db.database import get_db
from ledger_service.services.group_service import (
    create_group, get_group_details, get_user_groups, summarize_group
)
from ledger_service.schemas.group_schema import (
    GroupCreate, GroupDetails, GroupSummary, GroupWithMembers
)

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post("/", response_model=GroupWithMembers)
def create_new_group(
    group_data: GroupCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create a new group"""
    return create_group(db, group_data, user_id)


@router.get("/", response_model=List[GroupSummary])
def get_my_groups(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get all groups for current user"""
    return [summarize_group(group) for group in get_user_groups(db, user_id)]


@router.get("/{group_id}", response_model=GroupDetails)
def get_group_with_members(
    group_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get group details with members"""
    return get_group_details(db, group_id, user_id)
