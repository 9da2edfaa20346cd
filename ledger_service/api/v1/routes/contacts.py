from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ledger_service.api.v1.deps import get_current_user_id
from ledger_service.db.database import get_db
from ledger_service.services.contact_service import get_contacts
from ledger_service.schemas.contact_schema import ContactsOut

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("/", response_model=ContactsOut)
def get_all_contacts(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """1:1 contacts and groups of the current user"""
    return get_contacts(db, user_id)
