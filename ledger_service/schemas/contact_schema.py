from pydantic import BaseModel
from typing import List
from ledger_service.schemas.user_schema import UserDisplay
from ledger_service.schemas.group_schema import GroupSummary


class ContactsOut(BaseModel):
    """People the caller shares 1:1 expenses with, and the caller's groups"""
    users: List[UserDisplay] = []
    groups: List[GroupSummary] = []
