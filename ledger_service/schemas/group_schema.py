from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from enum import Enum


class MemberRole(str, Enum):
    admin = "admin"
    member = "member"


class GroupBase(BaseModel):
    name: str = Field(..., max_length=100)
    description: Optional[str] = None


class GroupCreate(GroupBase):
    # Creator is always added as admin, even if missing here
    members: List[str] = []


class GroupMemberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    role: MemberRole
    joined_at: datetime


class GroupOut(GroupBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_by: str
    created_at: datetime


class GroupWithMembers(GroupOut):
    members: List[GroupMemberOut] = []


class GroupMemberDetail(BaseModel):
    """A group member joined with their user profile"""
    id: str
    name: str
    email: Optional[str] = None
    image_url: Optional[str] = None
    role: MemberRole


class GroupSummary(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    member_count: int = 0


class GroupDetails(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_by: str
    members: List[GroupMemberDetail] = []
