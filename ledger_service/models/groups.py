import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, Text, Integer
from sqlalchemy.orm import relationship
from ledger_service.db.database import Base


class MemberRole(str, enum.Enum):
    admin = "admin"
    member = "member"


def utcnow():
    return datetime.now(timezone.utc)


class Group(Base):
    __tablename__ = "groups"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), unique=True, nullable=False)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    created_by = Column(String, nullable=False)  # Reference to users (no FK constraint)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    members = relationship(
        "GroupMember",
        order_by="GroupMember.position",
        lazy="selectin",
        cascade="all, delete-orphan",
    )


class GroupMember(Base):
    __tablename__ = "group_members"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), unique=True, nullable=False)
    group_id = Column(String, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # Join order
    user_id = Column(String, nullable=False, index=True)  # Reference to users
    role = Column(Enum(MemberRole), nullable=False, default=MemberRole.member)
    joined_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
