import logging
from sqlalchemy.orm import Session
from typing import List, Optional
from ledger_service.core.exceptions import GroupNotFound, LedgerError, NotAMember, UserNotFound
from ledger_service.models.groups import Group, GroupMember, MemberRole
from ledger_service.schemas.group_schema import (
    GroupCreate, GroupDetails, GroupMemberDetail, GroupSummary
)
from ledger_service.services.user_service import get_user, resolve_users

logger = logging.getLogger(__name__)


def create_group(db: Session, group_data: GroupCreate, created_by: str) -> Group:
    """Create a group; the creator always joins as admin"""
    name = group_data.name.strip()
    if not name:
        raise LedgerError("Group name cannot be empty")

    member_ids = list(dict.fromkeys([created_by, *group_data.members]))

    # Validate all members exist
    for user_id in member_ids:
        if not get_user(db, user_id):
            raise UserNotFound(f"User with ID {user_id} not found")

    group = Group(
        name=name,
        description=(group_data.description or "").strip(),
        created_by=created_by
    )
    group.members = [
        GroupMember(
            position=position,
            user_id=user_id,
            role=MemberRole.admin if user_id == created_by else MemberRole.member
        )
        for position, user_id in enumerate(member_ids)
    ]
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info(f"Created group {group.id} with {len(member_ids)} members")
    return group


def get_group(db: Session, group_id: str) -> Optional[Group]:
    """Get a group by ID"""
    return db.query(Group).filter(Group.id == group_id).first()


def get_group_for_member(db: Session, group_id: str, user_id: str) -> Group:
    """Get a group, rejecting unknown groups and non-members"""
    group = get_group(db, group_id)
    if not group:
        raise GroupNotFound()
    if not is_group_member(group, user_id):
        raise NotAMember()
    return group


def get_user_groups(db: Session, user_id: str) -> List[Group]:
    """Get all groups for a user"""
    return db.query(Group).join(GroupMember).filter(
        GroupMember.user_id == user_id
    ).order_by(Group.name).all()


def is_group_member(group: Group, user_id: str) -> bool:
    """Check if user is member of the group"""
    return any(member.user_id == user_id for member in group.members)


def get_member_ids(group: Group) -> List[str]:
    """Member ids in join order"""
    return [member.user_id for member in group.members]


def summarize_group(group: Group) -> GroupSummary:
    return GroupSummary(
        id=group.id,
        name=group.name,
        description=group.description,
        member_count=len(group.members)
    )


def get_member_details(db: Session, group: Group) -> List[GroupMemberDetail]:
    """Members joined with their profiles; members whose user was deleted are left out"""
    users = resolve_users(db, get_member_ids(group))
    details = []
    for member in group.members:
        user = users.get(member.user_id)
        if user is None:
            continue
        details.append(GroupMemberDetail(
            id=user.id,
            name=user.name,
            email=user.email,
            image_url=user.image_url,
            role=member.role.value
        ))
    return details


def get_group_details(db: Session, group_id: str, user_id: str) -> GroupDetails:
    """Group with member details, for members only"""
    group = get_group_for_member(db, group_id, user_id)
    return GroupDetails(
        id=group.id,
        name=group.name,
        description=group.description,
        created_by=group.created_by,
        members=get_member_details(db, group)
    )
