import logging
from sqlalchemy.orm import Session
from ledger_service.schemas.contact_schema import ContactsOut
from ledger_service.services.expense_service import list_personal_expenses_involving
from ledger_service.services.group_service import get_user_groups, summarize_group
from ledger_service.services.user_service import resolve_users

logger = logging.getLogger(__name__)


def get_contacts(db: Session, user_id: str) -> ContactsOut:
    """Counterparts from 1:1 expenses plus the caller's groups, each sorted by name"""
    contact_ids = []
    for expense in list_personal_expenses_involving(db, user_id):
        if expense.paid_by_user_id != user_id:
            contact_ids.append(expense.paid_by_user_id)
        contact_ids.extend(split.user_id for split in expense.splits if split.user_id != user_id)

    # Deleted users are dropped rather than shown as placeholders
    users = list(resolve_users(db, contact_ids).values())
    users.sort(key=lambda user: user.name.lower())

    groups = [summarize_group(group) for group in get_user_groups(db, user_id)]
    groups.sort(key=lambda group: group.name.lower())

    return ContactsOut(users=users, groups=groups)
