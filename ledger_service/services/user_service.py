import logging
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import Dict, Iterable, List, Optional
from ledger_service.core.config import settings
from ledger_service.core.exceptions import LedgerError
from ledger_service.models.users import User
from ledger_service.schemas.user_schema import UserCreate, UserDisplay

logger = logging.getLogger(__name__)


def create_user(db: Session, user_data: UserCreate) -> User:
    """Register a user profile"""
    if user_data.email:
        existing = db.query(User).filter(User.email == user_data.email).first()
        if existing:
            raise LedgerError("A user with this email already exists")

    user = User(
        name=user_data.name.strip(),
        email=user_data.email,
        image_url=user_data.image_url
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id}")
    return user


def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get a user by ID; None for unknown or deleted users"""
    return db.query(User).filter(User.id == user_id).first()


def resolve_users(db: Session, user_ids: Iterable[str], batch_size: Optional[int] = None) -> Dict[str, UserDisplay]:
    """
    Resolve user ids to display data.

    Lookups are batched into IN queries of at most ``batch_size`` ids.
    Ids that do not resolve are left out of the result; callers substitute
    a placeholder instead of failing.
    """
    batch_size = batch_size or settings.user_lookup_batch_size
    ids = list(dict.fromkeys(user_ids))
    resolved: Dict[str, UserDisplay] = {}

    for start in range(0, len(ids), batch_size):
        chunk = ids[start:start + batch_size]
        for user in db.query(User).filter(User.id.in_(chunk)).all():
            resolved[user.id] = UserDisplay.model_validate(user)

    missing = [user_id for user_id in ids if user_id not in resolved]
    if missing:
        logger.warning(f"Could not resolve {len(missing)} user(s): {missing}")

    return resolved


def search_users(db: Session, query: str, current_user_id: str) -> List[User]:
    """Search users by name or email, excluding the caller"""
    query = query.strip()
    if len(query) < 2:
        return []

    pattern = f"%{query}%"
    return db.query(User).filter(
        or_(User.name.ilike(pattern), User.email.ilike(pattern)),
        User.id != current_user_id
    ).order_by(User.name).limit(10).all()
