import logging
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_
from typing import List, Optional
from ledger_service.core.exceptions import InvalidSettlement, GroupNotFound, UserNotFound
from ledger_service.models.settlements import Settlement
from ledger_service.schemas.settlement_schema import SettlementCreate
from ledger_service.utils.money import ZERO, round_decimal

logger = logging.getLogger(__name__)


def validate_settlement(db: Session, settlement_data: SettlementCreate, user_id: str) -> None:
    """Reject settlements that must never be recorded"""
    from ledger_service.services.group_service import get_group, is_group_member
    from ledger_service.services.user_service import get_user

    if settlement_data.amount <= ZERO:
        raise InvalidSettlement("Amount must be positive")

    if settlement_data.paid_by_user_id == settlement_data.received_by_user_id:
        raise InvalidSettlement("Payer and receiver cannot be the same user")

    # Users can only create settlements they're involved in
    if user_id not in (settlement_data.paid_by_user_id, settlement_data.received_by_user_id):
        raise InvalidSettlement("You must be either the payer or the receiver")

    if settlement_data.group_id:
        group = get_group(db, settlement_data.group_id)
        if not group:
            raise GroupNotFound()
        if not is_group_member(group, settlement_data.paid_by_user_id) or \
                not is_group_member(group, settlement_data.received_by_user_id):
            raise InvalidSettlement("Both parties must be members of the group")
    else:
        for party_id in (settlement_data.paid_by_user_id, settlement_data.received_by_user_id):
            if not get_user(db, party_id):
                raise UserNotFound(f"User with ID {party_id} not found")


def create_settlement(db: Session, settlement_data: SettlementCreate, user_id: str) -> Settlement:
    """Record a direct payment between two users"""
    validate_settlement(db, settlement_data, user_id)

    settlement = Settlement(
        amount=round_decimal(settlement_data.amount),
        note=settlement_data.note,
        paid_by_user_id=settlement_data.paid_by_user_id,
        received_by_user_id=settlement_data.received_by_user_id,
        group_id=settlement_data.group_id,
        related_expense_ids=settlement_data.related_expense_ids,
        created_by=user_id
    )
    db.add(settlement)
    db.commit()
    db.refresh(settlement)
    logger.info(
        f"Recorded settlement {settlement.id}: {settlement.paid_by_user_id} paid "
        f"{settlement.received_by_user_id} {settlement.amount}"
    )
    return settlement


def get_settlement(db: Session, settlement_id: str) -> Optional[Settlement]:
    """Get a settlement by ID"""
    return db.query(Settlement).filter(Settlement.id == settlement_id).first()


def list_group_settlements(db: Session, group_id: str) -> List[Settlement]:
    """All settlements of a group, oldest first"""
    return db.query(Settlement).filter(
        Settlement.group_id == group_id
    ).order_by(Settlement.date).all()


def list_personal_settlements_between(db: Session, user_a: str, user_b: str) -> List[Settlement]:
    """Non-group settlements between two users, in either direction"""
    return db.query(Settlement).filter(
        Settlement.group_id.is_(None),
        or_(
            and_(Settlement.paid_by_user_id == user_a, Settlement.received_by_user_id == user_b),
            and_(Settlement.paid_by_user_id == user_b, Settlement.received_by_user_id == user_a)
        )
    ).order_by(Settlement.date).all()


def list_personal_settlements_involving(db: Session, user_id: str) -> List[Settlement]:
    """Non-group settlements the user paid or received"""
    return db.query(Settlement).filter(
        Settlement.group_id.is_(None),
        or_(Settlement.paid_by_user_id == user_id, Settlement.received_by_user_id == user_id)
    ).order_by(Settlement.date).all()
