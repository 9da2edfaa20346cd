import logging
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import or_, select
from typing import List, Optional
from decimal import Decimal
from ledger_service.core.exceptions import InvalidExpense, NotAMember, GroupNotFound, UserNotFound
from ledger_service.models.expenses import Expense, ExpenseSplit
from ledger_service.schemas.expense_schema import ExpenseCreate, SplitCreate, SplitType
from ledger_service.utils.money import (
    amounts_match, distribute_by_percentage, distribute_equally, round_decimal,
    to_decimal, validate_split_sum
)

logger = logging.getLogger(__name__)


def compute_split_amounts(split_type: SplitType, amount: Decimal, splits: List[SplitCreate]) -> List[Decimal]:
    """
    Work out each participant's share.

    - equal: the amount divided by the number of splits, leftover cents to
      the first participants
    - percentage: every split carries a percentage, together 100
    - exact: every split carries its amount
    """
    if split_type == SplitType.equal:
        return distribute_equally(amount, len(splits))

    if split_type == SplitType.percentage:
        if any(split.percentage is None for split in splits):
            raise InvalidExpense("Every split needs a percentage")
        percentages = [to_decimal(split.percentage) for split in splits]
        if not amounts_match(sum(percentages, Decimal("0")), Decimal("100")):
            raise InvalidExpense("Split percentages must add up to 100")
        return distribute_by_percentage(amount, percentages)

    if any(split.amount is None for split in splits):
        raise InvalidExpense("Every split needs an amount")
    return [round_decimal(split.amount) for split in splits]


def create_expense(db: Session, expense_data: ExpenseCreate, user_id: str) -> Expense:
    """Validate and record an expense with its splits"""
    from ledger_service.services.group_service import get_group, get_member_ids
    from ledger_service.services.user_service import get_user

    payer_id = expense_data.paid_by_user_id or user_id
    participant_ids = [split.user_id for split in expense_data.splits]

    if expense_data.group_id:
        group = get_group(db, expense_data.group_id)
        if not group:
            raise GroupNotFound()
        members = set(get_member_ids(group))
        if user_id not in members:
            raise NotAMember()
        for participant_id in [payer_id, *participant_ids]:
            if participant_id not in members:
                raise InvalidExpense(f"User {participant_id} is not a member of this group")
    else:
        if user_id != payer_id and user_id not in participant_ids:
            raise InvalidExpense("You must be the payer or one of the participants")
        for participant_id in dict.fromkeys([payer_id, *participant_ids]):
            if not get_user(db, participant_id):
                raise UserNotFound(f"User with ID {participant_id} not found")

    amounts = compute_split_amounts(expense_data.split_type, expense_data.amount, expense_data.splits)
    try:
        validate_split_sum(amounts, expense_data.amount)
    except ValueError as e:
        raise InvalidExpense(str(e))

    expense = Expense(
        description=expense_data.description.strip(),
        amount=round_decimal(expense_data.amount),
        category=expense_data.category,
        date=expense_data.date or datetime.now(timezone.utc),
        paid_by_user_id=payer_id,
        split_type=expense_data.split_type.value,
        group_id=expense_data.group_id,
        created_by=user_id
    )
    expense.splits = [
        ExpenseSplit(
            position=position,
            user_id=split.user_id,
            amount=split_amount,
            paid=split.paid if split.paid is not None else split.user_id == payer_id
        )
        for position, (split, split_amount) in enumerate(zip(expense_data.splits, amounts))
    ]
    db.add(expense)
    db.commit()
    db.refresh(expense)
    logger.info(f"Created expense {expense.id} of {expense.amount} paid by {payer_id}")
    return expense


def get_expense(db: Session, expense_id: str) -> Optional[Expense]:
    """Get an expense by ID"""
    return db.query(Expense).filter(Expense.id == expense_id).first()


def list_group_expenses(db: Session, group_id: str) -> List[Expense]:
    """All expenses of a group, in insertion order"""
    return db.query(Expense).filter(
        Expense.group_id == group_id
    ).order_by(Expense.created_at).all()


def list_personal_expenses_paid_by(db: Session, payer_id: str) -> List[Expense]:
    """Non-group expenses paid by one user, in insertion order"""
    return db.query(Expense).filter(
        Expense.group_id.is_(None),
        Expense.paid_by_user_id == payer_id
    ).order_by(Expense.created_at).all()


def list_personal_expenses_involving(db: Session, user_id: str) -> List[Expense]:
    """Non-group expenses the user paid or takes part in, in insertion order"""
    split_expense_ids = select(ExpenseSplit.expense_id).where(ExpenseSplit.user_id == user_id)
    return db.query(Expense).filter(
        Expense.group_id.is_(None),
        or_(Expense.paid_by_user_id == user_id, Expense.id.in_(split_expense_ids))
    ).order_by(Expense.created_at).all()
