import enum
import uuid
from sqlalchemy import Column, String, DateTime, DECIMAL, Text, Boolean, Enum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from ledger_service.db.database import Base
from ledger_service.models.groups import utcnow


class SplitType(str, enum.Enum):
    equal = "equal"
    percentage = "percentage"
    exact = "exact"


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(DECIMAL(10, 2), nullable=False)
    category = Column(String(100), nullable=True)
    date = Column(DateTime(timezone=True), nullable=False)
    paid_by_user_id = Column(String, nullable=False, index=True)  # Reference to users
    split_type = Column(Enum(SplitType), nullable=False, default=SplitType.equal)
    group_id = Column(String, nullable=True, index=True)  # None for 1:1 expenses
    created_by = Column(String, nullable=False)
    # Python-side default keeps microsecond resolution for insertion ordering
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    splits = relationship(
        "ExpenseSplit",
        order_by="ExpenseSplit.position",
        lazy="selectin",
        cascade="all, delete-orphan",
    )


class ExpenseSplit(Base):
    __tablename__ = "expense_splits"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), unique=True, nullable=False)
    expense_id = Column(String, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    user_id = Column(String, nullable=False, index=True)  # Reference to users
    amount = Column(DECIMAL(10, 2), nullable=False)
    paid = Column(Boolean, nullable=False, default=False)
