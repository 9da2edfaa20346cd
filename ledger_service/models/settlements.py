import uuid
from sqlalchemy import Column, String, DateTime, DECIMAL, Text, JSON
from ledger_service.db.database import Base
from ledger_service.models.groups import utcnow


class Settlement(Base):
    __tablename__ = "settlements"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), unique=True, nullable=False)
    amount = Column(DECIMAL(10, 2), nullable=False)
    note = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    paid_by_user_id = Column(String, nullable=False, index=True)  # Reference to users
    received_by_user_id = Column(String, nullable=False, index=True)  # Reference to users
    group_id = Column(String, nullable=True, index=True)  # None for 1:1 settlements
    related_expense_ids = Column(JSON, nullable=True)
    created_by = Column(String, nullable=False)
