from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class SettlementBase(BaseModel):
    # Positivity is checked by the service so it surfaces as InvalidSettlement
    amount: Decimal
    note: Optional[str] = Field(None, max_length=500)
    paid_by_user_id: str
    received_by_user_id: str
    group_id: Optional[str] = None
    related_expense_ids: Optional[List[str]] = None


class SettlementCreate(SettlementBase):
    pass


class SettlementOut(SettlementBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: datetime
    created_by: str
