from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from enum import Enum


class SplitType(str, Enum):
    equal = "equal"
    percentage = "percentage"
    exact = "exact"


class SplitCreate(BaseModel):
    user_id: str
    # Required for exact splits, computed for the others
    amount: Optional[Decimal] = Field(None, ge=0)
    # Required for percentage splits
    percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    # Defaults to True for the payer's own share only
    paid: Optional[bool] = None


class SplitOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    amount: Decimal
    paid: bool


class ExpenseBase(BaseModel):
    description: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., gt=0)
    category: Optional[str] = Field(None, max_length=100)
    split_type: SplitType = SplitType.equal
    group_id: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    date: Optional[datetime] = None
    # Defaults to the caller
    paid_by_user_id: Optional[str] = None
    splits: List[SplitCreate] = Field(..., min_length=1)


class ExpenseOut(ExpenseBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: datetime
    paid_by_user_id: str
    created_by: str
    created_at: datetime
    splits: List[SplitOut] = []
