from datetime import date as date_type
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Transaction(BaseModel):
    id: str
    user_id: str
    title: str
    amount: float = Field(..., ge=0)
    type: TransactionType
    category: str
    date: date_type
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_recurring: bool = False
    recurring_frequency: Optional[Literal["daily", "weekly", "monthly", "yearly"]] = None

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, tags: List[str]) -> List[str]:
        # ordered set
        return list(dict.fromkeys(tags))

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class Budget(BaseModel):
    category: str
    amount: float = Field(..., ge=0)
    period: Literal["monthly", "quarterly", "yearly"] = "monthly"
    start_date: date_type
    end_date: Optional[date_type] = None
    alert_threshold: float = Field(default=80.0, ge=0, le=100)


class AnalyticsRequest(BaseModel):
    transactions: List[Transaction] = Field(default_factory=list)
    budgets: List[Budget] = Field(default_factory=list)
