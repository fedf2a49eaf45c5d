"""
Pydantic schemas for budget item requests.
"""
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, StrictInt, field_validator

from budget_api.aggregation.records import coerce_amount
from budget_api.exceptions import InvalidAmountError

AmountInput = Union[StrictInt, str]


def _check_amount(value):
    try:
        coerce_amount(value)
    except InvalidAmountError as e:
        raise ValueError(e.message) from e
    return value


class BudgetItemCreate(BaseModel):
    """
    Payload for a new budget item. Fields left out are filled from the record
    defaults; ``item``, ``amount`` and ``date`` may be omitted but not null.
    """
    item: Optional[str] = Field(None, description="Label of the line item")
    amount: Optional[AmountInput] = Field(None, description="Integer or integer string")
    event: Optional[str] = None
    date: Optional[datetime] = None
    tag: Optional[str] = None

    @field_validator("item")
    @classmethod
    def validate_item(cls, v):
        if v is None or not v.strip():
            raise ValueError("Please add an item field")
        return v

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        if v is None:
            raise ValueError("Amount cannot be null")
        return _check_amount(v)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        if v is None:
            raise ValueError("Date cannot be null")
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "item": "Rent",
                "amount": "1200",
                "event": None,
                "date": "2024-03-01T00:00:00",
                "tag": "Housing",
            }
        }
    }


class BudgetItemUpdate(BudgetItemCreate):
    """Partial update; only the fields sent are changed."""
    pass


class BulkInsertRequest(BaseModel):
    data: List[BudgetItemCreate] = Field(..., description="Items to insert")
