"""
Budget records as seen by the aggregation engine, plus the helpers that
produce them: amount coercion and the defaulting record builder.
"""
import math
import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

from budget_api.exceptions import InvalidAmountError
from budget_api.utils.date_utils import today_utc, to_naive_utc

Amount = Union[int, float, Decimal, str]
Number = Union[int, float, Decimal]

INTEGER_TEXT = re.compile(r"^\s*[+-]?[0-9]+\s*$")

# Values used for fields missing from a create payload. Callables are invoked
# once per record.
RECORD_DEFAULTS: Dict[str, Any] = {
    "item": "nonessential",
    "amount": "0",
    "date": today_utc,
    "event": None,
    "tag": None,
}


def coerce_amount(value: Any) -> Number:
    """
    Resolve a stored amount to a number.

    Numbers are returned unchanged; strings must hold a base-10 integer
    (surrounding whitespace and a sign are allowed).

    Raises:
        InvalidAmountError: for anything else, including booleans, None,
            non-finite numbers and strings such as "abc" or "12.5"
    """
    if isinstance(value, bool):
        raise InvalidAmountError("Amount must be a number or an integer string", {"amount": value})
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidAmountError("Amount must be finite", {"amount": value})
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidAmountError("Amount must be finite", {"amount": str(value)})
        return value
    if isinstance(value, str) and INTEGER_TEXT.match(value):
        return int(value.strip(), 10)
    raise InvalidAmountError("Amount must be a number or an integer string", {"amount": value})


@dataclass
class BudgetRecord:
    """One budget line item owned by a user."""

    item: str
    amount: Amount
    date: datetime
    user: str
    event: Optional[str] = None
    tag: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_model(cls, model) -> "BudgetRecord":
        """Build a record from a ``BudgetItem`` row (or anything with the same attributes)."""
        return cls(
            id=model.id,
            item=model.item,
            amount=model.amount,
            event=model.event,
            date=model.date,
            tag=model.tag,
            user=model.user_id,
        )


def build_record(
    fields: Mapping[str, Any],
    user_id: str,
    defaults: Optional[Mapping[str, Any]] = None,
) -> BudgetRecord:
    """
    Produce a fully populated record from a partial payload.

    Only keys present in ``fields`` are taken from it; every other field comes
    from ``RECORD_DEFAULTS`` (or ``defaults`` when given, which overrides
    individual entries). The owner is always ``user_id``, whatever the payload
    says.
    """
    table: Dict[str, Any] = dict(RECORD_DEFAULTS)
    if defaults:
        table.update(defaults)

    def pick(name: str) -> Any:
        if name in fields:
            return fields[name]
        value = table[name]
        return value() if callable(value) else value

    date = pick("date")
    if isinstance(date, datetime):
        date = to_naive_utc(date)

    return BudgetRecord(
        item=pick("item"),
        amount=pick("amount"),
        event=pick("event"),
        date=date,
        tag=pick("tag"),
        user=user_id,
    )
