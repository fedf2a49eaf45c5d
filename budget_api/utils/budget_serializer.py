"""
Budget record serialization utilities.
"""
from typing import TYPE_CHECKING, Any, Dict, Iterable, List

if TYPE_CHECKING:
    from budget_api.aggregation.records import BudgetRecord


def serialize_record(record: "BudgetRecord") -> Dict[str, Any]:
    """
    Serialize a budget record to a dictionary for API responses.

    The amount is returned in the representation it was stored with.
    """
    return {
        "_id": record.id,
        "item": record.item,
        "amount": record.amount,
        "event": record.event,
        "date": record.date.isoformat() if record.date else None,
        "tag": record.tag,
        "user": record.user,
    }


def serialize_records(records: Iterable["BudgetRecord"]) -> List[Dict[str, Any]]:
    return [serialize_record(record) for record in records]
