"""
Response envelopes for budget endpoints.

The API version is fixed when the builder is created so that every
envelope produced by one builder carries the same value.
"""
from typing import Any, Dict, Sequence

from budget_api.aggregation.engine import Report
from budget_api.aggregation.records import BudgetRecord
from budget_api.utils.budget_serializer import serialize_record, serialize_records


class EnvelopeBuilder:
    def __init__(self, version: str):
        self.version = version

    def envelope(self, **payload: Any) -> Dict[str, Any]:
        return {"version": self.version, **payload}

    def report(self, report: Report) -> Dict[str, Any]:
        """``{version, items, expenses, total}`` for monthly and upcoming reports."""
        return self.envelope(
            items=report.item_count,
            expenses=serialize_records(report.records),
            total=report.total,
        )

    def listing(self, records: Sequence[BudgetRecord]) -> Dict[str, Any]:
        """``{version, items, budget}`` for the plain budget listing."""
        return self.envelope(items=len(records), budget=serialize_records(records))

    def record(self, record: BudgetRecord, **extra: Any) -> Dict[str, Any]:
        return self.envelope(budget=serialize_record(record), **extra)

    def action(self, goal: str, **extra: Any) -> Dict[str, Any]:
        """Acknowledgement for a mutating call, e.g. ``goal="Delete Budget: <id>"``."""
        return self.envelope(goal=goal, **extra)
