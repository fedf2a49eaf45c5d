from budget_api.aggregation.records import (
    RECORD_DEFAULTS,
    BudgetRecord,
    build_record,
    coerce_amount,
)
from budget_api.aggregation.engine import (
    Report,
    Window,
    build_report,
    chronological,
    filter_by_user_and_window,
    select_upcoming,
    sum_amounts,
    window_for_month,
)
from budget_api.aggregation.reporting import EnvelopeBuilder

__all__ = [
    "RECORD_DEFAULTS",
    "BudgetRecord",
    "build_record",
    "coerce_amount",
    "Report",
    "Window",
    "build_report",
    "chronological",
    "filter_by_user_and_window",
    "select_upcoming",
    "sum_amounts",
    "window_for_month",
    "EnvelopeBuilder",
]
