"""
Aggregation over budget records: totals, month windows, upcoming selection
and report composition.

Everything here is pure and synchronous. Errors propagate to the caller
untouched; nothing is logged, retried or partially returned.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence

from budget_api.aggregation.records import INTEGER_TEXT, BudgetRecord, Number, coerce_amount
from budget_api.exceptions import InvalidPeriodError
from budget_api.utils.date_utils import days_in_month, utcnow

DEFAULT_DAY_COUNT = 31
DEFAULT_UPCOMING_LIMIT = 5


class Window(NamedTuple):
    """Inclusive ``[start, end]`` date range."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class Report:
    item_count: int
    records: List[BudgetRecord]
    total: Number = 0


def sum_amounts(records: Iterable[BudgetRecord]) -> Number:
    """
    Add up the amounts of ``records``.

    String amounts are parsed as base-10 integers, numeric ones are used as
    they are. An empty input sums to 0.

    Raises:
        InvalidAmountError: on the first amount that cannot be coerced
    """
    total: Number = 0
    for record in records:
        total += coerce_amount(record.amount)
    return total


def _parse_period_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise InvalidPeriodError(f"Invalid {name}", {name: value})
    if isinstance(value, int):
        return value
    if isinstance(value, str) and INTEGER_TEXT.match(value):
        return int(value.strip(), 10)
    raise InvalidPeriodError(f"Invalid {name}", {name: value})


def window_for_month(
    month: Any,
    year: Any = None,
    day_count: Any = DEFAULT_DAY_COUNT,
) -> Window:
    """
    Build the reporting window for a month.

    Args:
        month: Zero-based month index (0 = January), int or numeric string
        year: Four digit year; the current UTC year when omitted
        day_count: Day of the month the window ends on (inclusive). Values
            past the end of the month are clamped to its last day, so
            February never spills into March.

    Returns:
        Window from the first instant of the month to midnight of the
        closing day.

    Raises:
        InvalidPeriodError: when month is missing or unparseable, or any
            value is out of range
    """
    if month is None or (isinstance(month, str) and not month.strip()):
        raise InvalidPeriodError("Please provide a month.")

    month_index = _parse_period_int(month, "month")
    if not 0 <= month_index <= 11:
        raise InvalidPeriodError("Month must be between 0 and 11", {"month": month})

    year_value = utcnow().year if year is None else _parse_period_int(year, "year")
    if not datetime.min.year <= year_value <= datetime.max.year:
        raise InvalidPeriodError("Year out of range", {"year": year})

    days = _parse_period_int(day_count, "day_count")
    if days < 1:
        raise InvalidPeriodError("Day count must be at least 1", {"day_count": day_count})

    calendar_month = month_index + 1
    last_day = min(days, days_in_month(year_value, calendar_month))
    return Window(
        start=datetime(year_value, calendar_month, 1),
        end=datetime(year_value, calendar_month, last_day),
    )


def filter_by_user_and_window(
    records: Iterable[BudgetRecord],
    user_id: str,
    window: Optional[Window] = None,
) -> List[BudgetRecord]:
    """Records owned by ``user_id`` and, when given, dated inside ``window``. Input order is kept."""
    return [
        record for record in records
        if record.user == user_id and (window is None or window.contains(record.date))
    ]


def chronological(records: Iterable[BudgetRecord]) -> List[BudgetRecord]:
    """Records ascending by date; equal dates keep their input order."""
    # sorted() is stable
    return sorted(records, key=lambda record: record.date)


def select_upcoming(
    records: Iterable[BudgetRecord],
    user_id: str,
    limit: int = DEFAULT_UPCOMING_LIMIT,
    now: Optional[datetime] = None,
) -> List[BudgetRecord]:
    """
    The next ``limit`` records of ``user_id`` dated at or after ``now``.

    Output is ascending by date; records sharing a date keep their input
    order.
    """
    if limit < 0:
        raise ValueError("limit must not be negative")
    now = now or utcnow()
    pending = [record for record in records if record.user == user_id and record.date >= now]
    return chronological(pending)[:limit]


def build_report(records: Sequence[BudgetRecord]) -> Report:
    """Count, records and summed total of ``records``."""
    total = sum_amounts(records)
    return Report(item_count=len(records), records=list(records), total=total)
