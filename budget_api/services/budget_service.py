"""
Budget service layer: builds records, talks to the store and runs the
aggregation engine over what comes back.
"""
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from budget_api.aggregation.engine import (
    DEFAULT_DAY_COUNT,
    DEFAULT_UPCOMING_LIMIT,
    Report,
    build_report,
    chronological,
    filter_by_user_and_window,
    select_upcoming,
    window_for_month,
)
from budget_api.aggregation.records import BudgetRecord, build_record
from budget_api.logging_config import get_logger
from budget_api.services.budget_store import BudgetStore
from budget_api.utils.date_utils import utcnow

logger = get_logger(__name__)


class BudgetService:
    """Operations on one user's budget."""

    def __init__(self, session: AsyncSession, store: Optional[BudgetStore] = None):
        self.store = store if store is not None else BudgetStore(session)

    async def list_items(self, user_id: str) -> List[BudgetRecord]:
        """All of the user's records, oldest date first."""
        records = await self.store.find(user_id)
        return chronological(records)

    async def create_item(self, user_id: str, fields: Mapping[str, Any]) -> BudgetRecord:
        record = build_record(fields, user_id)
        return await self.store.insert_one(record)

    async def bulk_insert(self, user_id: str, items: Sequence[Mapping[str, Any]]) -> List[BudgetRecord]:
        records = [build_record(fields, user_id) for fields in items]
        return await self.store.insert_many(records)

    async def update_item(
        self,
        user_id: str,
        item_id: str,
        fields: Mapping[str, Any],
    ) -> Optional[BudgetRecord]:
        return await self.store.update_one(item_id, user_id, fields)

    async def delete_item(self, user_id: str, item_id: str) -> bool:
        return await self.store.delete_one(item_id, user_id)

    async def delete_all(self, user_id: str) -> int:
        return await self.store.delete_many(user_id)

    async def monthly_report(
        self,
        user_id: str,
        month: Any,
        year: Any = None,
        day_count: Any = DEFAULT_DAY_COUNT,
    ) -> Report:
        """
        Records and total for one month.

        Args:
            user_id: Owner of the records
            month: Zero-based month index
            year: Year; current year when omitted
            day_count: Inclusive closing day of the window

        Raises:
            InvalidPeriodError: If the month/year/day count is unusable
            InvalidAmountError: If a stored amount cannot be summed
        """
        window = window_for_month(month, year, day_count)
        fetched = await self.store.find(user_id, window=window)
        records = filter_by_user_and_window(fetched, user_id, window)
        report = build_report(records)
        logger.debug(
            f"Monthly report for user {user_id} "
            f"{window.start:%Y-%m-%d}..{window.end:%Y-%m-%d}: "
            f"{report.item_count} items, total {report.total}"
        )
        return report

    async def upcoming_report(
        self,
        user_id: str,
        limit: int = DEFAULT_UPCOMING_LIMIT,
        now: Optional[datetime] = None,
    ) -> Report:
        """The next ``limit`` records dated at or after ``now``, with their total."""
        now = now or utcnow()
        fetched = await self.store.find(user_id, since=now)
        records = select_upcoming(fetched, user_id, limit, now)
        return build_report(records)
