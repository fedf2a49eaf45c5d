"""
Persistence for budget items.

Every query is scoped to one user; reads come back in insertion order and
are converted to ``BudgetRecord`` so callers never hold ORM rows.
"""
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import and_, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from budget_api.aggregation.engine import Window
from budget_api.aggregation.records import BudgetRecord
from budget_api.logging_config import get_logger
from budget_api.models.budget_item import BudgetItem
from budget_api.utils.date_utils import to_naive_utc, utcnow

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("item", "amount", "event", "date", "tag")


def _to_model(record: BudgetRecord, created_at: datetime) -> BudgetItem:
    return BudgetItem(
        user_id=record.user,
        item=record.item,
        amount=record.amount,
        event=record.event,
        date=record.date,
        tag=record.tag,
        created_at=created_at,
    )


class BudgetStore:
    """Record source backed by the ``budget_items`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(
        self,
        user_id: str,
        window: Optional[Window] = None,
        since: Optional[datetime] = None,
    ) -> List[BudgetRecord]:
        """
        Fetch a user's records.

        Args:
            user_id: Owner of the records
            window: Optional inclusive date range
            since: Optional lower bound on the date (inclusive)

        Returns:
            Records in insertion order
        """
        conditions = [BudgetItem.user_id == user_id]
        if window is not None:
            conditions.append(BudgetItem.date >= window.start)
            conditions.append(BudgetItem.date <= window.end)
        if since is not None:
            conditions.append(BudgetItem.date >= since)

        stmt = (
            select(BudgetItem)
            .filter(and_(*conditions))
            .order_by(BudgetItem.created_at, BudgetItem.id)
        )
        result = await self.session.execute(stmt)
        return [BudgetRecord.from_model(row) for row in result.scalars().all()]

    async def _get_model(self, item_id: str, user_id: str) -> Optional[BudgetItem]:
        result = await self.session.execute(
            select(BudgetItem).filter(and_(
                BudgetItem.id == item_id,
                BudgetItem.user_id == user_id
            ))
        )
        return result.scalar_one_or_none()

    async def insert_one(self, record: BudgetRecord) -> BudgetRecord:
        model = _to_model(record, utcnow())
        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)
        logger.info(f"Created budget item {model.id} for user {record.user}")
        return BudgetRecord.from_model(model)

    async def insert_many(self, records: Sequence[BudgetRecord]) -> List[BudgetRecord]:
        if not records:
            return []
        base = utcnow()
        # Distinct timestamps keep the batch order on later reads
        models = [
            _to_model(record, base + timedelta(microseconds=index))
            for index, record in enumerate(records)
        ]
        self.session.add_all(models)
        await self.session.commit()
        logger.info(f"Inserted {len(models)} budget items")
        return [BudgetRecord.from_model(model) for model in models]

    async def update_one(
        self,
        item_id: str,
        user_id: str,
        fields: Mapping[str, Any],
    ) -> Optional[BudgetRecord]:
        """
        Merge ``fields`` into a record. Keys outside ``UPDATABLE_FIELDS`` are
        ignored and fields not given are left as they are.

        Returns:
            The updated record, or None when the user owns no such record
        """
        model = await self._get_model(item_id, user_id)
        if model is None:
            return None

        changes: Dict[str, Any] = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if isinstance(changes.get("date"), datetime):
            changes["date"] = to_naive_utc(changes["date"])
        for name, value in changes.items():
            setattr(model, name, value)

        await self.session.commit()
        await self.session.refresh(model)
        logger.info(f"Updated budget item {item_id}: {sorted(changes)}")
        return BudgetRecord.from_model(model)

    async def delete_one(self, item_id: str, user_id: str) -> bool:
        result = await self.session.execute(
            delete(BudgetItem).where(and_(
                BudgetItem.id == item_id,
                BudgetItem.user_id == user_id
            ))
        )
        await self.session.commit()
        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Successfully deleted: {item_id}.")
        return deleted

    async def delete_many(self, user_id: str) -> int:
        result = await self.session.execute(
            delete(BudgetItem).where(BudgetItem.user_id == user_id)
        )
        await self.session.commit()
        logger.info(f"Deleted {result.rowcount} budget items for user {user_id}")
        return result.rowcount
