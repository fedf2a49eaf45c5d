from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from budget_api.aggregation.reporting import EnvelopeBuilder
from budget_api.config import settings
from budget_api.dependencies import get_current_user, get_db, get_envelope_builder
from budget_api.exceptions import InternalServerError, NotFoundError
from budget_api.logging_config import get_logger
from budget_api.models.user import User
from budget_api.schemas.budget import BudgetItemCreate, BudgetItemUpdate, BulkInsertRequest
from budget_api.services.budget_service import BudgetService
from budget_api.utils.budget_serializer import serialize_record, serialize_records

logger = get_logger(__name__)
router = APIRouter(prefix="/budget", tags=["budget"])


@router.get("")
async def get_budget(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    envelopes: EnvelopeBuilder = Depends(get_envelope_builder)
):
    """List the user's budget items, oldest date first"""
    try:
        records = await BudgetService(db).list_items(current_user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching budget for user {current_user.id}: {e}")
        raise InternalServerError("Failed to fetch budget")
    return envelopes.listing(records)


@router.post("", status_code=status.HTTP_201_CREATED)
async def set_budget(
    payload: BudgetItemCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    envelopes: EnvelopeBuilder = Depends(get_envelope_builder)
):
    """Create a single budget item; omitted fields take the record defaults"""
    try:
        record = await BudgetService(db).create_item(
            current_user.id, payload.model_dump(exclude_unset=True)
        )
    except SQLAlchemyError as e:
        logger.error(f"Error creating budget item: {e}")
        await db.rollback()
        raise InternalServerError("Failed to create budget item")
    return envelopes.record(record)


@router.delete("")
async def delete_all(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    envelopes: EnvelopeBuilder = Depends(get_envelope_builder)
):
    """Delete every budget item of the user"""
    try:
        deleted = await BudgetService(db).delete_all(current_user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error deleting budget for user {current_user.id}: {e}")
        await db.rollback()
        raise InternalServerError("Failed to delete budget items")
    return envelopes.action("Delete All Items", deleted=deleted)


@router.post("/bulk", status_code=status.HTTP_201_CREATED)
async def add_many_items(
    payload: BulkInsertRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    envelopes: EnvelopeBuilder = Depends(get_envelope_builder)
):
    """Insert several items at once, e.g. from an uploaded file"""
    items = [entry.model_dump(exclude_unset=True) for entry in payload.data]
    try:
        records = await BudgetService(db).bulk_insert(current_user.id, items)
    except SQLAlchemyError as e:
        logger.error(f"Error inserting {len(items)} budget items: {e}")
        await db.rollback()
        raise InternalServerError("Failed to insert budget items")
    return envelopes.envelope(items=len(records), insertion=serialize_records(records))


@router.get("/upcoming")
async def get_upcoming_expenses(
    number: Optional[int] = Query(default=None, ge=1, le=100, description="How many items to return"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    envelopes: EnvelopeBuilder = Depends(get_envelope_builder)
):
    """Next items dated from now on, soonest first"""
    limit = number or settings.UPCOMING_DEFAULT_LIMIT
    try:
        report = await BudgetService(db).upcoming_report(current_user.id, limit)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching upcoming expenses: {e}")
        raise InternalServerError("Failed to fetch upcoming expenses")
    return envelopes.report(report)


@router.get("/total")
async def get_total_per_month(
    month: Optional[str] = Query(default=None, description="Zero-based month (0 = January)"),
    year: Optional[str] = Query(default=None, description="Four digit year, current year if omitted"),
    num_days: Optional[str] = Query(default=None, alias="numDays", description="Last day of the window"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    envelopes: EnvelopeBuilder = Depends(get_envelope_builder)
):
    """Items and summed amount for one month"""
    day_count = num_days if num_days is not None else settings.REPORT_DEFAULT_DAY_COUNT
    try:
        report = await BudgetService(db).monthly_report(current_user.id, month, year, day_count)
    except SQLAlchemyError as e:
        logger.error(f"Error computing monthly total: {e}")
        raise InternalServerError("Failed to compute monthly total")
    return envelopes.report(report)


@router.put("/{item_id}")
async def update_budget(
    item_id: str,
    payload: BudgetItemUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    envelopes: EnvelopeBuilder = Depends(get_envelope_builder)
):
    """Change the given fields of one item and leave the rest alone"""
    try:
        updated = await BudgetService(db).update_item(
            current_user.id, item_id, payload.model_dump(exclude_unset=True)
        )
    except SQLAlchemyError as e:
        logger.error(f"Error updating budget item {item_id}: {e}")
        await db.rollback()
        raise InternalServerError("Failed to update budget item")

    if updated is None:
        raise NotFoundError("Budget item not found")

    return envelopes.action(
        f"Update Budget: {item_id}",
        id=item_id,
        updated=serialize_record(updated),
    )


@router.delete("/{item_id}")
async def delete_budget(
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    envelopes: EnvelopeBuilder = Depends(get_envelope_builder)
):
    """Delete one item"""
    try:
        deleted = await BudgetService(db).delete_item(current_user.id, item_id)
    except SQLAlchemyError as e:
        logger.error(f"Error deleting budget item {item_id}: {e}")
        await db.rollback()
        raise InternalServerError("Failed to delete budget item")

    if not deleted:
        raise NotFoundError("Budget item not found")

    return envelopes.action(f"Delete Budget: {item_id}", id=item_id)
