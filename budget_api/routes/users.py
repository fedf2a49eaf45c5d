from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from budget_api.aggregation.reporting import EnvelopeBuilder
from budget_api.dependencies import get_current_user, get_db, get_envelope_builder
from budget_api.exceptions import InternalServerError
from budget_api.logging_config import get_logger
from budget_api.models.user import User
from budget_api.schemas.user import UserLogin, UserRegister, UserResponse, UserUpdate
from budget_api.services.user_service import auth_payload, authenticate_user, register_user

logger = get_logger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


def _profile(user: User) -> dict:
    return UserResponse.model_validate(user).model_dump(by_alias=True)


@router.post("", status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Create an account and return it with an access token"""
    user = await register_user(db, payload.name, payload.email, payload.password)
    return auth_payload(user)


@router.post("/login", status_code=status.HTTP_201_CREATED)
async def login(
    payload: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Exchange email and password for an access token"""
    user = await authenticate_user(db, payload.email, payload.password)
    return auth_payload(user)


@router.get("/me")
async def get_current_user_profile(
    current_user: User = Depends(get_current_user)
):
    """Get current authenticated user's profile"""
    return {"message": "User Information.", "user": _profile(current_user)}


@router.put("/me")
async def update_current_user_profile(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    envelopes: EnvelopeBuilder = Depends(get_envelope_builder)
):
    """Update current authenticated user's profile"""
    update_data = user_data.model_dump(exclude_unset=True, exclude_none=True)
    try:
        for field, value in update_data.items():
            setattr(current_user, field, value)
        await db.commit()
        await db.refresh(current_user)
    except SQLAlchemyError as e:
        logger.error(f"Error updating user profile: {e}")
        await db.rollback()
        raise InternalServerError("Failed to update user profile")

    logger.info(f"Updated user profile for user {current_user.id}")
    return envelopes.action("Updated User", user=_profile(current_user))
