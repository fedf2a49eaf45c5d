"""
User registration and login.
"""
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from budget_api.exceptions import BadRequestError
from budget_api.logging_config import get_logger
from budget_api.models.user import DEFAULT_TAGS, DEFAULT_THEME, User
from budget_api.schemas.user import AuthResponse
from budget_api.utils.jwt import create_user_token
from budget_api.utils.security import MAX_PASSWORD_BYTES, hash_password, password_too_long, verify_password

logger = get_logger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def auth_payload(user: User) -> Dict[str, Any]:
    """Profile plus a fresh token, falling back to the default tags when the user has none."""
    response = AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        tags=user.tags or list(DEFAULT_TAGS),
        theme=user.theme,
        token=create_user_token(user.id, user.email),
    )
    return response.model_dump(by_alias=True)


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == _normalize_email(email)))
    return result.scalar_one_or_none()


async def register_user(
    session: AsyncSession,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> User:
    """
    Create a user with default tags and theme.

    Raises:
        BadRequestError: If a field is missing, the password is too long or the email is taken
    """
    if not name or not email or not password:
        raise BadRequestError("Please add all fields")

    if password_too_long(password):
        raise BadRequestError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    if await get_user_by_email(session, email):
        raise BadRequestError("User Already Exists.")

    user = User(
        name=name,
        email=_normalize_email(email),
        password=hash_password(password),
        tags=list(DEFAULT_TAGS),
        theme=DEFAULT_THEME,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        # Lost a race with another registration for the same email
        await session.rollback()
        raise BadRequestError("User Already Exists.")
    await session.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user


async def authenticate_user(
    session: AsyncSession,
    email: Optional[str],
    password: Optional[str],
) -> User:
    """
    Check credentials.

    Raises:
        BadRequestError: If a field is missing or the credentials do not match
    """
    if not email or not password:
        raise BadRequestError("Try Again.")

    user = await get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password):
        raise BadRequestError("Invalid login data.")

    logger.info(f"{user.email} logged in")
    return user
