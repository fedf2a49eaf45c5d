from typing import AsyncIterator, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from budget_api.config import settings
from budget_api.db import get_db_session
from budget_api.aggregation.reporting import EnvelopeBuilder
from budget_api.exceptions import UnauthorizedError
from budget_api.logging_config import get_logger
from budget_api.models.user import User
from budget_api.utils.jwt import decode_access_token

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    async for session in get_db_session():
        yield session


def get_envelope_builder() -> EnvelopeBuilder:
    return EnvelopeBuilder(version=settings.VERSION)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Resolve the bearer token to a stored user, or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authorized, no token")

    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected token: {e}")
        raise UnauthorizedError("Not authorized")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError("Not authorized")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise UnauthorizedError("User not authorized.")
    return user
