"""Bearer-token authentication dependency."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.exceptions import UnauthorizedError
from dochub.db.base import get_db
from dochub.domain.user import User
from dochub.services.auth import AuthService

# auto_error=False: missing credentials go through our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db),
) -> User:
    """Resolve ``Authorization: Bearer <jwt>`` to the authenticated user."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError()
    return await AuthService(session).authenticate(credentials.credentials)
