"""Authentication service: credential checks and bearer-token resolution."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.exceptions import UnauthorizedError
from dochub.core.security import create_access_token, decode_access_token, verify_password
from dochub.domain.user import User
from dochub.repositories.user import UserRepository

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, session: AsyncSession):
        self._users = UserRepository(session)

    async def login(self, email: str, password: str) -> tuple[str, User]:
        user = await self._users.get_by_email(email)
        if not user:
            logger.warning("[SECURITY] Login attempt for unknown email %s", email)
            raise UnauthorizedError("Invalid email")
        if not verify_password(password, user.password_hash):
            logger.warning("[SECURITY] Wrong password for user %s", user.id)
            raise UnauthorizedError("Invalid password")
        token = create_access_token(user.id, user.email)
        logger.info("User %s logged in", user.id)
        return token, user

    async def authenticate(self, token: str) -> User:
        """Resolve a bearer token to its user; any failure is a plain 401."""
        claims = decode_access_token(token)
        user = await self._users.get_by_id(claims["sub"])
        if not user:
            logger.warning("[SECURITY] Valid token for missing user %s", claims["sub"])
            raise UnauthorizedError()
        return user
