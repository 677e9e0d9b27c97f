"""User repository."""

from __future__ import annotations

from sqlalchemy import select

from dochub.domain.user import User
from dochub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User
    unsortable_columns = frozenset({"password_hash"})

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get_by_username(self, username: str) -> User | None:
        result = await self._session.execute(select(User).where(User.username == username))
        return result.scalars().first()
