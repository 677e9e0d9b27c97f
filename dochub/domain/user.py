"""SQLAlchemy ORM model for Users."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from dochub.db.base import Base
from dochub.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    # pbkdf2_sha256$<iterations>$<salt>$<hash>; never serialized
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
