"""SQLAlchemy ORM models for user favorites (documents and organizations)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from dochub.db.base import Base
from dochub.domain.mixins import UUIDPrimaryKeyMixin, utcnow


class FavoriteDocument(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "favorite_documents"
    __table_args__ = (UniqueConstraint("user_id", "document_id", name="uq_favorite_document"),)

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    document_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class FavoriteOrganization(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "favorite_organizations"
    __table_args__ = (
        UniqueConstraint("user_id", "organization_id", name="uq_favorite_organization"),
    )

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
