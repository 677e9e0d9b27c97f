"""SQLAlchemy ORM models for Documents and DocumentVersions."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dochub.db.base import Base
from dochub.domain.mixins import SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin


class Document(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    """A logical file owned by an organization.

    ``updated_at`` doubles as the last-modified date and is bumped whenever a
    version is added. ``deleted_at`` marks the document as trashed.
    """

    __tablename__ = "documents"

    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    owner_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Plain reference (no FK) to avoid a documents <-> document_versions cycle
    active_version_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)


class DocumentVersion(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One uploaded revision of a document."""

    __tablename__ = "document_versions"
    __table_args__ = (
        UniqueConstraint("document_id", "name", name="uq_document_version_name"),
    )

    document_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_by_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Storage reference only; file bodies are not handled by this service
    file_path: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
