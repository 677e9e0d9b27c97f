"""SQLAlchemy ORM model for the document audit log."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from dochub.db.base import Base
from dochub.domain.mixins import UUIDPrimaryKeyMixin, utcnow


class AuditAction(str, enum.Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"
    TRASHED = "TRASHED"
    RESTORED = "RESTORED"
    CREATED_VERSION = "CREATED_VERSION"
    UPDATED_VERSION = "UPDATED_VERSION"
    DELETED_VERSION = "DELETED_VERSION"


class AuditLog(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "audit_logs"

    # Who
    user_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    # What (plain ids, no FKs: rows must outlive the document they describe)
    action: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    document_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    organization_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    version_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    # When (append-only: no updated_at or deleted_at)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
