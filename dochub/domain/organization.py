"""SQLAlchemy ORM models for Organizations and their memberships.

An organization is the tenant boundary: every document belongs to exactly one
organization, and every permission check resolves to a row in
``organization_members``.
"""

from __future__ import annotations

import enum

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dochub.db.base import Base
from dochub.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin
from dochub.domain.user import User


class OrganizationType(str, enum.Enum):
    INDIVIDUAL = "Individual"  # single member, the founder
    COLLABORATIVE = "Collaborative"


class MemberRole(str, enum.Enum):
    OWNER = "owner"
    WRITE = "write"
    READ = "read"


EDIT_ROLES = (MemberRole.OWNER, MemberRole.WRITE)


class Organization(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # "Individual" | "Collaborative"
    organization_type: Mapped[str] = mapped_column(String(20), nullable=False)


class OrganizationMember(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Join row granting a user a role inside an organization."""

    __tablename__ = "organization_members"
    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_organization_member"),
    )

    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # "owner" | "write" | "read"
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    invite_accepted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user: Mapped[User] = relationship(lazy="joined", innerjoin=True)

    @property
    def username(self) -> str:
        return self.user.username
