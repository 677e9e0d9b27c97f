"""Domain package. All ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  user.py          Accounts (login by email or username)
  organization.py  Tenants, plus member rows carrying owner / write / read roles
  document.py      Documents (soft-deletable into the trash) and their versions
  favorite.py      Per-user favorite documents and organizations
  audit.py         Append-only document activity log
  mixins.py        Shared UUID, timestamp and soft-delete columns
"""

from dochub.domain.audit import AuditAction, AuditLog
from dochub.domain.document import Document, DocumentVersion
from dochub.domain.favorite import FavoriteDocument, FavoriteOrganization
from dochub.domain.organization import (
    MemberRole,
    Organization,
    OrganizationMember,
    OrganizationType,
)
from dochub.domain.user import User

__all__ = [
    "AuditAction",
    "AuditLog",
    "Document",
    "DocumentVersion",
    "FavoriteDocument",
    "FavoriteOrganization",
    "MemberRole",
    "Organization",
    "OrganizationMember",
    "OrganizationType",
    "User",
]
