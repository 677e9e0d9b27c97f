"""Audit log repository. Append and read only."""

from __future__ import annotations

from dochub.domain.audit import AuditLog
from dochub.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    model = AuditLog
