"""Audit log response schema."""


from datetime import datetime

from dochub.domain.audit import AuditAction
from dochub.schemas.common import CamelModel

class AuditLogOut(CamelModel):
    id: str
    action: AuditAction
    message: str
    user_id: str | None = None
    document_id: str
    organization_id: str | None = None
    version_id: str | None = None
    created_at: datetime
