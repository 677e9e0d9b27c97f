"""Audit log router (read-only)."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.auth import get_current_user
from dochub.core.pagination import PaginationParams
from dochub.core.response import ListResponse, paginated
from dochub.db.base import get_db
from dochub.domain.user import User
from dochub.schemas.audit import AuditLogOut
from dochub.services.audit import AuditService

router = APIRouter(prefix="/audit-logs", tags=["Audit Logs"])


@router.get("/document/{document_id}", response_model=ListResponse[AuditLogOut])
async def list_by_document(
    document_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Activity trail of one document, newest first. Owners only."""
    items, total = await AuditService(session).list_by_document(
        document_id, current_user.id, pagination
    )
    return paginated(
        [AuditLogOut.model_validate(a) for a in items],
        total, pagination.page, pagination.limit,
    )
