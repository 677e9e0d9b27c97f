"""Audit log service.

Rows are appended inside the caller's session, so an audit entry commits or
rolls back together with the change it describes.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.exceptions import NotFoundError
from dochub.core.pagination import PaginationParams
from dochub.domain.audit import AuditAction, AuditLog
from dochub.domain.organization import MemberRole
from dochub.repositories.audit import AuditLogRepository
from dochub.repositories.document import DocumentRepository
from dochub.services.organization import OrganizationService

logger = logging.getLogger(__name__)

class AuditService:
    def __init__(self, session: AsyncSession):
        self._repo = AuditLogRepository(session)
        self._documents = DocumentRepository(session)
        self._organizations = OrganizationService(session)

    async def record(
        self,
        action: AuditAction,
        user_id: str,
        document_id: str,
        organization_id: str | None,
        version_id: str | None = None,
    ) -> AuditLog:
        entry = await self._repo.create(
            action=action.value,
            message=f"Document {document_id} was {action.value} by User {user_id}",
            user_id=user_id,
            document_id=document_id,
            organization_id=organization_id,
            version_id=version_id,
        )
        logger.info("AUDIT %s document=%s user=%s", action.value, document_id, user_id)
        return entry

    async def list_by_document(
        self, document_id: str, requester_id: str, pagination: PaginationParams
    ) -> tuple[list[AuditLog], int]:
        """Owners only. Trashed and permanently deleted documents still have a trail."""
        organization_id = await self._organization_of(document_id)
        await self._organizations.require_role(
            requester_id,
            organization_id,
            [MemberRole.OWNER],
            "You do not have permissions to see the Audit logs",
        )
        return await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
            filters={"document_id": document_id},
        )

    async def _organization_of(self, document_id: str) -> str:
        document = await self._documents.get_by_id(document_id, trashed=None)
        if document:
            return document.organization_id
        # Deleted documents: fall back to the organization recorded on the trail
        entries, _ = await self._repo.list(limit=1, filters={"document_id": document_id})
        if not entries or not entries[0].organization_id:
            raise NotFoundError("Document not found")
        return entries[0].organization_id
