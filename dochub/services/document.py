"""Document service.

Access is resolved through the document's organization: any member may read,
``owner``/``write`` may edit, trash and restore, and only ``owner`` may delete
permanently. Trashed documents are invisible to everything except the trash
listing, restore and permanent delete.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.exceptions import BadRequestError, NotFoundError
from dochub.core.pagination import PaginationParams
from dochub.domain.audit import AuditAction
from dochub.domain.document import Document
from dochub.domain.organization import EDIT_ROLES, MemberRole
from dochub.repositories.document import DocumentRepository, DocumentVersionRepository
from dochub.schemas.document import DocumentCreate, DocumentUpdate
from dochub.services.audit import AuditService
from dochub.services.organization import NO_UPDATE_DATA, OrganizationService

logger = logging.getLogger(__name__)

NO_EDIT_PERMISSION = "You do not have edit permissions in this organization"
NO_OWNER_PERMISSION = "You do not have owner permissions in this organization"
DOCUMENT_NOT_FOUND = "Document not found"
VERSION_NOT_FOUND = "Document Version not found"

class DocumentService:
    def __init__(self, session: AsyncSession):
        self._repo = DocumentRepository(session)
        self._versions = DocumentVersionRepository(session)
        self._organizations = OrganizationService(session)
        self._audit = AuditService(session)

    async def _get_live(self, document_id: str) -> Document:
        document = await self._repo.get_by_id(document_id)
        if not document:
            raise NotFoundError(DOCUMENT_NOT_FOUND)
        return document

    async def _require_editor(self, requester_id: str, organization_id: str) -> None:
        await self._organizations.require_role(
            requester_id, organization_id, EDIT_ROLES, NO_EDIT_PERMISSION
        )

    async def create_document(self, data: DocumentCreate, requester_id: str) -> Document:
        await self._require_editor(requester_id, data.organization_id)
        document = await self._repo.create(
            organization_id=data.organization_id,
            owner_id=requester_id,
            name=data.name,
            type=data.type,
            description=data.description,
        )
        await self._audit.record(
            AuditAction.CREATED, requester_id, document.id, document.organization_id
        )
        return document

    async def get_document(self, document_id: str, requester_id: str) -> Document:
        document = await self._get_live(document_id)
        await self._organizations.require_member(requester_id, document.organization_id)
        return document

    async def list_by_organization(
        self,
        organization_id: str,
        requester_id: str,
        pagination: PaginationParams,
        *,
        trashed: bool = False,
    ) -> tuple[list[Document], int]:
        await self._organizations.require_member(requester_id, organization_id)
        return await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
            filters={"organization_id": organization_id},
            trashed=trashed,
        )

    async def update_document(
        self, document_id: str, data: DocumentUpdate, requester_id: str
    ) -> Document:
        changes = data.model_dump(exclude_none=True, exclude_unset=True)
        if not changes:
            raise BadRequestError(NO_UPDATE_DATA)
        document = await self._get_live(document_id)
        await self._require_editor(requester_id, document.organization_id)
        updated = await self._repo.update(document_id, **changes)
        await self._audit.record(
            AuditAction.UPDATED, requester_id, document_id, document.organization_id
        )
        return updated  # type: ignore[return-value]

    async def set_active_version(
        self, document_id: str, version_id: str, requester_id: str
    ) -> Document:
        document = await self._get_live(document_id)
        await self._require_editor(requester_id, document.organization_id)
        version = await self._versions.get_by_id(version_id)
        if not version or version.document_id != document_id:
            raise NotFoundError(VERSION_NOT_FOUND)
        updated = await self._repo.update(document_id, active_version_id=version_id)
        await self._audit.record(
            AuditAction.UPDATED, requester_id, document_id, document.organization_id, version_id
        )
        return updated  # type: ignore[return-value]

    async def move_to_trash(self, document_id: str, requester_id: str) -> Document:
        document = await self._get_live(document_id)
        await self._require_editor(requester_id, document.organization_id)
        await self._repo.soft_delete(document_id)
        await self._audit.record(
            AuditAction.TRASHED, requester_id, document_id, document.organization_id
        )
        return await self._repo.get_by_id(document_id, trashed=True)  # type: ignore[return-value]

    async def restore_from_trash(self, document_id: str, requester_id: str) -> Document:
        document = await self._repo.get_by_id(document_id, trashed=True)
        if not document:
            raise NotFoundError("Document not found in trash")
        await self._require_editor(requester_id, document.organization_id)
        await self._repo.restore(document_id)
        await self._audit.record(
            AuditAction.RESTORED, requester_id, document_id, document.organization_id
        )
        return await self._get_live(document_id)

    async def delete_document(self, document_id: str, requester_id: str) -> None:
        """Permanently delete a live or trashed document with its versions."""
        document = await self._repo.get_by_id(document_id, trashed=None)
        if not document:
            raise NotFoundError(DOCUMENT_NOT_FOUND)
        await self._organizations.require_role(
            requester_id, document.organization_id, [MemberRole.OWNER], NO_OWNER_PERMISSION
        )
        organization_id = document.organization_id
        await self._repo.delete_cascade(document_id)
        await self._audit.record(AuditAction.DELETED, requester_id, document_id, organization_id)
        logger.info("Document %s permanently deleted by user %s", document_id, requester_id)
