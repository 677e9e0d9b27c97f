"""Document version service."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from dochub.core.pagination import PaginationParams
from dochub.domain.audit import AuditAction
from dochub.domain.document import Document, DocumentVersion
from dochub.domain.organization import EDIT_ROLES, MemberRole
from dochub.repositories.document import DocumentRepository, DocumentVersionRepository
from dochub.schemas.document import DocumentVersionCreate, DocumentVersionUpdate
from dochub.services.audit import AuditService
from dochub.services.document import (
    DOCUMENT_NOT_FOUND,
    NO_EDIT_PERMISSION,
    NO_OWNER_PERMISSION,
    VERSION_NOT_FOUND,
)
from dochub.services.organization import NO_PERMISSION, NO_UPDATE_DATA, OrganizationService

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A version with this name already exists for this document"

class DocumentVersionService:
    def __init__(self, session: AsyncSession):
        self._repo = DocumentVersionRepository(session)
        self._documents = DocumentRepository(session)
        self._organizations = OrganizationService(session)
        self._audit = AuditService(session)

    async def _get_with_document(self, version_id: str) -> tuple[DocumentVersion, Document]:
        """Resolve a version and its live document; versions of trashed documents are hidden."""
        version = await self._repo.get_by_id(version_id)
        if not version:
            raise NotFoundError(VERSION_NOT_FOUND)
        document = await self._documents.get_by_id(version.document_id)
        if not document:
            raise NotFoundError(VERSION_NOT_FOUND)
        return version, document

    async def create_version(
        self, data: DocumentVersionCreate, requester_id: str
    ) -> DocumentVersion:
        document = await self._documents.get_by_id(data.document_id)
        if not document:
            raise NotFoundError(DOCUMENT_NOT_FOUND)
        await self._organizations.require_role(
            requester_id, document.organization_id, EDIT_ROLES, NO_EDIT_PERMISSION
        )
        if await self._repo.get_by_name(document.id, data.name):
            raise BadRequestError(DUPLICATE_NAME)

        try:
            version = await self._repo.create(
                document_id=document.id,
                created_by_id=requester_id,
                name=data.name,
                file_path=data.file_path,
            )
        except IntegrityError as exc:
            raise BadRequestError(DUPLICATE_NAME) from exc
        # New version becomes active and bumps the document's last-modified date
        await self._documents.update(document.id, active_version_id=version.id)
        await self._audit.record(
            AuditAction.CREATED_VERSION,
            requester_id,
            document.id,
            document.organization_id,
            version.id,
        )
        return version

    async def get_version(self, version_id: str, requester_id: str) -> DocumentVersion:
        version, document = await self._get_with_document(version_id)
        await self._organizations.require_member(requester_id, document.organization_id)
        return version

    async def list_versions_by_document(
        self, document_id: str, requester_id: str, pagination: PaginationParams
    ) -> tuple[list[DocumentVersion], int]:
        document = await self._documents.get_by_id(document_id)
        if not document:
            raise NotFoundError(DOCUMENT_NOT_FOUND)
        await self._organizations.require_member(requester_id, document.organization_id)
        return await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
            filters={"document_id": document_id},
        )

    async def list_versions_by_user(
        self, user_id: str, requester_id: str, pagination: PaginationParams
    ) -> tuple[list[DocumentVersion], int]:
        if user_id != requester_id:
            logger.warning(
                "[SECURITY] User %s attempted to list the versions of user %s", requester_id, user_id
            )
            raise ForbiddenError(NO_PERMISSION)
        return await self._repo.list_for_user(
            user_id,
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
        )

    async def update_version(
        self, version_id: str, data: DocumentVersionUpdate, requester_id: str
    ) -> DocumentVersion:
        changes = data.model_dump(exclude_none=True, exclude_unset=True)
        if not changes:
            raise BadRequestError(NO_UPDATE_DATA)
        version, document = await self._get_with_document(version_id)
        await self._organizations.require_role(
            requester_id, document.organization_id, EDIT_ROLES, NO_EDIT_PERMISSION
        )
        existing = await self._repo.get_by_name(document.id, changes["name"])
        if existing and existing.id != version.id:
            raise BadRequestError(DUPLICATE_NAME)

        try:
            updated = await self._repo.update(version_id, **changes)
        except IntegrityError as exc:
            raise BadRequestError(DUPLICATE_NAME) from exc
        await self._audit.record(
            AuditAction.UPDATED_VERSION,
            requester_id,
            document.id,
            document.organization_id,
            version_id,
        )
        return updated  # type: ignore[return-value]

    async def delete_version(self, version_id: str, requester_id: str) -> None:
        version, document = await self._get_with_document(version_id)
        await self._organizations.require_role(
            requester_id, document.organization_id, [MemberRole.OWNER], NO_OWNER_PERMISSION
        )
        await self._repo.hard_delete(version_id)

        if document.active_version_id == version_id:
            replacement = await self._repo.latest_for_document(document.id)
            await self._documents.update(
                document.id, active_version_id=replacement.id if replacement else None
            )

        await self._audit.record(
            AuditAction.DELETED_VERSION,
            requester_id,
            document.id,
            document.organization_id,
            version_id,
        )
