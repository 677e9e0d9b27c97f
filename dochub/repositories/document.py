"""Document and document-version repositories."""

from __future__ import annotations

from sqlalchemy import delete, select, update

from dochub.domain.document import Document, DocumentVersion
from dochub.domain.favorite import FavoriteDocument
from dochub.domain.organization import OrganizationMember
from dochub.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    model = Document

    async def clear_owner(self, user_id: str) -> None:
        await self._session.execute(
            update(Document).where(Document.owner_id == user_id).values(owner_id=None)
        )

    async def delete_cascade(self, document_id: str) -> bool:
        """Remove a document (live or trashed) with its versions and favorites."""
        await self._session.execute(
            delete(FavoriteDocument).where(FavoriteDocument.document_id == document_id)
        )
        await self._session.execute(
            delete(DocumentVersion).where(DocumentVersion.document_id == document_id)
        )
        return await self.hard_delete(document_id)


class DocumentVersionRepository(BaseRepository[DocumentVersion]):
    model = DocumentVersion

    async def get_by_name(self, document_id: str, name: str) -> DocumentVersion | None:
        result = await self._session.execute(
            select(DocumentVersion).where(
                DocumentVersion.document_id == document_id,
                DocumentVersion.name == name,
            )
        )
        return result.scalars().first()

    async def latest_for_document(self, document_id: str) -> DocumentVersion | None:
        q = select(DocumentVersion).where(DocumentVersion.document_id == document_id)
        q = q.order_by(DocumentVersion.created_at.desc(), DocumentVersion.id.desc()).limit(1)
        result = await self._session.execute(q)
        return result.scalars().first()

    async def list_for_user(
        self,
        user_id: str,
        *,
        offset: int = 0,
        limit: int = 20,
        order_by: str = "created_at",
        order: str = "desc",
    ) -> tuple[list[DocumentVersion], int]:
        """Versions created by *user_id* on live documents of organizations they still belong to."""
        q = (
            select(DocumentVersion)
            .join(Document, Document.id == DocumentVersion.document_id)
            .join(
                OrganizationMember,
                OrganizationMember.organization_id == Document.organization_id,
            )
            .where(
                DocumentVersion.created_by_id == user_id,
                OrganizationMember.user_id == user_id,
                Document.deleted_at.is_(None),
            )
        )
        return await self._paginate(q, offset=offset, limit=limit, order_by=order_by, order=order)

    async def clear_creator(self, user_id: str) -> None:
        await self._session.execute(
            update(DocumentVersion)
            .where(DocumentVersion.created_by_id == user_id)
            .values(created_by_id=None)
        )
