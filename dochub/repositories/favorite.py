"""Favorite document and favorite organization repositories."""

from __future__ import annotations

from sqlalchemy import delete, select

from dochub.domain.document import Document
from dochub.domain.favorite import FavoriteDocument, FavoriteOrganization
from dochub.domain.organization import Organization
from dochub.repositories.base import BaseRepository


class FavoriteDocumentRepository(BaseRepository[FavoriteDocument]):
    model = FavoriteDocument

    async def remove(self, user_id: str, document_id: str) -> bool:
        result = await self._session.execute(
            delete(FavoriteDocument).where(
                FavoriteDocument.user_id == user_id,
                FavoriteDocument.document_id == document_id,
            )
        )
        await self._session.flush()
        return result.rowcount > 0

    async def documents_for_user(self, user_id: str) -> list[Document]:
        """Live documents the user has favorited, newest favorite first."""
        result = await self._session.execute(
            select(Document)
            .join(FavoriteDocument, FavoriteDocument.document_id == Document.id)
            .where(FavoriteDocument.user_id == user_id, Document.deleted_at.is_(None))
            .order_by(FavoriteDocument.created_at.desc(), FavoriteDocument.id)
        )
        return list(result.scalars().all())

    async def delete_for_user(self, user_id: str) -> None:
        await self._session.execute(
            delete(FavoriteDocument).where(FavoriteDocument.user_id == user_id)
        )

    async def delete_for_membership(self, user_id: str, organization_id: str) -> None:
        """Drop the user's favorites on documents of one organization."""
        doc_ids = select(Document.id).where(Document.organization_id == organization_id)
        await self._session.execute(
            delete(FavoriteDocument).where(
                FavoriteDocument.user_id == user_id,
                FavoriteDocument.document_id.in_(doc_ids),
            )
        )


class FavoriteOrganizationRepository(BaseRepository[FavoriteOrganization]):
    model = FavoriteOrganization

    async def remove(self, user_id: str, organization_id: str) -> bool:
        result = await self._session.execute(
            delete(FavoriteOrganization).where(
                FavoriteOrganization.user_id == user_id,
                FavoriteOrganization.organization_id == organization_id,
            )
        )
        await self._session.flush()
        return result.rowcount > 0

    async def organizations_for_user(self, user_id: str) -> list[Organization]:
        result = await self._session.execute(
            select(Organization)
            .join(FavoriteOrganization, FavoriteOrganization.organization_id == Organization.id)
            .where(FavoriteOrganization.user_id == user_id)
            .order_by(FavoriteOrganization.created_at.desc(), FavoriteOrganization.id)
        )
        return list(result.scalars().all())

    async def delete_for_user(self, user_id: str) -> None:
        await self._session.execute(
            delete(FavoriteOrganization).where(FavoriteOrganization.user_id == user_id)
        )
