"""Organization and membership repositories."""

from __future__ import annotations

from sqlalchemy import and_, delete, func, select

from dochub.domain.document import Document, DocumentVersion
from dochub.domain.favorite import FavoriteDocument, FavoriteOrganization
from dochub.domain.organization import MemberRole, Organization, OrganizationMember
from dochub.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    model = Organization

    async def list_for_user(
        self,
        user_id: str,
        *,
        offset: int = 0,
        limit: int = 20,
        order_by: str = "created_at",
        order: str = "desc",
    ) -> tuple[list[tuple[Organization, OrganizationMember]], int]:
        """Return the organizations *user_id* belongs to, paired with the membership row."""
        base = (
            select(Organization, OrganizationMember)
            .join(
                OrganizationMember,
                and_(
                    OrganizationMember.organization_id == Organization.id,
                    OrganizationMember.user_id == user_id,
                ),
            )
        )
        count_q = select(func.count()).select_from(
            select(Organization.id)
            .join(OrganizationMember, OrganizationMember.organization_id == Organization.id)
            .where(OrganizationMember.user_id == user_id)
            .subquery()
        )
        total = (await self._session.execute(count_q)).scalar_one()

        col = self._sort_column(order_by)
        q = base.order_by(col.desc() if order == "desc" else col.asc(), Organization.id)
        rows = (await self._session.execute(q.offset(offset).limit(limit))).all()
        return [(org, member) for org, member in rows], total

    async def delete_cascade(self, organization_id: str) -> None:
        """Remove an organization with its members, documents, versions and favorites.

        Audit rows are left in place.
        """
        doc_ids = select(Document.id).where(Document.organization_id == organization_id)
        await self._session.execute(
            delete(FavoriteDocument).where(FavoriteDocument.document_id.in_(doc_ids))
        )
        await self._session.execute(
            delete(DocumentVersion).where(DocumentVersion.document_id.in_(doc_ids))
        )
        await self._session.execute(
            delete(Document).where(Document.organization_id == organization_id)
        )
        await self._session.execute(
            delete(FavoriteOrganization).where(
                FavoriteOrganization.organization_id == organization_id
            )
        )
        await self._session.execute(
            delete(OrganizationMember).where(
                OrganizationMember.organization_id == organization_id
            )
        )
        await self.hard_delete(organization_id)


class OrganizationMemberRepository(BaseRepository[OrganizationMember]):
    model = OrganizationMember

    async def create(self, **kwargs) -> OrganizationMember:
        member = await super().create(**kwargs)
        # Load the joined user now; lazy loads are not available under asyncio
        await self._session.refresh(member, attribute_names=["user"])
        return member

    async def get_membership(self, organization_id: str, user_id: str) -> OrganizationMember | None:
        result = await self._session.execute(
            select(OrganizationMember).where(
                OrganizationMember.organization_id == organization_id,
                OrganizationMember.user_id == user_id,
            )
        )
        return result.scalars().first()

    async def list_by_organization(self, organization_id: str) -> list[OrganizationMember]:
        result = await self._session.execute(
            select(OrganizationMember)
            .where(OrganizationMember.organization_id == organization_id)
            .order_by(OrganizationMember.created_at, OrganizationMember.id)
        )
        return list(result.scalars().all())

    async def count_owners(self, organization_id: str) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(OrganizationMember)
            .where(
                OrganizationMember.organization_id == organization_id,
                OrganizationMember.role == MemberRole.OWNER.value,
            )
        )
        return result.scalar_one()

    async def sole_owned_organization_ids(self, user_id: str) -> list[str]:
        """Ids of organizations where *user_id* is the only owner."""
        owners = (
            select(
                OrganizationMember.organization_id,
                func.count().label("owner_count"),
            )
            .where(OrganizationMember.role == MemberRole.OWNER.value)
            .group_by(OrganizationMember.organization_id)
            .subquery()
        )
        result = await self._session.execute(
            select(OrganizationMember.organization_id)
            .join(owners, owners.c.organization_id == OrganizationMember.organization_id)
            .where(
                OrganizationMember.user_id == user_id,
                OrganizationMember.role == MemberRole.OWNER.value,
                owners.c.owner_count == 1,
            )
        )
        return list(result.scalars().all())

    async def delete_membership(self, organization_id: str, user_id: str) -> bool:
        result = await self._session.execute(
            delete(OrganizationMember).where(
                OrganizationMember.organization_id == organization_id,
                OrganizationMember.user_id == user_id,
            )
        )
        await self._session.flush()
        return result.rowcount > 0

    async def delete_for_user(self, user_id: str) -> None:
        await self._session.execute(
            delete(OrganizationMember).where(OrganizationMember.user_id == user_id)
        )
