"""Organization service: membership, roles and the permission primitives.

Every other service resolves access through :class:`OrganizationService`:

  check_user_role  - True when the user holds one of the given roles
  require_member   - 403 unless the user is a member
  require_owner    - 403 unless the user is an owner (logged as [SECURITY])
  require_role     - 403 with a caller-supplied message unless a role matches

Invite acceptance does not gate any of these checks.
"""

import logging
from typing import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from dochub.core.pagination import PaginationParams
from dochub.domain.organization import (
    MemberRole,
    Organization,
    OrganizationMember,
    OrganizationType,
)
from dochub.repositories.favorite import FavoriteDocumentRepository, FavoriteOrganizationRepository
from dochub.repositories.organization import OrganizationMemberRepository, OrganizationRepository
from dochub.repositories.user import UserRepository
from dochub.schemas.organization import (
    AddUserRequest,
    OrganizationCreate,
    OrganizationUpdate,
    UpdateInviteRequest,
    UpdatePermissionRequest,
)

logger = logging.getLogger(__name__)

NOT_A_MEMBER = "The request user is not part of this organization"
NO_PERMISSION = "You do not have permission to do this"
ORGANIZATION_NOT_FOUND = "Organization not found"
NO_UPDATE_DATA = "No data provided for update"
LAST_OWNER = "An organization must keep at least one owner"
ALREADY_MEMBER = "User is already a member of this organization"

class OrganizationService:
    def __init__(self, session: AsyncSession):
        self._repo = OrganizationRepository(session)
        self._members = OrganizationMemberRepository(session)
        self._users = UserRepository(session)
        self._favorite_documents = FavoriteDocumentRepository(session)
        self._favorite_organizations = FavoriteOrganizationRepository(session)

    # ------------------------------------------------------------------
    # Permission primitives
    # ------------------------------------------------------------------

    async def check_user_role(
        self, user_id: str, organization_id: str, roles: Iterable[MemberRole]
    ) -> bool:
        member = await self._members.get_membership(organization_id, user_id)
        if member is None:
            return False
        return member.role in {role.value for role in roles}

    async def require_member(self, user_id: str, organization_id: str) -> OrganizationMember:
        member = await self._members.get_membership(organization_id, user_id)
        if member is None:
            raise ForbiddenError(NOT_A_MEMBER)
        return member

    async def require_owner(self, user_id: str, organization_id: str) -> OrganizationMember:
        member = await self.require_member(user_id, organization_id)
        if member.role != MemberRole.OWNER.value:
            logger.warning(
                "[SECURITY] User %s (role=%s) attempted an owner-only action on organization %s",
                user_id, member.role, organization_id,
            )
            raise ForbiddenError(NO_PERMISSION)
        return member

    async def require_role(
        self,
        user_id: str,
        organization_id: str,
        roles: Iterable[MemberRole],
        message: str,
    ) -> None:
        roles = tuple(roles)
        if not await self.check_user_role(user_id, organization_id, roles):
            logger.warning(
                "[SECURITY] User %s lacks %s on organization %s",
                user_id, "/".join(r.value for r in roles), organization_id,
            )
            raise ForbiddenError(message)

    # ------------------------------------------------------------------
    # Organizations
    # ------------------------------------------------------------------

    async def get_organization(self, organization_id: str) -> Organization:
        organization = await self._repo.get_by_id(organization_id)
        if not organization:
            raise NotFoundError(ORGANIZATION_NOT_FOUND)
        return organization

    async def create_organization(self, data: OrganizationCreate, requester_id: str) -> Organization:
        organization = await self._repo.create(
            name=data.name,
            description=data.description,
            organization_type=data.organization_type.value,
        )
        await self._members.create(
            organization_id=organization.id,
            user_id=requester_id,
            role=MemberRole.OWNER.value,
            invite_accepted=True,
        )
        logger.info("Organization %s created by user %s", organization.id, requester_id)
        return organization

    async def update_organization(
        self, organization_id: str, data: OrganizationUpdate, requester_id: str
    ) -> Organization:
        changes = data.model_dump(exclude_none=True, exclude_unset=True)
        if not changes:
            raise BadRequestError(NO_UPDATE_DATA)
        _ = await self.get_organization(organization_id)  # raises 404 if missing
        await self.require_owner(requester_id, organization_id)
        updated = await self._repo.update(organization_id, **changes)
        return updated  # type: ignore[return-value]

    async def delete_organization(self, organization_id: str, requester_id: str) -> None:
        _ = await self.get_organization(organization_id)
        await self.require_owner(requester_id, organization_id)
        await self._repo.delete_cascade(organization_id)
        logger.info("Organization %s deleted by user %s", organization_id, requester_id)

    async def find_organizations_by_user(
        self, requester_id: str, pagination: PaginationParams
    ) -> tuple[list[tuple[Organization, OrganizationMember]], int]:
        return await self._repo.list_for_user(
            requester_id,
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
        )

    async def get_organization_data(
        self, organization_id: str, requester_id: str
    ) -> tuple[Organization, list[OrganizationMember]]:
        await self.require_member(requester_id, organization_id)
        organization = await self.get_organization(organization_id)
        members = await self._members.list_by_organization(organization_id)
        return organization, members

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    async def add_user_to_organization(
        self, data: AddUserRequest, requester_id: str
    ) -> OrganizationMember:
        await self.require_owner(requester_id, data.organization_id)

        if not await self._users.get_by_id(data.user_id):
            raise NotFoundError("User not found")

        organization = await self.get_organization(data.organization_id)
        if organization.organization_type == OrganizationType.INDIVIDUAL.value:
            raise BadRequestError("This organization is individual")

        if await self._members.get_membership(data.organization_id, data.user_id):
            raise ConflictError(ALREADY_MEMBER)

        try:
            member = await self._members.create(
                organization_id=data.organization_id,
                user_id=data.user_id,
                role=data.role.value,
                invite_accepted=False,
            )
        except IntegrityError as exc:
            raise ConflictError(ALREADY_MEMBER) from exc
        logger.info(
            "User %s invited to organization %s as %s", data.user_id, data.organization_id, data.role.value
        )
        return member

    async def update_user_permission(
        self, data: UpdatePermissionRequest, requester_id: str
    ) -> OrganizationMember:
        await self.require_owner(requester_id, data.organization_id)

        if "invite_accepted" in data.model_fields_set:
            raise ForbiddenError("You do not have permission to change inviteAccepted")
        if data.role is None:
            raise BadRequestError("New user permission must be provided")

        member = await self._members.get_membership(data.organization_id, data.user_id)
        if not member:
            raise NotFoundError("User not found in the organization")

        if member.role == MemberRole.OWNER.value and data.role != MemberRole.OWNER:
            if await self._members.count_owners(data.organization_id) <= 1:
                raise BadRequestError(LAST_OWNER)

        updated = await self._members.update(member.id, role=data.role.value)
        return updated  # type: ignore[return-value]

    async def update_user_invite_status(
        self, data: UpdateInviteRequest, requester_id: str
    ) -> OrganizationMember:
        if requester_id != data.user_id:
            logger.warning(
                "[SECURITY] User %s attempted to answer the invite of user %s in organization %s",
                requester_id, data.user_id, data.organization_id,
            )
            raise ForbiddenError(NO_PERMISSION)
        if "role" in data.model_fields_set:
            raise ForbiddenError("You do not have permission to change userType")
        if data.invite_accepted is not True:
            raise BadRequestError("New user invite status must be provided")

        member = await self._members.get_membership(data.organization_id, data.user_id)
        if not member:
            raise NotFoundError("User not found in the organization")

        updated = await self._members.update(member.id, invite_accepted=True)
        return updated  # type: ignore[return-value]

    async def remove_user_from_organization(
        self, organization_id: str, user_id: str, requester_id: str
    ) -> None:
        if requester_id != user_id and not await self.check_user_role(
            requester_id, organization_id, [MemberRole.OWNER]
        ):
            logger.warning(
                "[SECURITY] User %s attempted to remove user %s from organization %s",
                requester_id, user_id, organization_id,
            )
            raise ForbiddenError(NO_PERMISSION)

        member = await self._members.get_membership(organization_id, user_id)
        if not member:
            raise NotFoundError("User not found in this organization")

        if member.role == MemberRole.OWNER.value:
            if await self._members.count_owners(organization_id) <= 1:
                raise BadRequestError(LAST_OWNER)

        await self._members.delete_membership(organization_id, user_id)
        await self._favorite_organizations.remove(user_id, organization_id)
        await self._favorite_documents.delete_for_membership(user_id, organization_id)
        logger.info("User %s removed from organization %s", user_id, organization_id)
