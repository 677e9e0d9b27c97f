"""Organizations router: tenants, membership and invites."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.auth import get_current_user
from dochub.core.pagination import PaginationParams
from dochub.core.response import DataResponse, ListResponse, paginated
from dochub.db.base import get_db
from dochub.domain.organization import Organization, OrganizationMember
from dochub.domain.user import User
from dochub.schemas.organization import (
    AddUserRequest,
    MemberOut,
    MyOrganizationOut,
    OrganizationCreate,
    OrganizationDataOut,
    OrganizationOut,
    OrganizationUpdate,
    UpdateInviteRequest,
    UpdatePermissionRequest,
)
from dochub.services.organization import OrganizationService

router = APIRouter(prefix="/organizations", tags=["Organizations"])


def _with_membership(organization: Organization, member: OrganizationMember) -> MyOrganizationOut:
    return MyOrganizationOut(
        **OrganizationOut.model_validate(organization).model_dump(),
        role=member.role,
        invite_accepted=member.invite_accepted,
    )


# ------------------------------------------------------------------
# Organizations
# ------------------------------------------------------------------

@router.post("", response_model=DataResponse[OrganizationOut], status_code=status.HTTP_201_CREATED)
async def create_organization(
    body: OrganizationCreate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create an organization; the requester becomes its owner."""
    organization = await OrganizationService(session).create_organization(body, current_user.id)
    return {"data": OrganizationOut.model_validate(organization)}


@router.get("/my", response_model=ListResponse[MyOrganizationOut])
async def find_organizations_by_user(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Organizations the requester belongs to, with their role and invite flag."""
    rows, total = await OrganizationService(session).find_organizations_by_user(
        current_user.id, pagination
    )
    return paginated(
        [_with_membership(org, member) for org, member in rows],
        total, pagination.page, pagination.limit,
    )


@router.get("/data/{organization_id}", response_model=DataResponse[OrganizationDataOut])
async def get_organization_data(
    organization_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    organization, members = await OrganizationService(session).get_organization_data(
        organization_id, current_user.id
    )
    return {
        "data": OrganizationDataOut(
            **OrganizationOut.model_validate(organization).model_dump(),
            members=[MemberOut.model_validate(m) for m in members],
        )
    }


# ------------------------------------------------------------------
# Membership (declared before /{organization_id})
# ------------------------------------------------------------------

@router.post("/addUser", response_model=DataResponse[MemberOut], status_code=status.HTTP_201_CREATED)
async def add_user_to_organization(
    body: AddUserRequest,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    member = await OrganizationService(session).add_user_to_organization(body, current_user.id)
    return {"data": MemberOut.model_validate(member)}


@router.patch("/updateUser/permission", response_model=DataResponse[MemberOut])
async def update_user_permission(
    body: UpdatePermissionRequest,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    member = await OrganizationService(session).update_user_permission(body, current_user.id)
    return {"data": MemberOut.model_validate(member)}


@router.patch("/updateUser/invite", response_model=DataResponse[MemberOut])
async def update_user_invite_status(
    body: UpdateInviteRequest,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Accept an invitation. Only the invited user may call this."""
    member = await OrganizationService(session).update_user_invite_status(body, current_user.id)
    return {"data": MemberOut.model_validate(member)}


@router.delete(
    "/removeUser/{organization_id}/{user_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_user_from_organization(
    organization_id: str,
    user_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await OrganizationService(session).remove_user_from_organization(
        organization_id, user_id, current_user.id
    )


@router.patch("/{organization_id}", response_model=DataResponse[OrganizationOut])
async def update_organization(
    organization_id: str,
    body: OrganizationUpdate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    organization = await OrganizationService(session).update_organization(
        organization_id, body, current_user.id
    )
    return {"data": OrganizationOut.model_validate(organization)}


@router.delete("/{organization_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_organization(
    organization_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await OrganizationService(session).delete_organization(organization_id, current_user.id)
