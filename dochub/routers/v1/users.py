"""Users router: registration, self-service profile and favorites."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.auth import get_current_user
from dochub.core.pagination import PaginationParams
from dochub.core.response import DataResponse, ListResponse, paginated
from dochub.db.base import get_db
from dochub.domain.user import User
from dochub.schemas.document import DocumentOut
from dochub.schemas.organization import OrganizationOut
from dochub.schemas.user import FavoritesOut, UserCreate, UserOut, UserUpdate
from dochub.services.user import UserService

router = APIRouter(prefix="/users", tags=["Users"])


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------

@router.post("", response_model=DataResponse[UserOut], status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    session: AsyncSession = Depends(get_db),
):
    """Register a new user (public)."""
    user = await UserService(session).create_user(body)
    return {"data": UserOut.model_validate(user)}


@router.get("", response_model=ListResponse[UserOut])
async def list_users(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
):
    items, total = await UserService(session).list_users(pagination)
    return paginated(
        [UserOut.model_validate(u) for u in items],
        total, pagination.page, pagination.limit,
    )


# Declared before /{user_id} so "me" is never captured as an id
@router.get("/me/favorites", response_model=DataResponse[FavoritesOut])
async def list_favorites(
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    documents, organizations = await UserService(session).list_favorites(current_user.id)
    return {
        "data": FavoritesOut(
            documents=[DocumentOut.model_validate(d) for d in documents],
            organizations=[OrganizationOut.model_validate(o) for o in organizations],
        )
    }


@router.post("/me/favorites/documents/{document_id}", status_code=status.HTTP_201_CREATED)
async def add_favorite_document(
    document_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await UserService(session).add_favorite_document(document_id, current_user.id)
    return {"data": {"documentId": document_id}}


@router.delete("/me/favorites/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite_document(
    document_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await UserService(session).remove_favorite_document(document_id, current_user.id)


@router.post(
    "/me/favorites/organizations/{organization_id}", status_code=status.HTTP_201_CREATED
)
async def add_favorite_organization(
    organization_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await UserService(session).add_favorite_organization(organization_id, current_user.id)
    return {"data": {"organizationId": organization_id}}


@router.delete(
    "/me/favorites/organizations/{organization_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_favorite_organization(
    organization_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await UserService(session).remove_favorite_organization(organization_id, current_user.id)


@router.get("/{user_id}", response_model=DataResponse[UserOut])
async def get_user(
    user_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = await UserService(session).get_user(user_id, current_user.id)
    return {"data": UserOut.model_validate(user)}


@router.put("/{user_id}", response_model=DataResponse[UserOut])
async def update_user(
    user_id: str,
    body: UserUpdate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = await UserService(session).update_user(user_id, body, current_user.id)
    return {"data": UserOut.model_validate(user)}


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await UserService(session).delete_user(user_id, current_user.id)
