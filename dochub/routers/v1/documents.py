"""Documents router: CRUD, active version, trash and restore."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.auth import get_current_user
from dochub.core.pagination import PaginationParams
from dochub.core.response import DataResponse, ListResponse, paginated
from dochub.db.base import get_db
from dochub.domain.user import User
from dochub.schemas.document import DocumentCreate, DocumentOut, DocumentUpdate
from dochub.services.document import DocumentService

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post("", response_model=DataResponse[DocumentOut], status_code=status.HTTP_201_CREATED)
async def create_document(
    body: DocumentCreate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document = await DocumentService(session).create_document(body, current_user.id)
    return {"data": DocumentOut.model_validate(document)}


@router.get("/id/{document_id}", response_model=DataResponse[DocumentOut])
async def get_document(
    document_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document = await DocumentService(session).get_document(document_id, current_user.id)
    return {"data": DocumentOut.model_validate(document)}


@router.get("/organization/{organization_id}", response_model=ListResponse[DocumentOut])
async def list_by_organization(
    organization_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Live documents of an organization (paginated)."""
    items, total = await DocumentService(session).list_by_organization(
        organization_id, current_user.id, pagination
    )
    return paginated(
        [DocumentOut.model_validate(d) for d in items],
        total, pagination.page, pagination.limit,
    )


@router.get("/organization/{organization_id}/trashed", response_model=ListResponse[DocumentOut])
async def list_trashed_by_organization(
    organization_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Documents of an organization currently in the trash."""
    items, total = await DocumentService(session).list_by_organization(
        organization_id, current_user.id, pagination, trashed=True
    )
    return paginated(
        [DocumentOut.model_validate(d) for d in items],
        total, pagination.page, pagination.limit,
    )


@router.patch("/{document_id}", response_model=DataResponse[DocumentOut])
async def update_document(
    document_id: str,
    body: DocumentUpdate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document = await DocumentService(session).update_document(document_id, body, current_user.id)
    return {"data": DocumentOut.model_validate(document)}


@router.patch("/{document_id}/active-version/{version_id}", response_model=DataResponse[DocumentOut])
async def set_active_version(
    document_id: str,
    version_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document = await DocumentService(session).set_active_version(
        document_id, version_id, current_user.id
    )
    return {"data": DocumentOut.model_validate(document)}


@router.patch("/{document_id}/trash", response_model=DataResponse[DocumentOut])
async def move_to_trash(
    document_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document = await DocumentService(session).move_to_trash(document_id, current_user.id)
    return {"data": DocumentOut.model_validate(document)}


@router.patch("/{document_id}/restore", response_model=DataResponse[DocumentOut])
async def restore_from_trash(
    document_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document = await DocumentService(session).restore_from_trash(document_id, current_user.id)
    return {"data": DocumentOut.model_validate(document)}


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Permanently delete a document (owners only)."""
    await DocumentService(session).delete_document(document_id, current_user.id)
