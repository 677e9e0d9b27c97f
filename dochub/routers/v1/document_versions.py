"""Document versions router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.auth import get_current_user
from dochub.core.pagination import PaginationParams
from dochub.core.response import DataResponse, ListResponse, paginated
from dochub.db.base import get_db
from dochub.domain.user import User
from dochub.schemas.document import (
    DocumentVersionCreate,
    DocumentVersionOut,
    DocumentVersionUpdate,
)
from dochub.services.document_version import DocumentVersionService

router = APIRouter(prefix="/document-versions", tags=["Document Versions"])


@router.post("", response_model=DataResponse[DocumentVersionOut], status_code=status.HTTP_201_CREATED)
async def create_version(
    body: DocumentVersionCreate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a version; it becomes the document's active version."""
    version = await DocumentVersionService(session).create_version(body, current_user.id)
    return {"data": DocumentVersionOut.model_validate(version)}


@router.get("/id/{version_id}", response_model=DataResponse[DocumentVersionOut])
async def get_version(
    version_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    version = await DocumentVersionService(session).get_version(version_id, current_user.id)
    return {"data": DocumentVersionOut.model_validate(version)}


@router.get("/document/{document_id}", response_model=ListResponse[DocumentVersionOut])
async def list_versions_by_document(
    document_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    items, total = await DocumentVersionService(session).list_versions_by_document(
        document_id, current_user.id, pagination
    )
    return paginated(
        [DocumentVersionOut.model_validate(v) for v in items],
        total, pagination.page, pagination.limit,
    )


@router.get("/user/{user_id}", response_model=ListResponse[DocumentVersionOut])
async def list_versions_by_user(
    user_id: str,
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    items, total = await DocumentVersionService(session).list_versions_by_user(
        user_id, current_user.id, pagination
    )
    return paginated(
        [DocumentVersionOut.model_validate(v) for v in items],
        total, pagination.page, pagination.limit,
    )


@router.patch("/{version_id}", response_model=DataResponse[DocumentVersionOut])
async def update_version(
    version_id: str,
    body: DocumentVersionUpdate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    version = await DocumentVersionService(session).update_version(version_id, body, current_user.id)
    return {"data": DocumentVersionOut.model_validate(version)}


@router.delete("/{version_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_version(
    version_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await DocumentVersionService(session).delete_version(version_id, current_user.id)
