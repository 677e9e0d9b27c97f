"""User service: registration, self-service profile changes and favorites."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from dochub.core.pagination import PaginationParams
from dochub.core.security import hash_password
from dochub.domain.document import Document
from dochub.domain.organization import Organization
from dochub.domain.user import User
from dochub.repositories.document import DocumentRepository, DocumentVersionRepository
from dochub.repositories.favorite import FavoriteDocumentRepository, FavoriteOrganizationRepository
from dochub.repositories.organization import OrganizationMemberRepository
from dochub.repositories.user import UserRepository
from dochub.schemas.user import UserCreate, UserUpdate
from dochub.services.organization import NO_PERMISSION, NO_UPDATE_DATA, OrganizationService

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
USER_EXISTS = "User already exists"
EMAIL_EXISTS = "Email already exists"
FAVORITE_DOCUMENT_EXISTS = "Document is already a favorite"
FAVORITE_ORGANIZATION_EXISTS = "Organization is already a favorite"


def _duplicate_user(exc: IntegrityError) -> ConflictError:
    """Map a unique-constraint failure on the users table to its 409."""
    logger.warning("Duplicate user rejected by the database: %s", exc.orig)
    return ConflictError(EMAIL_EXISTS if "email" in str(exc.orig).lower() else USER_EXISTS)


class UserService:
    def __init__(self, session: AsyncSession):
        self._repo = UserRepository(session)
        self._members = OrganizationMemberRepository(session)
        self._documents = DocumentRepository(session)
        self._versions = DocumentVersionRepository(session)
        self._favorite_documents = FavoriteDocumentRepository(session)
        self._favorite_organizations = FavoriteOrganizationRepository(session)
        self._organizations = OrganizationService(session)

    async def _get_self(self, user_id: str, requester_id: str) -> User:
        user = await self._repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND)
        if user.id != requester_id:
            logger.warning("[SECURITY] User %s attempted to access user %s", requester_id, user_id)
            raise ForbiddenError(NO_PERMISSION)
        return user

    async def _ensure_unique(
        self, *, username: str | None, email: str | None, exclude_id: str | None = None
    ) -> None:
        if username is not None:
            existing = await self._repo.get_by_username(username)
            if existing and existing.id != exclude_id:
                raise ConflictError(USER_EXISTS)
        if email is not None:
            existing = await self._repo.get_by_email(email)
            if existing and existing.id != exclude_id:
                raise ConflictError(EMAIL_EXISTS)

    async def create_user(self, data: UserCreate) -> User:
        await self._ensure_unique(username=data.username, email=data.email)
        try:
            user = await self._repo.create(
                username=data.username,
                email=data.email,
                password_hash=hash_password(data.password),
            )
        except IntegrityError as exc:
            raise _duplicate_user(exc) from exc
        logger.info("User %s registered", user.id)
        return user

    async def list_users(self, pagination: PaginationParams) -> tuple[list[User], int]:
        return await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
        )

    async def get_user(self, user_id: str, requester_id: str) -> User:
        return await self._get_self(user_id, requester_id)

    async def update_user(self, user_id: str, data: UserUpdate, requester_id: str) -> User:
        _ = await self._get_self(user_id, requester_id)
        changes = data.model_dump(exclude_none=True, exclude_unset=True)
        if not changes:
            raise BadRequestError(NO_UPDATE_DATA)
        await self._ensure_unique(
            username=changes.get("username"), email=changes.get("email"), exclude_id=user_id
        )
        if "password" in changes:
            changes["password_hash"] = hash_password(changes.pop("password"))
        try:
            updated = await self._repo.update(user_id, **changes)
        except IntegrityError as exc:
            raise _duplicate_user(exc) from exc
        return updated  # type: ignore[return-value]

    async def delete_user(self, user_id: str, requester_id: str) -> None:
        _ = await self._get_self(user_id, requester_id)
        sole_owned = await self._members.sole_owned_organization_ids(user_id)
        if sole_owned:
            raise ConflictError(
                "User is the sole owner of an organization; transfer ownership or delete it first"
            )
        await self._favorite_documents.delete_for_user(user_id)
        await self._favorite_organizations.delete_for_user(user_id)
        await self._members.delete_for_user(user_id)
        await self._documents.clear_owner(user_id)
        await self._versions.clear_creator(user_id)
        await self._repo.hard_delete(user_id)
        logger.info("User %s deleted", user_id)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    async def list_favorites(self, requester_id: str) -> tuple[list[Document], list[Organization]]:
        documents = await self._favorite_documents.documents_for_user(requester_id)
        organizations = await self._favorite_organizations.organizations_for_user(requester_id)
        return documents, organizations

    async def add_favorite_document(self, document_id: str, requester_id: str) -> None:
        document = await self._documents.get_by_id(document_id)
        if not document:
            raise NotFoundError("Document not found")
        await self._organizations.require_member(requester_id, document.organization_id)
        if await self._favorite_documents.exists(user_id=requester_id, document_id=document_id):
            raise ConflictError(FAVORITE_DOCUMENT_EXISTS)
        try:
            await self._favorite_documents.create(user_id=requester_id, document_id=document_id)
        except IntegrityError as exc:
            raise ConflictError(FAVORITE_DOCUMENT_EXISTS) from exc

    async def remove_favorite_document(self, document_id: str, requester_id: str) -> None:
        if not await self._favorite_documents.remove(requester_id, document_id):
            raise NotFoundError("Favorite not found")

    async def add_favorite_organization(self, organization_id: str, requester_id: str) -> None:
        _ = await self._organizations.get_organization(organization_id)
        await self._organizations.require_member(requester_id, organization_id)
        if await self._favorite_organizations.exists(
            user_id=requester_id, organization_id=organization_id
        ):
            raise ConflictError(FAVORITE_ORGANIZATION_EXISTS)
        try:
            await self._favorite_organizations.create(
                user_id=requester_id, organization_id=organization_id
            )
        except IntegrityError as exc:
            raise ConflictError(FAVORITE_ORGANIZATION_EXISTS) from exc

    async def remove_favorite_organization(self, organization_id: str, requester_id: str) -> None:
        if not await self._favorite_organizations.remove(requester_id, organization_id):
            raise NotFoundError("Favorite not found")
