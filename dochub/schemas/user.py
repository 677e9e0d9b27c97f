"""User Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field

from dochub.schemas.common import CamelModel
from dochub.schemas.document import DocumentOut
from dochub.schemas.organization import OrganizationOut

class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=1)

class UserUpdate(CamelModel):
    username: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str | None = Field(default=None, min_length=1)

class UserOut(CamelModel):
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

class FavoritesOut(CamelModel):
    documents: list[DocumentOut]
    organizations: list[OrganizationOut]
