"""Document and document-version Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from dochub.schemas.common import CamelModel

class DocumentCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    type: str = Field(min_length=1, max_length=100)
    description: str = ""
    organization_id: str

class DocumentUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    type: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None

class DocumentOut(CamelModel):
    id: str
    organization_id: str
    owner_id: str | None = None
    name: str
    type: str
    description: str
    active_version_id: str | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

class DocumentVersionCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    document_id: str
    file_path: str | None = Field(default=None, max_length=500)

class DocumentVersionUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)

class DocumentVersionOut(CamelModel):
    id: str
    document_id: str
    created_by_id: str | None = None
    name: str
    file_path: str | None = None
    created_at: datetime
    updated_at: datetime
