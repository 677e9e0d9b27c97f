"""Organization and membership Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from dochub.domain.organization import MemberRole, OrganizationType
from dochub.schemas.common import CamelModel

class OrganizationCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    organization_type: OrganizationType

class OrganizationUpdate(CamelModel):
    # organization_type is fixed at creation
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None

class OrganizationOut(CamelModel):
    id: str
    name: str
    description: str
    organization_type: OrganizationType
    created_at: datetime
    updated_at: datetime

class MyOrganizationOut(OrganizationOut):
    """An organization as seen by one of its members."""

    role: MemberRole
    invite_accepted: bool

class MemberOut(CamelModel):
    organization_id: str
    user_id: str
    username: str
    role: MemberRole
    invite_accepted: bool

class OrganizationDataOut(OrganizationOut):
    members: list[MemberOut]

class AddUserRequest(CamelModel):
    organization_id: str
    user_id: str
    role: MemberRole

class UpdatePermissionRequest(CamelModel):
    organization_id: str
    user_id: str
    role: MemberRole | None = None
    invite_accepted: bool | None = None

class UpdateInviteRequest(CamelModel):
    organization_id: str
    user_id: str
    invite_accepted: bool | None = None
    role: MemberRole | None = None
