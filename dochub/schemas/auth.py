"""Auth Pydantic schemas."""


from pydantic import Field

from dochub.schemas.common import CamelModel

class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

class LoginUser(CamelModel):
    id: str
    email: str

class LoginResponse(CamelModel):
    token: str
    user: LoginUser
