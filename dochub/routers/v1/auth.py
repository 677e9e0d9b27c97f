"""Auth router: login and current-user lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.core.auth import get_current_user
from dochub.core.response import DataResponse
from dochub.db.base import get_db
from dochub.domain.user import User
from dochub.schemas.auth import LoginRequest, LoginResponse, LoginUser
from dochub.schemas.user import UserOut
from dochub.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=DataResponse[LoginResponse])
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(get_db),
):
    """Exchange email + password for a bearer token."""
    token, user = await AuthService(session).login(body.email, body.password)
    return {"data": LoginResponse(token=token, user=LoginUser.model_validate(user))}


@router.get("/me", response_model=DataResponse[UserOut])
async def me(current_user: User = Depends(get_current_user)):
    return {"data": UserOut.model_validate(current_user)}
