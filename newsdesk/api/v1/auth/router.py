from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.api.v1.auth.schemas import LoginRequest, LoginResponse
from newsdesk.api.v1.users.service import UserService
from newsdesk.core.deps import get_db
from newsdesk.core.exceptions import app_exception
from newsdesk.core.security import create_access_token

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description="Exchange email and password for a bearer token.",
    tags=["auth"],
)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    user_service = UserService(db)
    user = await user_service.authenticate(data.email, data.password)
    if not user:
        app_exception.raise_401("Incorrect email or password")
    token, expires_at = create_access_token(data={"sub": user.id, "email": user.email})
    return LoginResponse(access_token=token, expires_at=expires_at)
