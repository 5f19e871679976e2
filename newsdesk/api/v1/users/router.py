from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.api.v1.responses import DefaultResponse, Meta
from newsdesk.api.v1.users.schemas import UserResponse
from newsdesk.api.v1.users.service import UserService
from newsdesk.core.deps import get_db, get_identity
from newsdesk.core.identity import Identity

router = APIRouter()


@router.get(
    "/profile",
    response_model=DefaultResponse,
    summary="Get current user",
)
async def get_profile(
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    user_service = UserService(db)
    user = await user_service.get_profile(identity)
    return DefaultResponse(meta=Meta(message="Success Get User"), data=UserResponse.model_validate(user))


@router.put(
    "/update-password",
    response_model=DefaultResponse,
    summary="Change password",
    description="JSON body: current_password, new_password, confirm_password.",
)
async def update_password(
    request: Request,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    user_service = UserService(db)
    await user_service.update_password(identity, await request.body())
    return DefaultResponse(meta=Meta(message="Success Update Password"))
