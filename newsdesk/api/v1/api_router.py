from fastapi import APIRouter

from newsdesk.api.v1.health import router as health_router
from newsdesk.api.v1.auth.router import router as auth_router
from newsdesk.api.v1.users.router import router as users_router
from newsdesk.api.v1.contents.router import router as contents_router, public_router as public_contents_router

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(auth_router)
api_router.include_router(users_router, prefix="/admin/users", tags=["users"])
api_router.include_router(contents_router, prefix="/admin/contents", tags=["content"])
api_router.include_router(public_contents_router, prefix="/fe/contents", tags=["public-content"])
