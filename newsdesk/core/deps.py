import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.core.config import settings
from newsdesk.core.database import async_session_maker
from newsdesk.core.exceptions import UploadError
from newsdesk.core.identity import ANONYMOUS, Identity
from newsdesk.core.security import decode_access_token
from newsdesk.core.storage import get_object_storage
from newsdesk.core.uploads import ImageUploader

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


async def get_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """
    Build the caller's identity from the bearer token.

    Never fails: a missing, expired or malformed token yields the anonymous
    identity (user_id == 0). Services decide whether that is acceptable by
    calling newsdesk.core.identity.require.
    """
    if credentials is None or not credentials.credentials:
        return ANONYMOUS
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        logger.info("Rejected bearer token: could not validate credentials")
        return ANONYMOUS
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return ANONYMOUS
    if user_id <= 0:
        return ANONYMOUS
    return Identity(user_id=user_id, email=str(payload.get("email") or ""))


def get_image_uploader() -> Optional[ImageUploader]:
    """None when object storage is not configured; callers authorize before reporting that."""
    if not settings.S3_BUCKET_NAME:
        return None
    try:
        storage = get_object_storage()
    except UploadError as e:
        logger.warning("Object storage unavailable: %s", e.detail)
        return None
    return ImageUploader(storage, settings.UPLOAD_TEMP_DIR)
