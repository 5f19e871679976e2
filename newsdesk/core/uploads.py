"""
Image upload flow: stage the file on local disk, push it to object storage,
then remove the local copy.

    Staged   -> local file written under UPLOAD_TEMP_DIR
    Uploaded -> put_object succeeded, public URL known
    Reconciled -> local file removed

A failed upload leaves the staged file in place. A failed local removal after a
successful upload is logged and the URL is still returned; the orphaned file is
left for cleanup.
"""
import asyncio
import logging
import os
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Optional

from pydantic import BaseModel

from newsdesk.core.exceptions import InvalidParameter, UploadError
from newsdesk.core.identity import Identity
from newsdesk.core.storage import ObjectStorage

logger = logging.getLogger(__name__)

# Max size for a content image (5 MB)
IMAGE_MAX_BYTES = 5 * 1024 * 1024


class FileUploadRequest(BaseModel):
    """Object key plus the local path of the staged file. Never persisted."""

    name: str
    path: str


class PresignedUpload(BaseModel):
    object_key: str
    upload_url: str
    public_url: str


def object_key_for(identity: Identity) -> str:
    """Per-upload key: "{user_id}-{nanosecond timestamp}". Collisions are not checked."""
    return f"{identity.user_id}-{time.time_ns()}"


def check_image(content_type: Optional[str], size: Optional[int]) -> None:
    if not content_type or not content_type.startswith("image/"):
        raise InvalidParameter("image", "Image must be an image file (JPEG, PNG, WebP, or GIF)")
    if size is not None and size > IMAGE_MAX_BYTES:
        raise InvalidParameter(
            "image", f"File too large. Maximum size is {IMAGE_MAX_BYTES // (1024 * 1024)} MB."
        )


class ImageUploader:
    def __init__(self, storage: ObjectStorage, temp_dir: str):
        self.storage = storage
        self.temp_dir = Path(temp_dir)

    def new_request(self, identity: Identity) -> FileUploadRequest:
        name = object_key_for(identity)
        return FileUploadRequest(name=name, path=str(self.temp_dir / name))

    def stage(self, request: FileUploadRequest, stream: BinaryIO) -> FileUploadRequest:
        try:
            self.temp_dir.mkdir(parents=True, exist_ok=True)
            with open(request.path, "wb") as out:
                shutil.copyfileobj(stream, out)
        except OSError as e:
            raise UploadError(f"Failed to stage image: {e}", stage="[UPLOAD] stage = 1")
        return request

    def upload(self, request: FileUploadRequest) -> str:
        """Push a staged file and reconcile the local copy. Returns the public URL."""
        url = self.storage.upload_file(request.name, request.path)
        try:
            os.remove(request.path)
        except OSError as e:
            logger.warning("[UPLOAD] upload = 1 uploaded %s but could not remove %s: %s", request.name, request.path, e)
        logger.info("Uploaded image %s", request.name)
        return url

    def stage_and_upload(self, identity: Identity, stream: BinaryIO) -> tuple[FileUploadRequest, str]:
        request = self.stage(self.new_request(identity), stream)
        return request, self.upload(request)

    def presign(self, identity: Identity) -> PresignedUpload:
        key = object_key_for(identity)
        return PresignedUpload(
            object_key=key,
            upload_url=self.storage.generate_presigned_url(key),
            public_url=self.storage.public_url(key),
        )

    def discard(self, key: str) -> None:
        """Remove an uploaded object whose database write failed."""
        try:
            self.storage.delete_object(key)
            logger.info("Removed orphaned image %s", key)
        except UploadError:
            logger.exception("[UPLOAD] discard = 1 could not remove orphaned image %s", key)

    async def aupload(self, identity: Identity, stream: BinaryIO) -> tuple[FileUploadRequest, str]:
        return await asyncio.to_thread(self.stage_and_upload, identity, stream)

    async def adiscard(self, key: str) -> None:
        await asyncio.to_thread(self.discard, key)
