"""S3-compatible object storage (Cloudflare R2, MinIO, AWS S3) for content images."""

import logging
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from newsdesk.core.config import settings
from newsdesk.core.exceptions import UploadError

logger = logging.getLogger(__name__)

IMAGE_CONTENT_TYPE = "image/jpeg"


def get_s3_client():
    """Create the S3 client. For AWS leave S3_ENDPOINT_URL empty; R2/MinIO need it."""
    config = Config(signature_version="s3v4", region_name=settings.S3_REGION)
    kwargs = {
        "region_name": settings.S3_REGION,
        "config": config,
        "endpoint_url": settings.S3_ENDPOINT_URL.strip() or None,
    }
    if settings.S3_ACCESS_KEY_ID and settings.S3_SECRET_ACCESS_KEY:
        kwargs["aws_access_key_id"] = settings.S3_ACCESS_KEY_ID
        kwargs["aws_secret_access_key"] = settings.S3_SECRET_ACCESS_KEY
    return boto3.client("s3", **kwargs)


class ObjectStorage:
    """Put, presign and delete objects in one bucket. All methods block; call via asyncio.to_thread."""

    def __init__(self, client, bucket: str, base_url: str, expires_hours: int = 1):
        self.client = client
        self.bucket = bucket
        self.base_url = base_url.rstrip("/")
        self.expires_hours = expires_hours

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def upload_file(self, key: str, path: str) -> str:
        """Upload a local file as image/jpeg and return its public URL."""
        try:
            with open(path, "rb") as body:
                self.client.put_object(
                    Bucket=self.bucket,
                    Key=key,
                    Body=body,
                    ContentType=IMAGE_CONTENT_TYPE,
                )
        except OSError as e:
            raise UploadError(f"Failed to read staged file: {e}", stage="[STORAGE] upload_file = 1")
        except (BotoCoreError, ClientError) as e:
            raise UploadError(f"Failed to upload image: {e}", stage="[STORAGE] upload_file = 2")
        return self.public_url(key)

    def generate_presigned_url(self, key: str) -> str:
        """Time-limited URL that lets the caller PUT the object directly."""
        try:
            return self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.expires_hours * 3600,
            )
        except (BotoCoreError, ClientError) as e:
            raise UploadError(f"Failed to generate upload URL: {e}", stage="[STORAGE] generate_presigned_url = 1")

    def delete_object(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise UploadError(f"Failed to delete object: {e}", stage="[STORAGE] delete_object = 1")


_storage: Optional[ObjectStorage] = None


def get_object_storage() -> ObjectStorage:
    """Shared ObjectStorage built from settings. Raises UploadError when storage is not configured."""
    global _storage
    if not settings.S3_BUCKET_NAME:
        raise UploadError(
            "Image upload is not configured. Set S3_BUCKET_NAME and storage credentials.",
            stage="[STORAGE] get_object_storage = 1",
        )
    if _storage is None:
        try:
            client = get_s3_client()
        except (BotoCoreError, ValueError) as e:
            logger.exception("Failed to create S3 client: %s", e)
            raise UploadError("Storage is temporarily unavailable.")
        _storage = ObjectStorage(
            client,
            bucket=settings.S3_BUCKET_NAME,
            base_url=settings.S3_PUBLIC_URL,
            expires_hours=settings.S3_PRESIGN_EXPIRES_HOURS,
        )
    return _storage
