import logging
import sys
from typing import Optional

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


class AppException:
    """Class-based exception handlers for common HTTP status codes."""

    @staticmethod
    def raise_401(message: str = "Unauthorized"):
        """Raise a 401 Unauthorized exception."""
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


class CatalogError(HTTPException):
    """
    Base for errors raised by the content catalog.

    Subclasses fix the HTTP status so the app's HTTPException handler can render
    them directly. `stage` identifies where the error was raised (e.g.
    "[SERVICE] list_contents = 1") and is written to the log, never to the client.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, stage: str = ""):
        super().__init__(status_code=type(self).status_code, detail=message or self.default_message)
        self.message = self.detail
        self.stage = stage
        if stage:
            # Inside an except block the cause's traceback is logged too
            logger.error("%s %s", stage, self.detail, exc_info=sys.exc_info()[0] is not None)


class Unauthorized(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class InvalidParameter(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid parameter"

    def __init__(self, field: str, message: Optional[str] = None, stage: str = ""):
        self.field = field
        super().__init__(message or f"Invalid {field}", stage=stage)


class ValidationFailed(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "validation error"

    def __init__(self, messages: list[str], stage: str = ""):
        self.messages = list(messages)
        super().__init__("validation error: " + "; ".join(self.messages), stage=stage)


class NotFound(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


class StorageError(CatalogError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to persist data"


class UploadError(CatalogError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to upload file"


# Create an instance for convenience
app_exception = AppException()
