"""Success envelope shared by every endpoint: {"meta": ..., "data": ..., "pagination": ...}."""
from typing import Any, Optional

from pydantic import BaseModel, Field


class PaginationResponse(BaseModel):
    total_records: int
    page: int
    per_page: int
    total_pages: int


class Meta(BaseModel):
    status: bool = True
    message: str = "Success"


class DefaultResponse(BaseModel):
    meta: Meta = Field(default_factory=Meta)
    data: Any = None
    pagination: Optional[PaginationResponse] = None
