from typing import Any, List, Optional
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from newsdesk.core.tags import decode_tags


class ContentRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, description="Content title")
    excerpt: str = Field(..., min_length=1, max_length=500, description="Short summary shown in listings")
    description: str = Field(..., min_length=1, description="Full article body")
    image: str = Field("", description="Image URL, usually from the upload-image endpoint")
    tags: List[str] = Field(default_factory=list, description="Tags; a comma-separated string is also accepted")
    status: str = Field(..., min_length=1, max_length=50, description="PUBLISH or DRAFT")
    category_id: int = Field(..., gt=0, description="Category ID")

    @field_validator("tags", mode="before")
    @classmethod
    def split_tag_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return decode_tags(value) if value else []
        return value


class CategoryRef(BaseModel):
    id: int = 0
    title: str = ""
    slug: str = ""


class AuthorRef(BaseModel):
    id: int = 0
    name: str = ""


class ContentResponse(BaseModel):
    id: int
    title: str
    excerpt: str
    description: str
    image: str
    tags: List[str]
    status: str
    category_id: int
    created_by_id: int
    created_at: Optional[datetime] = None
    category: CategoryRef
    user: AuthorRef


class UploadImageResponse(BaseModel):
    url_image: str
