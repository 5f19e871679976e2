from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.api.v1.contents.query import QuerySpec, normalize_query
from newsdesk.api.v1.contents.schemas import UploadImageResponse
from newsdesk.api.v1.responses import DefaultResponse, Meta, PaginationResponse
from newsdesk.api.v1.contents.service import ContentService
from newsdesk.core.deps import get_db, get_identity, get_image_uploader
from newsdesk.core.exceptions import InvalidParameter, UploadError
from newsdesk.core.identity import Identity, require
from newsdesk.core.uploads import ImageUploader, check_image

router = APIRouter()
public_router = APIRouter()


async def _listing(db: AsyncSession, spec: QuerySpec) -> DefaultResponse:
    service = ContentService(db)
    items, total_rows, pages = await service.list_contents(spec)
    return DefaultResponse(
        data=items,
        pagination=PaginationResponse(
            total_records=total_rows,
            page=spec.page,
            per_page=spec.limit,
            total_pages=pages,
        ),
    )


def _configured(uploader: Optional[ImageUploader]) -> ImageUploader:
    if uploader is None:
        raise UploadError("Image upload is not configured. Set S3_BUCKET_NAME and storage credentials.")
    return uploader


def _read_image(image: Optional[UploadFile]) -> UploadFile:
    if image is None or not image.filename:
        raise InvalidParameter("image", "image file is required")
    check_image(image.content_type, image.size)
    return image


def _form_payload(title, excerpt, description, tags, content_status, category_id) -> dict:
    return {
        "title": title,
        "excerpt": excerpt,
        "description": description,
        "tags": tags,
        "status": content_status,
        "category_id": category_id or 0,
    }


# ============ Admin (bearer token) ============

@router.get(
    "/",
    response_model=DefaultResponse,
    summary="List content",
    description="Paginated content listing. Query: page, limit, orderBy, orderType, search, status, categoryID.",
)
async def get_contents(
    request: Request,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    require(identity, stage="[HANDLER] get_contents = 1")
    spec = normalize_query(request.query_params, public=False)
    return await _listing(db, spec)


@router.post(
    "/upload-image",
    response_model=DefaultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload content image",
    description="Upload an image (multipart field `image`) to object storage and return its public URL.",
)
async def upload_image(
    identity: Identity = Depends(get_identity),
    image: Optional[UploadFile] = File(None, description="Image file (JPEG, PNG, WebP, GIF)"),
    uploader: Optional[ImageUploader] = Depends(get_image_uploader),
):
    require(identity, stage="[HANDLER] upload_image = 1")
    uploader = _configured(uploader)
    image = _read_image(image)
    _, url = await uploader.aupload(identity, image.file)
    return DefaultResponse(data=UploadImageResponse(url_image=url))


@router.post(
    "/upload-url",
    response_model=DefaultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Presigned upload URL",
    description="Issue a time-limited URL the client can PUT an image to directly.",
)
async def create_upload_url(
    identity: Identity = Depends(get_identity),
    uploader: Optional[ImageUploader] = Depends(get_image_uploader),
):
    require(identity, stage="[HANDLER] create_upload_url = 1")
    uploader = _configured(uploader)
    presigned = uploader.presign(identity)
    return DefaultResponse(data=presigned)


@router.post(
    "/with-image",
    response_model=DefaultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create content with image",
    description="Multipart form: content fields plus `image`. The image is uploaded first; it is removed again if saving the content fails.",
)
async def create_content_with_image(
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    uploader: Optional[ImageUploader] = Depends(get_image_uploader),
    title: str = Form(""),
    excerpt: str = Form(""),
    description: str = Form(""),
    tags: str = Form(""),
    content_status: str = Form("", alias="status"),
    category_id: str = Form(""),
    image: Optional[UploadFile] = File(None),
):
    require(identity, stage="[HANDLER] create_content_with_image = 1")
    uploader = _configured(uploader)
    image = _read_image(image)
    payload = _form_payload(title, excerpt, description, tags, content_status, category_id)
    service = ContentService(db, uploader)
    await service.create_content_with_image(identity, payload, image.file)
    return DefaultResponse(meta=Meta(message="Content created successfully"))


@router.get(
    "/{content_id}",
    response_model=DefaultResponse,
    summary="Get content by ID",
)
async def get_content(
    content_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    require(identity, stage="[HANDLER] get_content = 1")
    service = ContentService(db)
    content = await service.get_content_by_id(content_id)
    return DefaultResponse(data=content)


@router.post(
    "/",
    response_model=DefaultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create content",
    description="JSON body: title, excerpt, description, image, tags, status, category_id.",
)
async def create_content(
    request: Request,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    service = ContentService(db)
    await service.create_content(identity, await request.body())
    return DefaultResponse(meta=Meta(message="Content created successfully"))


@router.put(
    "/{content_id}",
    response_model=DefaultResponse,
    summary="Update content",
)
async def update_content(
    content_id: int,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    service = ContentService(db)
    await service.update_content(identity, content_id, await request.body())
    return DefaultResponse(meta=Meta(message="Content updated successfully"))


@router.put(
    "/{content_id}/with-image",
    response_model=DefaultResponse,
    summary="Update content with new image",
    description="Multipart form like POST /with-image. The new image replaces the stored one; it is removed again if saving fails.",
)
async def update_content_with_image(
    content_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    uploader: Optional[ImageUploader] = Depends(get_image_uploader),
    title: str = Form(""),
    excerpt: str = Form(""),
    description: str = Form(""),
    tags: str = Form(""),
    content_status: str = Form("", alias="status"),
    category_id: str = Form(""),
    image: Optional[UploadFile] = File(None),
):
    require(identity, stage="[HANDLER] update_content_with_image = 1")
    uploader = _configured(uploader)
    image = _read_image(image)
    payload = _form_payload(title, excerpt, description, tags, content_status, category_id)
    service = ContentService(db, uploader)
    await service.update_content_with_image(identity, content_id, payload, image.file)
    return DefaultResponse(meta=Meta(message="Content updated successfully"))


@router.delete(
    "/{content_id}",
    response_model=DefaultResponse,
    summary="Delete content",
)
async def delete_content(
    content_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    service = ContentService(db)
    await service.delete_content(identity, content_id)
    return DefaultResponse()


# ============ Public (readers) ============

@public_router.get(
    "/",
    response_model=DefaultResponse,
    summary="List published content",
    description="Published content only. Query: page, limit (default 6), orderBy, orderType, search, categoryID.",
)
async def get_published_contents(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    spec = normalize_query(request.query_params, public=True)
    return await _listing(db, spec)


@public_router.get(
    "/{content_id}",
    response_model=DefaultResponse,
    summary="Get published content detail",
)
async def get_content_detail(
    content_id: int,
    db: AsyncSession = Depends(get_db),
):
    service = ContentService(db)
    content = await service.get_content_by_id(content_id, published_only=True)
    return DefaultResponse(data=content)
