import logging
from typing import BinaryIO, List, Optional

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.api.v1.contents.query import QuerySpec
from newsdesk.api.v1.contents.schemas import AuthorRef, CategoryRef, ContentRequest, ContentResponse
from newsdesk.core.exceptions import NotFound, StorageError, UploadError
from newsdesk.core.identity import Identity, require
from newsdesk.core.pagination import page_offset, total_pages
from newsdesk.core.tags import decode_tags, encode_tags
from newsdesk.core.uploads import ImageUploader
from newsdesk.core.validation import Payload, validate_payload
from newsdesk.models.category import Category
from newsdesk.models.content import Content
from newsdesk.models.enums import ContentStatus, OrderType
from newsdesk.models.user import User


def _to_response(content: Content, category: Optional[Category], user: Optional[User]) -> ContentResponse:
    """Map a joined row. A missing category or author becomes a zero-value ref."""
    return ContentResponse(
        id=content.id,
        title=content.title,
        excerpt=content.excerpt,
        description=content.description,
        image=content.image,
        tags=decode_tags(content.tags or ""),
        status=content.status,
        category_id=content.category_id,
        created_by_id=content.created_by_id,
        created_at=content.created_at,
        category=CategoryRef(id=category.id, title=category.title, slug=category.slug) if category else CategoryRef(),
        user=AuthorRef(id=user.id, name=user.name) if user else AuthorRef(),
    )


def _joined():
    return (
        select(Content, Category, User)
        .outerjoin(Category, Content.category_id == Category.id)
        .outerjoin(User, Content.created_by_id == User.id)
    )


def _filters(spec: QuerySpec) -> list:
    """
    WHERE clauses shared by the page query and the count query.

    Status is a substring match, so "PUB" also matches "PUBLISH".
    """
    conditions = []
    if spec.search:
        conditions.append(
            or_(
                Content.title.icontains(spec.search, autoescape=True),
                Content.excerpt.icontains(spec.search, autoescape=True),
                Content.description.icontains(spec.search, autoescape=True),
            )
        )
    if spec.status:
        conditions.append(Content.status.contains(spec.status, autoescape=True))
    if spec.category_id > 0:
        conditions.append(Content.category_id == spec.category_id)
    return conditions


class ContentService:
    def __init__(self, db: AsyncSession, uploader: Optional[ImageUploader] = None):
        self.db = db
        self.uploader = uploader
        self.logger = logging.getLogger(__name__)

    # ---------- reads ----------

    async def list_contents(self, spec: QuerySpec) -> tuple[List[ContentResponse], int, int]:
        """Return (items, total_rows, total_pages) for one page of the filtered listing."""
        conditions = _filters(spec)
        column = getattr(Content, spec.order_by)
        order = column.asc() if spec.order_type == OrderType.asc.value else column.desc()
        try:
            count_result = await self.db.execute(select(func.count(Content.id)).where(*conditions))
            total_rows = count_result.scalar_one() or 0
            result = await self.db.execute(
                _joined()
                .where(*conditions)
                .order_by(order)
                .offset(page_offset(spec.page, spec.limit))
                .limit(spec.limit)
            )
            rows = result.all()
        except SQLAlchemyError:
            raise StorageError("Failed to fetch contents", stage="[SERVICE] list_contents = 1")
        items = [_to_response(content, category, user) for content, category, user in rows]
        return items, total_rows, total_pages(total_rows, spec.limit)

    async def get_content_by_id(self, content_id: int, published_only: bool = False) -> ContentResponse:
        query = _joined().where(Content.id == content_id)
        if published_only:
            query = query.where(Content.status == ContentStatus.publish.value)
        try:
            result = await self.db.execute(query)
            row = result.first()
        except SQLAlchemyError:
            raise StorageError("Failed to fetch content", stage="[SERVICE] get_content_by_id = 1")
        if row is None:
            raise NotFound("Content not found")
        return _to_response(*row)

    # ---------- writes ----------

    async def create_content(self, identity: Identity, payload: Payload) -> Content:
        require(identity, stage="[SERVICE] create_content = 1")
        data = validate_payload(ContentRequest, payload, stage="[SERVICE] create_content = 2")
        return await self._insert(identity, data)

    async def update_content(self, identity: Identity, content_id: int, payload: Payload) -> None:
        """
        Overwrite the editable fields of a content row.

        Any authenticated user may edit any content; the original author and
        created_at are left untouched. An empty image or tag list keeps the
        stored value. Editing an id that does not exist is not an error.
        """
        require(identity, stage="[SERVICE] update_content = 1")
        data = validate_payload(ContentRequest, payload, stage="[SERVICE] update_content = 2")
        await self._update(content_id, data)

    async def delete_content(self, identity: Identity, content_id: int) -> None:
        require(identity, stage="[SERVICE] delete_content = 1")
        try:
            await self.db.execute(delete(Content).where(Content.id == content_id))
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise StorageError("Failed to delete content", stage="[SERVICE] delete_content = 2")

    async def create_content_with_image(self, identity: Identity, payload: Payload, image: BinaryIO) -> Content:
        """
        Upload the image, then insert the content pointing at it.

        If the insert fails the uploaded object is deleted again before the
        StorageError propagates.
        """
        require(identity, stage="[SERVICE] create_content_with_image = 1")
        data = validate_payload(ContentRequest, payload, stage="[SERVICE] create_content_with_image = 2")
        request, url = await self._upload(identity, image)
        try:
            return await self._insert(identity, data.model_copy(update={"image": url}))
        except StorageError:
            await self.uploader.adiscard(request.name)
            raise

    async def update_content_with_image(
        self, identity: Identity, content_id: int, payload: Payload, image: BinaryIO
    ) -> None:
        require(identity, stage="[SERVICE] update_content_with_image = 1")
        data = validate_payload(ContentRequest, payload, stage="[SERVICE] update_content_with_image = 2")
        request, url = await self._upload(identity, image)
        try:
            await self._update(content_id, data.model_copy(update={"image": url}))
        except StorageError:
            await self.uploader.adiscard(request.name)
            raise

    async def _upload(self, identity: Identity, image: BinaryIO):
        if self.uploader is None:
            raise UploadError("Image upload is not configured.", stage="[SERVICE] upload = 1")
        return await self.uploader.aupload(identity, image)

    async def _insert(self, identity: Identity, data: ContentRequest) -> Content:
        content = Content(
            title=data.title,
            excerpt=data.excerpt,
            description=data.description,
            image=data.image,
            tags=encode_tags(data.tags),
            status=data.status,
            category_id=data.category_id,
            created_by_id=identity.user_id,
        )
        self.db.add(content)
        try:
            await self.db.commit()
            await self.db.refresh(content)
        except SQLAlchemyError:
            await self.db.rollback()
            raise StorageError("Failed to create content", stage="[SERVICE] insert_content = 1")
        self.logger.info("Content %s created by user %s", content.id, identity.user_id)
        return content

    async def _update(self, content_id: int, data: ContentRequest) -> None:
        values = {
            "title": data.title,
            "excerpt": data.excerpt,
            "description": data.description,
            "status": data.status,
            "category_id": data.category_id,
        }
        # An empty image or tag list keeps what is stored
        if data.image:
            values["image"] = data.image
        if data.tags:
            values["tags"] = encode_tags(data.tags)
        try:
            await self.db.execute(update(Content).where(Content.id == content_id).values(**values))
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise StorageError("Failed to update content", stage="[SERVICE] update_content = 3")
