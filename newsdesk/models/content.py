from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from newsdesk.core.database import Base, BigInt
from newsdesk.models.enums import ContentStatus


class Content(Base):
    __tablename__ = "contents"

    id = Column(BigInt, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, index=True)
    excerpt = Column(String(500), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    image = Column(Text, nullable=False, default="")
    # Comma-joined, see newsdesk.core.tags
    tags = Column(Text, nullable=False, default="")
    status = Column(String(50), nullable=False, default=ContentStatus.publish.value, index=True)
    category_id = Column(BigInt, ForeignKey("categories.id"), nullable=False, index=True)
    created_by_id = Column(BigInt, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
