from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String

from newsdesk.core.database import Base, BigInt


class Category(Base):
    __tablename__ = "categories"

    id = Column(BigInt, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    created_by_id = Column(BigInt, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
