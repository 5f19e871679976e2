from datetime import datetime

from sqlalchemy import Column, DateTime, String

from newsdesk.core.database import Base, BigInt


class User(Base):
    __tablename__ = "users"

    id = Column(BigInt, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
