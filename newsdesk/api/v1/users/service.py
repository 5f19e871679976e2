import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.api.v1.users.schemas import UpdatePasswordRequest
from newsdesk.core.exceptions import NotFound, StorageError, ValidationFailed
from newsdesk.core.identity import Identity, require
from newsdesk.core.security import get_password_hash, verify_password
from newsdesk.core.validation import Payload, validate_payload
from newsdesk.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).filter(User.email == email))
        return result.scalars().first()

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, user.password):
            return None
        return user

    async def get_profile(self, identity: Identity) -> User:
        require(identity, stage="[SERVICE] get_profile = 1")
        user = await self.db.get(User, identity.user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def update_password(self, identity: Identity, payload: Payload) -> None:
        require(identity, stage="[SERVICE] update_password = 1")
        data = validate_payload(UpdatePasswordRequest, payload, stage="[SERVICE] update_password = 2")
        if data.new_password != data.confirm_password:
            raise ValidationFailed(["confirm_password must be equal to new_password"])
        user = await self.get_profile(identity)
        if not verify_password(data.current_password, user.password):
            raise ValidationFailed(["current_password is not valid"])
        user.password = get_password_hash(data.new_password)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise StorageError("Failed to update password", stage="[SERVICE] update_password = 3")
        logger.info("Password updated for user %s", user.id)
