"""
Startup utilities for the application.
"""
import logging
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError, ProgrammingError

from newsdesk.core.config import settings
from newsdesk.core.database import get_async_session_maker_instance
from newsdesk.core.security import get_password_hash
from newsdesk.models.user import User

logger = logging.getLogger(__name__)


async def ensure_default_admin():
    """
    Seed the default admin user when the users table is empty.
    Errors are logged and never stop the application from starting.
    """
    async_session_maker = get_async_session_maker_instance()
    async with async_session_maker() as session:
        try:
            result = await session.execute(select(func.count(User.id)))
            user_count = result.scalar()
            if user_count:
                logger.info("Found %s user(s) in database. Skipping default admin creation.", user_count)
                return

            logger.info("No user found in database. Creating default admin...")
            session.add(
                User(
                    name=settings.DEFAULT_ADMIN_NAME,
                    email=settings.DEFAULT_ADMIN_EMAIL,
                    password=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
                )
            )
            await session.commit()
            logger.info("Default admin created successfully with email: %s", settings.DEFAULT_ADMIN_EMAIL)
        except (OperationalError, ProgrammingError) as e:
            # Usually the users table is missing because migrations were not run
            logger.warning(
                "Database error during admin check/creation. Error: %s. "
                "Please run 'alembic upgrade head' and ensure the database is accessible.",
                e,
            )
