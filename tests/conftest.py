import asyncio
import os
import tempfile
from pathlib import Path

import pytest

# Settings are read at import time, so the environment must be ready first.
_tmp_dir = Path(tempfile.mkdtemp(prefix="newsdesk-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "development"
os.environ["S3_BUCKET_NAME"] = ""
os.environ["UPLOAD_TEMP_DIR"] = str(_tmp_dir / "uploads")

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from newsdesk.core.database import Base
from newsdesk.core.deps import get_db, get_image_uploader
from newsdesk.core.exceptions import UploadError
from newsdesk.core.identity import Identity
from newsdesk.core.security import create_access_token, get_password_hash
from newsdesk.core.uploads import ImageUploader
from newsdesk.main import app
from newsdesk.models.category import Category
from newsdesk.models.content import Content
from newsdesk.models.user import User

# A fresh connection per session lets the same database be used from
# asyncio.run() in tests and from the TestClient's event loop.
_engine = create_async_engine(os.environ["DATABASE_URL"], poolclass=NullPool)

PUBLIC_URL = "https://cdn.example.com"


def run(coro):
    return asyncio.run(coro)


class FakeObjectStorage:
    """In-memory stand-in for ObjectStorage that records calls."""

    def __init__(self, base_url: str = PUBLIC_URL):
        self.base_url = base_url
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_upload = False

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def upload_file(self, key: str, path: str) -> str:
        if self.fail_upload:
            raise UploadError("Failed to upload image: boom")
        with open(path, "rb") as f:
            self.objects[key] = f.read()
        return self.public_url(key)

    def generate_presigned_url(self, key: str) -> str:
        return f"https://signed.example.com/{key}?X-Amz-Expires=3600"

    def delete_object(self, key: str) -> None:
        self.objects.pop(key, None)
        self.deleted.append(key)



class SpySession:
    """Records any attribute access. Stands in for a session that must never be used."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        self.calls.append(name)
        raise AssertionError(f"session.{name} used")

@pytest.fixture()
def session_maker():
    async def _reset():
        async with _engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    run(_reset())
    return async_sessionmaker(_engine, expire_on_commit=False, class_=AsyncSession)


class Seeder:
    def __init__(self, session_maker):
        self.session_maker = session_maker

    def _add(self, obj) -> int:
        async def _insert():
            async with self.session_maker() as session:
                session.add(obj)
                await session.commit()
                return obj.id

        return run(_insert())

    def user(self, name: str = "Admin", email: str = "admin@mail.com", password: str = "admin123") -> int:
        return self._add(User(name=name, email=email, password=get_password_hash(password)))

    def category(self, title: str = "Technology", slug: str = "technology") -> int:
        return self._add(Category(title=title, slug=slug))

    def content(self, category_id: int, created_by_id: int, **fields) -> int:
        values = {
            "title": "Untitled",
            "excerpt": "An excerpt",
            "description": "Body text",
            "image": "",
            "tags": "",
            "status": "PUBLISH",
        }
        values.update(fields)
        return self._add(Content(category_id=category_id, created_by_id=created_by_id, **values))


@pytest.fixture()
def seed(session_maker):
    return Seeder(session_maker)


@pytest.fixture()
def storage():
    return FakeObjectStorage()


@pytest.fixture()
def uploader(storage, tmp_path):
    return ImageUploader(storage, str(tmp_path / "staging"))


@pytest.fixture()
def client(session_maker, uploader):
    async def _get_db_override():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db_override
    app.dependency_overrides[get_image_uploader] = lambda: uploader
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def admin_id(seed):
    return seed.user()


@pytest.fixture()
def category_id(seed):
    return seed.category()


@pytest.fixture()
def identity(admin_id):
    return Identity(user_id=admin_id, email="admin@mail.com")


@pytest.fixture()
def auth_headers(admin_id):
    token, _ = create_access_token(data={"sub": admin_id, "email": "admin@mail.com"})
    return {"Authorization": f"Bearer {token}"}
