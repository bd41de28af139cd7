"""Shared fixtures: in-memory database, upload root, API client and users."""

import io

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool
from starlette.datastructures import Headers, UploadFile

from app.db import Database
from app.main import create_app
from app.models import Base, CarouselItem, User, UserRole
from app.services.auth import auth_service
from app.services.image_storage import ImageStorage

ADMIN_EMAIL = "admin@labtim.org"
MEMBER_EMAIL = "member@labtim.org"
PASSWORD = "correct-horse-battery"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
async def database():
    db = Database(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.connect()
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.close()


@pytest.fixture
def storage(tmp_path):
    return ImageStorage(root=tmp_path / "uploads", max_bytes=1024)


@pytest.fixture
def app(database, storage):
    return create_app(database=database, image_storage=storage)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def _create_user(database: Database, email: str, role: UserRole, is_active: bool = True) -> User:
    async with database.session() as db:
        user = User(
            email=email,
            hashed_password=auth_service.hash_password(PASSWORD),
            full_name=email.split("@")[0].title(),
            role=role,
            is_active=is_active,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user


@pytest.fixture
async def admin_user(database):
    return await _create_user(database, ADMIN_EMAIL, UserRole.ADMIN)


@pytest.fixture
async def member_user(database):
    return await _create_user(database, MEMBER_EMAIL, UserRole.MEMBER)


def bearer(user: User) -> dict[str, str]:
    token = auth_service.create_access_token(user.id, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture
def member_headers(member_user):
    return bearer(member_user)


@pytest.fixture
def make_item(database):
    """Insert a carousel item directly, bypassing the API."""

    async def _make(order: int, title: str | None = None, image_url: str | None = None) -> CarouselItem:
        async with database.session() as db:
            item = CarouselItem(
                order=order,
                title=title or f"Slide {order}",
                image_url=image_url,
            )
            db.add(item)
            await db.commit()
            await db.refresh(item)
            return item

    return _make


def make_upload(filename: str = "slide.png", content: bytes = PNG_BYTES, content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def stored_files(storage: ImageStorage) -> list[str]:
    if not storage.root.exists():
        return []
    return sorted(
        str(path.relative_to(storage.root)).replace("\\", "/")
        for path in storage.root.rglob("*")
        if path.is_file()
    )
