"""Shared test fixtures."""

import struct
import uuid
import zlib
from datetime import date, datetime, timedelta
from io import BytesIO

import httpx
import pytest
from PIL import Image
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from cycling_photos.api.deps import get_db_session, get_storage
from cycling_photos.core.config import Settings
from cycling_photos.core.context import RequestContext
from cycling_photos.db.base import Base
from cycling_photos.db.session import enable_sqlite_foreign_keys
from cycling_photos.domain.events import Event
from cycling_photos.domain.photos import Photo, PhotoStatus
from cycling_photos.main import create_app
from cycling_photos.repositories import mappers
from cycling_photos.services.storage import LocalStorageAdapter

PUBLIC_BASE_URL = "http://testserver/static"


@pytest.fixture
def anyio_backend():
	return "asyncio"


@pytest.fixture
async def engine(tmp_path):
	"""File-backed SQLite database with foreign keys enforced and schema created."""
	db_engine = create_async_engine(f"sqlite+aiosqlite:///{(tmp_path / 'test.db').as_posix()}")
	enable_sqlite_foreign_keys(db_engine)
	async with db_engine.begin() as conn:
		await conn.run_sync(Base.metadata.create_all)
	yield db_engine
	await db_engine.dispose()


@pytest.fixture
def session_maker(engine):
	return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def session(session_maker):
	async with session_maker() as db:
		yield db


@pytest.fixture
def storage_dir(tmp_path):
	return tmp_path / "storage"


@pytest.fixture
def storage(storage_dir):
	return LocalStorageAdapter(storage_dir, PUBLIC_BASE_URL)


@pytest.fixture
def settings(storage_dir):
	return Settings(
		ENVIRONMENT="test",
		STORAGE_BACKEND="local",
		STORAGE_LOCAL_DIR=str(storage_dir),
		STORAGE_PUBLIC_BASE_URL=PUBLIC_BASE_URL,
		MAX_UPLOAD_FILES=3,
		MAX_UPLOAD_FILE_SIZE=64 * 1024,
	)


@pytest.fixture
def app(settings, session_maker, storage):
	application = create_app(settings)

	async def override_db_session():
		async with session_maker() as db:
			yield db

	application.dependency_overrides[get_db_session] = override_db_session
	application.dependency_overrides[get_storage] = lambda: storage
	return application


@pytest.fixture
async def client(app):
	transport = httpx.ASGITransport(app=app)
	async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
		yield http


def make_context(request_id: str = "test-request") -> RequestContext:
	return RequestContext(request_id=request_id)


def future_date(days: int = 30) -> date:
	return date.today() + timedelta(days=days)


def make_event(name: str = "Gran Fondo Girona", days_ahead: int = 30, location: str | None = "Girona") -> Event:
	return Event.create(name=name, date=future_date(days_ahead), location=location)


def make_photo(
	event_id: uuid.UUID,
	filename: str = "IMG_0001.jpg",
	uploaded_at: datetime | None = None,
	captured_at: datetime | None = None,
	status: PhotoStatus = PhotoStatus.PENDING,
) -> Photo:
	"""Helper to create a Photo with an explicit upload time and status."""
	photo = Photo.create(
		event_id=event_id,
		filename=filename,
		storage_key=f"events/{event_id}/photos/{uuid.uuid4()}.jpg",
		file_size=2048,
		mime_type="image/jpeg",
		captured_at=captured_at,
	)
	if uploaded_at is not None:
		photo.uploaded_at = uploaded_at
	photo.status = status
	return photo


async def add_event(session, event: Event | None = None) -> Event:
	event = event or make_event()
	session.add(mappers.event_to_model(event))
	await session.commit()
	return event


async def add_photos(session, *photos: Photo) -> None:
	session.add_all([mappers.photo_to_model(p) for p in photos])
	await session.commit()


def jpeg_bytes(exif_datetime: str | None = None, size=(8, 8)) -> bytes:
	buffer = BytesIO()
	image = Image.new("RGB", size, color=(200, 30, 30))
	if exif_datetime is None:
		image.save(buffer, "JPEG")
	else:
		exif = Image.Exif()
		exif[306] = exif_datetime
		image.save(buffer, "JPEG", exif=exif)
	return buffer.getvalue()


def png_header_bytes(width: int, height: int) -> bytes:
	"""A PNG holding only a header that declares ``width`` x ``height`` pixels."""

	def chunk(kind: bytes, payload: bytes) -> bytes:
		return (
			struct.pack(">I", len(payload))
			+ kind
			+ payload
			+ struct.pack(">I", zlib.crc32(kind + payload) & 0xFFFFFFFF)
		)

	header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
	return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IEND", b"")
