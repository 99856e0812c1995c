from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cycling_photos.core.config import get_settings
from cycling_photos.core.context import RequestContext
from cycling_photos.db.session import get_db
from cycling_photos.domain.ports import StorageAdapter
from cycling_photos.repositories.classification_repo import SqlAlchemyClassificationWriteRepository
from cycling_photos.repositories.event_repo import (
	SqlAlchemyEventReadRepository,
	SqlAlchemyEventWriteRepository,
)
from cycling_photos.repositories.photo_repo import (
	SqlAlchemyPhotoReadRepository,
	SqlAlchemyPhotoWriteRepository,
)
from cycling_photos.schemas.common import Pagination
from cycling_photos.services.classification_service import ClassificationService
from cycling_photos.services.event_service import EventService
from cycling_photos.services.photo_service import PhotoService
from cycling_photos.services.storage import get_storage_adapter


def get_db_session(db: AsyncSession = Depends(get_db)) -> AsyncSession:
	return db


def get_storage() -> StorageAdapter:
	return get_storage_adapter()


def get_request_context(request: Request) -> RequestContext:
	accept_language = request.headers.get("accept-language", "")
	locale = accept_language.split(",")[0].split(";")[0].strip() or "en"
	return RequestContext(request_id=request.state.request_id, locale=locale)


def get_pagination(
	page: int = Query(1, ge=1),
	limit: int | None = Query(None, ge=1, le=100),
) -> Pagination:
	return Pagination(page=page, limit=limit or get_settings().DEFAULT_PAGE_SIZE)


def get_event_service(
	db: AsyncSession = Depends(get_db_session),
	ctx: RequestContext = Depends(get_request_context),
) -> EventService:
	return EventService(
		SqlAlchemyEventReadRepository(db),
		SqlAlchemyEventWriteRepository(db),
		ctx,
	)


def get_photo_service(
	db: AsyncSession = Depends(get_db_session),
	storage: StorageAdapter = Depends(get_storage),
	ctx: RequestContext = Depends(get_request_context),
) -> PhotoService:
	return PhotoService(
		SqlAlchemyEventReadRepository(db),
		SqlAlchemyPhotoReadRepository(db),
		SqlAlchemyPhotoWriteRepository(db),
		storage,
		ctx,
	)


def get_classification_service(
	db: AsyncSession = Depends(get_db_session),
	ctx: RequestContext = Depends(get_request_context),
) -> ClassificationService:
	return ClassificationService(
		SqlAlchemyPhotoReadRepository(db),
		SqlAlchemyClassificationWriteRepository(db),
		ctx,
	)
