from datetime import datetime, timezone
from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cycling_photos.core.errors import AppError
from cycling_photos.domain.photos import Photo
from cycling_photos.models.classification import DetectedCyclistModel, PlateNumberModel
from cycling_photos.models.event import EventModel
from cycling_photos.models.photo import PhotoModel
from cycling_photos.repositories import mappers
from cycling_photos.schemas.common import Pagination
from cycling_photos.schemas.photo import PhotoDetail, PhotoListItem, PhotoSearchFilters


def _utc(value: datetime) -> datetime:
	if value.tzinfo is None:
		return value.replace(tzinfo=timezone.utc)
	return value.astimezone(timezone.utc)


# SQLite names the columns, PostgreSQL names the constraint.
_DUPLICATE_FILENAME_MARKERS = ("unique_event_filename", "photos.event_id, photos.filename")


def _is_duplicate_filename(exc: IntegrityError) -> bool:
	message = str(exc.orig)
	return any(marker in message for marker in _DUPLICATE_FILENAME_MARKERS)


def _photos_of_active_events():
	return (
		select(PhotoModel)
		.join(EventModel, EventModel.id == PhotoModel.event_id)
		.where(EventModel.deleted_at.is_(None))
	)


class SqlAlchemyPhotoReadRepository:
	def __init__(self, session: AsyncSession) -> None:
		self.session = session

	async def find_by_id(self, photo_id: UUID) -> Photo | None:
		# Photos are hard-deleted, so there is no deleted_at filter here.
		model = await self.session.get(PhotoModel, photo_id)
		return mappers.photo_to_entity(model) if model else None

	async def get_photos_list(self, event_id: UUID, pagination: Pagination) -> List[PhotoListItem]:
		stmt = (
			_photos_of_active_events()
			.where(PhotoModel.event_id == event_id)
			.order_by(PhotoModel.uploaded_at.desc(), PhotoModel.id)
			.offset(pagination.skip)
			.limit(pagination.take)
		)
		result = await self.session.execute(stmt)
		return [mappers.photo_to_list_item(model) for model in result.scalars().all()]

	async def get_photo_detail(self, photo_id: UUID) -> PhotoDetail | None:
		cyclists = selectinload(PhotoModel.detected_cyclists)
		stmt = (
			select(PhotoModel)
			.where(PhotoModel.id == photo_id)
			.options(
				cyclists.selectinload(DetectedCyclistModel.plate_number),
				cyclists.selectinload(DetectedCyclistModel.equipment_colors),
			)
			.execution_options(populate_existing=True)
		)
		result = await self.session.execute(stmt)
		model = result.scalar_one_or_none()
		return mappers.photo_to_detail(model) if model else None

	async def search_photos(
		self, filters: PhotoSearchFilters, pagination: Pagination
	) -> List[PhotoListItem]:
		stmt = _photos_of_active_events()

		if filters.event_id is not None:
			stmt = stmt.where(PhotoModel.event_id == filters.event_id)
		if filters.status is not None:
			stmt = stmt.where(PhotoModel.status == filters.status)
		if filters.plate_number is not None:
			has_plate = (
				select(DetectedCyclistModel.id)
				.join(PlateNumberModel, PlateNumberModel.detected_cyclist_id == DetectedCyclistModel.id)
				.where(
					DetectedCyclistModel.photo_id == PhotoModel.id,
					PlateNumberModel.number == filters.plate_number,
				)
				.exists()
			)
			stmt = stmt.where(has_plate)

		if filters.from_date is not None:
			stmt = stmt.where(PhotoModel.uploaded_at >= _utc(filters.from_date))
		if filters.to_date is not None:
			stmt = stmt.where(PhotoModel.uploaded_at <= _utc(filters.to_date))

		stmt = (
			stmt.order_by(PhotoModel.uploaded_at.desc(), PhotoModel.id)
			.offset(pagination.skip)
			.limit(pagination.take)
		)
		result = await self.session.execute(stmt)
		return [mappers.photo_to_list_item(model) for model in result.scalars().all()]


class SqlAlchemyPhotoWriteRepository:
	def __init__(self, session: AsyncSession) -> None:
		self.session = session

	async def save(self, photo: Photo) -> Photo:
		try:
			model = await self.session.merge(mappers.photo_to_model(photo))
			await self.session.commit()
		except IntegrityError as exc:
			await self.session.rollback()
			if _is_duplicate_filename(exc):
				raise AppError.business_rule("photo.duplicate_filename") from exc
			raise
		except Exception:
			await self.session.rollback()
			raise
		return mappers.photo_to_entity(model)

	async def delete(self, photo_id: UUID) -> None:
		try:
			await self.session.execute(delete(PhotoModel).where(PhotoModel.id == photo_id))
			await self.session.commit()
		except Exception:
			await self.session.rollback()
			raise
