import logging
import uuid
from dataclasses import dataclass
from typing import List, Sequence
from uuid import UUID

from cycling_photos.core.context import RequestContext
from cycling_photos.core.errors import AppError
from cycling_photos.domain.photos import Photo
from cycling_photos.domain.ports import (
	EventReadRepository,
	PhotoReadRepository,
	PhotoWriteRepository,
	StorageAdapter,
)
from cycling_photos.schemas.common import EntityId, Pagination
from cycling_photos.schemas.photo import PhotoDetail, PhotoListItem, PhotoSearchFilters
from cycling_photos.services.exif import read_captured_at

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "jpg"


@dataclass(frozen=True)
class UploadedFile:
	filename: str
	content_type: str
	data: bytes

	@property
	def size(self) -> int:
		return len(self.data)


def storage_key_for(event_id: UUID, filename: str) -> str:
	_, dot, ext = filename.rpartition(".")
	extension = ext.lower() if dot and ext else DEFAULT_EXTENSION
	return f"events/{event_id}/photos/{uuid.uuid4()}.{extension}"


class PhotoService:
	def __init__(
		self,
		event_repo: EventReadRepository,
		read_repo: PhotoReadRepository,
		write_repo: PhotoWriteRepository,
		storage: StorageAdapter,
		ctx: RequestContext,
	) -> None:
		self.event_repo = event_repo
		self.read_repo = read_repo
		self.write_repo = write_repo
		self.storage = storage
		self.ctx = ctx

	async def upload_photos(self, event_id: UUID, files: Sequence[UploadedFile]) -> List[EntityId]:
		event = await self.event_repo.find_by_id(event_id)
		if event is None:
			raise AppError.not_found("Event", event_id)

		# Every file is validated before the first byte reaches storage.
		pending = [
			(
				file,
				Photo.create(
					event_id=event_id,
					filename=file.filename,
					storage_key=storage_key_for(event_id, file.filename),
					file_size=file.size,
					mime_type=file.content_type,
					captured_at=read_captured_at(file.data),
				),
			)
			for file in files
		]

		results: List[EntityId] = []
		for file, photo in pending:
			await self.storage.upload(file.data, photo.storage_key, file.content_type)
			try:
				saved = await self.write_repo.save(photo)
			except Exception:
				await self._discard_object(photo.storage_key)
				raise
			results.append(EntityId(id=saved.id))

		logger.info(
			"Uploaded %d photo(s) to event %s [request_id=%s]",
			len(results),
			event_id,
			self.ctx.request_id,
		)
		return results

	async def _discard_object(self, key: str) -> None:
		try:
			await self.storage.delete(key)
		except AppError:
			logger.warning(
				"Could not remove orphaned object %s [request_id=%s]",
				key,
				self.ctx.request_id,
				exc_info=True,
			)

	async def list_photos(self, event_id: UUID, pagination: Pagination) -> List[PhotoListItem]:
		return await self.read_repo.get_photos_list(event_id, pagination)

	async def search_photos(
		self, filters: PhotoSearchFilters, pagination: Pagination
	) -> List[PhotoListItem]:
		return await self.read_repo.search_photos(filters, pagination)

	async def get_photo(self, photo_id: UUID) -> PhotoDetail:
		photo = await self.read_repo.get_photo_detail(photo_id)
		if photo is None:
			raise AppError.not_found("Photo", photo_id)
		return photo.model_copy(update={"url": self.storage.get_public_url(photo.storage_key)})

	async def delete_photo(self, photo_id: UUID) -> EntityId:
		photo = await self.read_repo.find_by_id(photo_id)
		if photo is None:
			raise AppError.not_found("Photo", photo_id)

		await self.write_repo.delete(photo.id)
		await self.storage.delete(photo.storage_key)
		logger.info("Photo %s deleted [request_id=%s]", photo.id, self.ctx.request_id)
		return EntityId(id=photo.id)
