"""Persistence and storage contracts used by the services.

Each port is a structural ``Protocol``: the SQLAlchemy repositories satisfy
them without inheriting from them, and tests can pass any object with the
same methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence
from uuid import UUID

from cycling_photos.domain.classifications import ClassificationBundle
from cycling_photos.domain.events import Event
from cycling_photos.domain.photos import Photo
from cycling_photos.schemas.common import Pagination
from cycling_photos.schemas.event import EventDetail, EventListItem
from cycling_photos.schemas.photo import PhotoDetail, PhotoListItem, PhotoSearchFilters


class EventReadRepository(Protocol):
	async def find_by_id(self, event_id: UUID) -> Event | None: ...

	async def get_events_list(self, pagination: Pagination) -> List[EventListItem]: ...

	async def get_event_detail(self, event_id: UUID) -> EventDetail | None: ...


class EventWriteRepository(Protocol):
	async def save(self, event: Event) -> Event: ...


class PhotoReadRepository(Protocol):
	async def find_by_id(self, photo_id: UUID) -> Photo | None: ...

	async def get_photos_list(
		self, event_id: UUID, pagination: Pagination
	) -> List[PhotoListItem]: ...

	async def get_photo_detail(self, photo_id: UUID) -> PhotoDetail | None: ...

	async def search_photos(
		self, filters: PhotoSearchFilters, pagination: Pagination
	) -> List[PhotoListItem]: ...


class PhotoWriteRepository(Protocol):
	async def save(self, photo: Photo) -> Photo: ...

	async def delete(self, photo_id: UUID) -> None: ...


class ClassificationWriteRepository(Protocol):
	async def save_classification(
		self, photo: Photo, bundles: Sequence[ClassificationBundle]
	) -> None:
		"""Persists the photo's new state and every bundle as one atomic unit."""
		...


@dataclass(frozen=True)
class UploadResult:
	key: str
	url: str


class StorageAdapter(Protocol):
	async def upload(self, data: bytes, key: str, content_type: str) -> UploadResult: ...

	def get_public_url(self, key: str) -> str: ...

	async def delete(self, key: str) -> None: ...
