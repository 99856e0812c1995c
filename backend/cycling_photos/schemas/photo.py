from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import Field

from cycling_photos.domain.photos import PhotoStatus
from cycling_photos.schemas.classification import DetectedCyclistRead
from cycling_photos.schemas.common import CamelModel


class PhotoListItem(CamelModel):
	id: UUID
	event_id: UUID
	filename: str
	storage_key: str
	status: str
	width: int | None = None
	height: int | None = None
	uploaded_at: datetime


class PhotoDetail(CamelModel):
	id: UUID
	event_id: UUID
	filename: str
	storage_key: str
	url: str | None = None
	file_size: int
	mime_type: str
	width: int | None = None
	height: int | None = None
	status: str
	unclassified_reason: str | None = None
	captured_at: datetime | None = None
	uploaded_at: datetime
	processed_at: datetime | None = None
	detected_cyclists: List[DetectedCyclistRead] = Field(default_factory=list)


class PhotoSearchFilters(CamelModel):
	event_id: UUID | None = None
	status: PhotoStatus | None = None
	plate_number: int | None = Field(default=None, ge=1, le=999)
	from_date: datetime | None = None
	to_date: datetime | None = None
