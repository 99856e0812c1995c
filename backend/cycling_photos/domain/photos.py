from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from cycling_photos.core.errors import AppError
from cycling_photos.domain.audit import utcnow

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")


class PhotoStatus(str, Enum):
	PENDING = "pending"
	DETECTING = "detecting"
	ANALYZING = "analyzing"
	COMPLETED = "completed"
	FAILED = "failed"


class UnclassifiedReason(str, Enum):
	NO_CYCLIST = "no_cyclist"
	OCR_FAILED = "ocr_failed"
	LOW_CONFIDENCE = "low_confidence"
	PROCESSING_ERROR = "processing_error"


@dataclass
class Photo:
	id: uuid.UUID
	event_id: uuid.UUID
	filename: str
	storage_key: str
	file_size: int
	mime_type: str
	width: int | None
	height: int | None
	status: PhotoStatus
	unclassified_reason: UnclassifiedReason | None
	captured_at: datetime | None
	uploaded_at: datetime
	processed_at: datetime | None

	@classmethod
	def create(
		cls,
		event_id: uuid.UUID,
		filename: str,
		storage_key: str,
		file_size: int,
		mime_type: str,
		width: int | None = None,
		height: int | None = None,
		captured_at: datetime | None = None,
	) -> Photo:
		if not filename or not filename.strip():
			raise AppError.business_rule("photo.filename_empty")
		if mime_type not in ALLOWED_MIME_TYPES:
			raise AppError.business_rule("photo.invalid_mime_type")
		if file_size <= 0:
			raise AppError.business_rule("photo.invalid_file_size")

		return cls(
			id=uuid.uuid4(),
			event_id=event_id,
			filename=filename,
			storage_key=storage_key,
			file_size=file_size,
			mime_type=mime_type,
			width=width,
			height=height,
			status=PhotoStatus.PENDING,
			unclassified_reason=None,
			captured_at=captured_at,
			uploaded_at=utcnow(),
			processed_at=None,
		)

	def mark_as_completed(self) -> None:
		self.status = PhotoStatus.COMPLETED
		self.unclassified_reason = None
		self.processed_at = utcnow()

	def mark_as_failed(self, reason: UnclassifiedReason) -> None:
		self.status = PhotoStatus.FAILED
		self.unclassified_reason = reason
		self.processed_at = utcnow()
