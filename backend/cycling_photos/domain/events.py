from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from cycling_photos.core.errors import AppError
from cycling_photos.domain.audit import AuditFields, utcnow

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 200

_UNSET: Any = object()


class EventStatus(str, Enum):
	DRAFT = "draft"
	UPLOADING = "uploading"
	PROCESSING = "processing"
	COMPLETED = "completed"


def _validate_name(name: str) -> None:
	if len(name) < NAME_MIN_LENGTH or len(name) > NAME_MAX_LENGTH:
		raise AppError.business_rule("event.name_invalid_length")


def _validate_date(value: date) -> None:
	if value < utcnow().date():
		raise AppError.business_rule("event.date_in_past")


@dataclass
class Event:
	id: uuid.UUID
	name: str
	date: date
	location: str | None
	status: EventStatus
	total_photos: int
	processed_photos: int
	audit: AuditFields = field(default_factory=AuditFields.initialize)

	@classmethod
	def create(cls, name: str, date: date, location: str | None = None) -> Event:
		"""New event in ``draft`` state.

		Raises the business rules ``event.name_invalid_length`` and
		``event.date_in_past``.
		"""
		_validate_name(name)
		_validate_date(date)
		return cls(
			id=uuid.uuid4(),
			name=name,
			date=date,
			location=location,
			status=EventStatus.DRAFT,
			total_photos=0,
			processed_photos=0,
			audit=AuditFields.initialize(),
		)

	def update(
		self,
		name: str = _UNSET,
		date: date = _UNSET,
		location: str | None = _UNSET,
	) -> None:
		"""Applies only the fields that were passed; ``location=None`` clears it."""
		if name is not _UNSET:
			_validate_name(name)
			self.name = name
		if date is not _UNSET:
			_validate_date(date)
			self.date = date
		if location is not _UNSET:
			self.location = location
		self.audit.mark_updated()

	def soft_delete(self) -> None:
		self.audit.mark_deleted()

	@property
	def is_deleted(self) -> bool:
		return self.audit.is_deleted
