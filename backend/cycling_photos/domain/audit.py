from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


def utcnow() -> datetime:
	return datetime.now(timezone.utc)


@dataclass
class AuditFields:
	"""Creation, update and soft-delete timestamps shared by entities that need them."""

	created_at: datetime
	updated_at: datetime
	deleted_at: datetime | None = None

	@classmethod
	def initialize(cls) -> AuditFields:
		now = utcnow()
		return cls(created_at=now, updated_at=now, deleted_at=None)

	@property
	def is_deleted(self) -> bool:
		return self.deleted_at is not None

	def mark_updated(self) -> None:
		self.updated_at = utcnow()

	def mark_deleted(self) -> None:
		now = utcnow()
		self.deleted_at = now
		self.updated_at = now
