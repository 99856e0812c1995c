from sqlalchemy import (
	BigInteger,
	Column,
	DateTime,
	Enum,
	ForeignKey,
	Index,
	Integer,
	String,
	UniqueConstraint,
	Uuid,
)
from sqlalchemy.orm import relationship

from cycling_photos.db.base import Base
from cycling_photos.domain.photos import PhotoStatus, UnclassifiedReason
from cycling_photos.models.event import enum_values


class PhotoModel(Base):
	__tablename__ = "photos"
	__table_args__ = (
		UniqueConstraint("event_id", "filename", name="unique_event_filename"),
		Index("idx_photos_unclassified", "event_id", "unclassified_reason"),
	)

	id = Column(Uuid, primary_key=True)
	event_id = Column(Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
	filename = Column(String(255), nullable=False)
	storage_key = Column(String(500), nullable=False)
	file_size = Column(BigInteger, nullable=False)
	mime_type = Column(String(50), nullable=False, default="image/jpeg")
	width = Column(Integer, nullable=True)
	height = Column(Integer, nullable=True)
	status = Column(
		Enum(PhotoStatus, name="photo_status", values_callable=enum_values),
		nullable=False,
		default=PhotoStatus.PENDING,
		index=True,
	)
	unclassified_reason = Column(
		Enum(UnclassifiedReason, name="unclassified_reason", values_callable=enum_values),
		nullable=True,
	)
	captured_at = Column(DateTime(timezone=True), nullable=True)
	uploaded_at = Column(DateTime(timezone=True), nullable=False)
	processed_at = Column(DateTime(timezone=True), nullable=True)

	detected_cyclists = relationship(
		"DetectedCyclistModel",
		back_populates="photo",
		cascade="all, delete-orphan",
		passive_deletes=True,
		order_by="DetectedCyclistModel.created_at",
	)
