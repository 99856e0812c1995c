from sqlalchemy import Column, Date, DateTime, Enum, Integer, String, Uuid

from cycling_photos.db.base import Base
from cycling_photos.domain.events import EventStatus


def enum_values(enum_cls):
	return [member.value for member in enum_cls]


class EventModel(Base):
	__tablename__ = "events"

	id = Column(Uuid, primary_key=True)
	name = Column(String(200), nullable=False)
	event_date = Column(Date, nullable=False, index=True)
	location = Column(String(200), nullable=True)
	status = Column(
		Enum(EventStatus, name="event_status", values_callable=enum_values),
		nullable=False,
		default=EventStatus.DRAFT,
		index=True,
	)
	total_photos = Column(Integer, nullable=False, default=0)
	processed_photos = Column(Integer, nullable=False, default=0)
	created_at = Column(DateTime(timezone=True), nullable=False)
	updated_at = Column(DateTime(timezone=True), nullable=False)
	deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)
