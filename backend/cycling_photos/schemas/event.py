import datetime as dt
from uuid import UUID

from pydantic import Field, TypeAdapter, field_validator

from cycling_photos.schemas.common import CamelModel

_DATETIME = TypeAdapter(dt.datetime)


def date_part(value):
	"""Reduces a datetime (or ISO datetime string) to its UTC calendar date."""
	if isinstance(value, str) and "T" in value:
		value = _DATETIME.validate_python(value)
	if isinstance(value, dt.datetime):
		if value.tzinfo is not None:
			value = value.astimezone(dt.timezone.utc)
		return value.date()
	return value


class EventCreate(CamelModel):
	name: str = Field(min_length=3, max_length=200)
	date: dt.date
	location: str | None = Field(default=None, max_length=200)

	@field_validator("date", mode="before")
	@classmethod
	def _accept_datetime(cls, value):
		return date_part(value)


class EventUpdate(CamelModel):
	name: str | None = Field(default=None, min_length=3, max_length=200)
	date: dt.date | None = None
	location: str | None = Field(default=None, max_length=200)

	@field_validator("date", mode="before")
	@classmethod
	def _accept_datetime(cls, value):
		return date_part(value)


class EventListItem(CamelModel):
	id: UUID
	name: str
	date: dt.date
	location: str | None = None
	status: str
	total_photos: int
	processed_photos: int


class EventDetail(EventListItem):
	created_at: dt.datetime
	updated_at: dt.datetime
