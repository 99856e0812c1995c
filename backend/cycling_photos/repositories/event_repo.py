from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cycling_photos.domain.events import Event
from cycling_photos.models.event import EventModel
from cycling_photos.repositories import mappers
from cycling_photos.schemas.common import Pagination
from cycling_photos.schemas.event import EventDetail, EventListItem


def _active_events():
	return select(EventModel).where(EventModel.deleted_at.is_(None))


class SqlAlchemyEventReadRepository:
	def __init__(self, session: AsyncSession) -> None:
		self.session = session

	async def find_by_id(self, event_id: UUID) -> Event | None:
		result = await self.session.execute(_active_events().where(EventModel.id == event_id))
		model = result.scalar_one_or_none()
		return mappers.event_to_entity(model) if model else None

	async def get_events_list(self, pagination: Pagination) -> List[EventListItem]:
		result = await self.session.execute(
			_active_events()
			.order_by(EventModel.event_date.desc(), EventModel.created_at.desc())
			.offset(pagination.skip)
			.limit(pagination.take)
		)
		return [mappers.event_to_list_item(model) for model in result.scalars().all()]

	async def get_event_detail(self, event_id: UUID) -> EventDetail | None:
		result = await self.session.execute(_active_events().where(EventModel.id == event_id))
		model = result.scalar_one_or_none()
		return mappers.event_to_detail(model) if model else None


class SqlAlchemyEventWriteRepository:
	def __init__(self, session: AsyncSession) -> None:
		self.session = session

	async def save(self, event: Event) -> Event:
		"""Inserts or updates the event row from the entity's current state."""
		try:
			model = await self.session.merge(mappers.event_to_model(event))
			await self.session.commit()
		except Exception:
			await self.session.rollback()
			raise
		return mappers.event_to_entity(model)
