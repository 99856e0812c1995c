import logging
from typing import List
from uuid import UUID

from cycling_photos.core.context import RequestContext
from cycling_photos.core.errors import AppError
from cycling_photos.domain.events import Event
from cycling_photos.domain.ports import EventReadRepository, EventWriteRepository
from cycling_photos.schemas.common import EntityId, Pagination
from cycling_photos.schemas.event import EventCreate, EventDetail, EventListItem, EventUpdate

logger = logging.getLogger(__name__)

# Fields that may be omitted but never cleared.
_REQUIRED_ON_UPDATE = ("name", "date")


class EventService:
	def __init__(
		self,
		read_repo: EventReadRepository,
		write_repo: EventWriteRepository,
		ctx: RequestContext,
	) -> None:
		self.read_repo = read_repo
		self.write_repo = write_repo
		self.ctx = ctx

	async def list_events(self, pagination: Pagination) -> List[EventListItem]:
		return await self.read_repo.get_events_list(pagination)

	async def get_event(self, event_id: UUID) -> EventDetail:
		event = await self.read_repo.get_event_detail(event_id)
		if event is None:
			raise AppError.not_found("Event", event_id)
		return event

	async def create_event(self, payload: EventCreate) -> EntityId:
		event = Event.create(name=payload.name, date=payload.date, location=payload.location)
		saved = await self.write_repo.save(event)
		logger.info("Event %s created [request_id=%s]", saved.id, self.ctx.request_id)
		return EntityId(id=saved.id)

	async def update_event(self, event_id: UUID, payload: EventUpdate) -> EntityId:
		event = await self.read_repo.find_by_id(event_id)
		if event is None:
			raise AppError.not_found("Event", event_id)

		changes = {
			field: value
			for field, value in payload.model_dump(exclude_unset=True).items()
			if value is not None or field not in _REQUIRED_ON_UPDATE
		}
		event.update(**changes)
		await self.write_repo.save(event)
		logger.info(
			"Event %s updated (%s) [request_id=%s]",
			event.id,
			", ".join(sorted(changes)) or "no fields",
			self.ctx.request_id,
		)
		return EntityId(id=event.id)

	async def delete_event(self, event_id: UUID) -> EntityId:
		event = await self.read_repo.find_by_id(event_id)
		if event is None:
			raise AppError.not_found("Event", event_id)

		event.soft_delete()
		await self.write_repo.save(event)
		logger.info("Event %s soft-deleted [request_id=%s]", event.id, self.ctx.request_id)
		return EntityId(id=event.id)
