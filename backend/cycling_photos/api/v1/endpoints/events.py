from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from cycling_photos.api.deps import get_event_service, get_pagination, get_request_context
from cycling_photos.api.envelope import envelope
from cycling_photos.core.context import RequestContext
from cycling_photos.schemas.common import ApiResponse, EntityId, Pagination
from cycling_photos.schemas.event import EventCreate, EventDetail, EventListItem, EventUpdate
from cycling_photos.services.event_service import EventService

router = APIRouter()


@router.get("", response_model=ApiResponse[List[EventListItem]])
async def list_events(
	pagination: Pagination = Depends(get_pagination),
	service: EventService = Depends(get_event_service),
	ctx: RequestContext = Depends(get_request_context),
):
	return envelope(await service.list_events(pagination), ctx, "success.LIST")


@router.post("", response_model=ApiResponse[EntityId], status_code=status.HTTP_201_CREATED)
async def create_event(
	payload: EventCreate,
	service: EventService = Depends(get_event_service),
	ctx: RequestContext = Depends(get_request_context),
):
	return envelope(await service.create_event(payload), ctx, "success.CREATED")


@router.get("/{event_id}", response_model=ApiResponse[EventDetail])
async def get_event(
	event_id: UUID,
	service: EventService = Depends(get_event_service),
	ctx: RequestContext = Depends(get_request_context),
):
	return envelope(await service.get_event(event_id), ctx, "success.FETCHED")


@router.patch("/{event_id}", response_model=ApiResponse[EntityId])
async def update_event(
	event_id: UUID,
	payload: EventUpdate,
	service: EventService = Depends(get_event_service),
	ctx: RequestContext = Depends(get_request_context),
):
	return envelope(await service.update_event(event_id, payload), ctx, "success.UPDATED")


@router.delete("/{event_id}", response_model=ApiResponse[EntityId])
async def delete_event(
	event_id: UUID,
	service: EventService = Depends(get_event_service),
	ctx: RequestContext = Depends(get_request_context),
):
	return envelope(await service.delete_event(event_id), ctx, "success.DELETED")
