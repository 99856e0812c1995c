from datetime import datetime
from typing import Dict, List
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status

from cycling_photos.api.deps import (
	get_classification_service,
	get_pagination,
	get_photo_service,
	get_request_context,
)
from cycling_photos.api.envelope import envelope
from cycling_photos.core.config import Settings
from cycling_photos.core.context import RequestContext
from cycling_photos.core.errors import AppError
from cycling_photos.domain.photos import ALLOWED_MIME_TYPES, PhotoStatus
from cycling_photos.schemas.classification import ClassifyPhotoRequest
from cycling_photos.schemas.common import ApiResponse, EntityId, Pagination
from cycling_photos.schemas.photo import PhotoDetail, PhotoListItem, PhotoSearchFilters
from cycling_photos.services.classification_service import ClassificationService
from cycling_photos.services.photo_service import PhotoService, UploadedFile

router = APIRouter()


async def _read_uploads(files: List[UploadFile], settings: Settings) -> List[UploadedFile]:
	errors: Dict[str, List[str]] = {}
	if len(files) > settings.MAX_UPLOAD_FILES:
		errors.setdefault("photos", []).append(
			f"At most {settings.MAX_UPLOAD_FILES} files can be uploaded at once"
		)

	uploads: List[UploadedFile] = []
	for file in files:
		if file.content_type not in ALLOWED_MIME_TYPES:
			errors.setdefault("photos", []).append(
				f"File type {file.content_type} is not allowed. Accepted: JPEG, PNG, WebP"
			)
			continue
		data = await file.read()
		if len(data) > settings.MAX_UPLOAD_FILE_SIZE:
			errors.setdefault("photos", []).append(
				f"File {file.filename} exceeds the {settings.MAX_UPLOAD_FILE_SIZE} byte limit"
			)
			continue
		uploads.append(
			UploadedFile(filename=file.filename or "", content_type=file.content_type, data=data)
		)

	if errors:
		raise AppError.validation_failed(errors)
	return uploads


@router.get("/events/{event_id}/photos", response_model=ApiResponse[List[PhotoListItem]])
async def list_event_photos(
	event_id: UUID,
	pagination: Pagination = Depends(get_pagination),
	service: PhotoService = Depends(get_photo_service),
	ctx: RequestContext = Depends(get_request_context),
):
	return envelope(await service.list_photos(event_id, pagination), ctx, "success.LIST")


@router.post(
	"/events/{event_id}/photos",
	response_model=ApiResponse[List[EntityId]],
	status_code=status.HTTP_201_CREATED,
)
async def upload_photos(
	request: Request,
	event_id: UUID,
	photos: List[UploadFile] = File(...),
	service: PhotoService = Depends(get_photo_service),
	ctx: RequestContext = Depends(get_request_context),
):
	uploads = await _read_uploads(photos, request.app.state.settings)
	return envelope(await service.upload_photos(event_id, uploads), ctx, "success.CREATED")


@router.get("/photos/search", response_model=ApiResponse[List[PhotoListItem]])
async def search_photos(
	event_id: UUID | None = Query(None, alias="eventId"),
	photo_status: PhotoStatus | None = Query(None, alias="status"),
	plate_number: int | None = Query(None, alias="plateNumber", ge=1, le=999),
	from_date: datetime | None = Query(None, alias="fromDate"),
	to_date: datetime | None = Query(None, alias="toDate"),
	pagination: Pagination = Depends(get_pagination),
	service: PhotoService = Depends(get_photo_service),
	ctx: RequestContext = Depends(get_request_context),
):
	filters = PhotoSearchFilters(
		event_id=event_id,
		status=photo_status,
		plate_number=plate_number,
		from_date=from_date,
		to_date=to_date,
	)
	return envelope(await service.search_photos(filters, pagination), ctx, "success.LIST")


@router.get("/photos/{photo_id}", response_model=ApiResponse[PhotoDetail])
async def get_photo(
	photo_id: UUID,
	service: PhotoService = Depends(get_photo_service),
	ctx: RequestContext = Depends(get_request_context),
):
	return envelope(await service.get_photo(photo_id), ctx, "success.FETCHED")


@router.patch("/photos/{photo_id}/classify", response_model=ApiResponse[EntityId])
async def classify_photo(
	photo_id: UUID,
	payload: ClassifyPhotoRequest,
	service: ClassificationService = Depends(get_classification_service),
	ctx: RequestContext = Depends(get_request_context),
):
	return envelope(await service.classify(photo_id, payload.cyclists), ctx, "success.UPDATED")


@router.delete("/photos/{photo_id}", response_model=ApiResponse[EntityId])
async def delete_photo(
	photo_id: UUID,
	service: PhotoService = Depends(get_photo_service),
	ctx: RequestContext = Depends(get_request_context),
):
	return envelope(await service.delete_photo(photo_id), ctx, "success.DELETED")
