"""Conversions between domain entities, ORM rows and read projections."""

from datetime import datetime, timezone
from decimal import Decimal

from cycling_photos.domain.audit import AuditFields
from cycling_photos.domain.classifications import (
	ClassificationBundle,
	DetectedCyclist,
	EquipmentColor,
	EquipmentItem,
	PlateNumber,
)
from cycling_photos.domain.events import Event, EventStatus
from cycling_photos.domain.photos import Photo, PhotoStatus, UnclassifiedReason
from cycling_photos.models.classification import (
	DetectedCyclistModel,
	EquipmentColorModel,
	PlateNumberModel,
)
from cycling_photos.models.event import EventModel
from cycling_photos.models.photo import PhotoModel
from cycling_photos.schemas.classification import (
	DetectedCyclistRead,
	EquipmentColorRead,
	PlateNumberRead,
)
from cycling_photos.schemas.event import EventDetail, EventListItem
from cycling_photos.schemas.photo import PhotoDetail, PhotoListItem


def as_utc(value: datetime | None) -> datetime | None:
	# SQLite hands back naive datetimes; everything is stored in UTC.
	if value is None or value.tzinfo is not None:
		return value
	return value.replace(tzinfo=timezone.utc)


def to_float(value: Decimal | float | int | None) -> float | None:
	return None if value is None else float(value)


def _enum_value(value) -> str | None:
	if value is None:
		return None
	return getattr(value, "value", value)


# Events


def event_to_model(event: Event) -> EventModel:
	return EventModel(
		id=event.id,
		name=event.name,
		event_date=event.date,
		location=event.location,
		status=event.status,
		total_photos=event.total_photos,
		processed_photos=event.processed_photos,
		created_at=event.audit.created_at,
		updated_at=event.audit.updated_at,
		deleted_at=event.audit.deleted_at,
	)


def event_to_entity(model: EventModel) -> Event:
	return Event(
		id=model.id,
		name=model.name,
		date=model.event_date,
		location=model.location,
		status=EventStatus(model.status),
		total_photos=model.total_photos,
		processed_photos=model.processed_photos,
		audit=AuditFields(
			created_at=as_utc(model.created_at),
			updated_at=as_utc(model.updated_at),
			deleted_at=as_utc(model.deleted_at),
		),
	)


def event_to_list_item(model: EventModel) -> EventListItem:
	return EventListItem(
		id=model.id,
		name=model.name,
		date=model.event_date,
		location=model.location,
		status=_enum_value(model.status),
		total_photos=model.total_photos,
		processed_photos=model.processed_photos,
	)


def event_to_detail(model: EventModel) -> EventDetail:
	return EventDetail(
		id=model.id,
		name=model.name,
		date=model.event_date,
		location=model.location,
		status=_enum_value(model.status),
		total_photos=model.total_photos,
		processed_photos=model.processed_photos,
		created_at=as_utc(model.created_at),
		updated_at=as_utc(model.updated_at),
	)


# Photos


def photo_to_model(photo: Photo) -> PhotoModel:
	return PhotoModel(
		id=photo.id,
		event_id=photo.event_id,
		filename=photo.filename,
		storage_key=photo.storage_key,
		file_size=photo.file_size,
		mime_type=photo.mime_type,
		width=photo.width,
		height=photo.height,
		status=photo.status,
		unclassified_reason=photo.unclassified_reason,
		captured_at=photo.captured_at,
		uploaded_at=photo.uploaded_at,
		processed_at=photo.processed_at,
	)


def photo_to_entity(model: PhotoModel) -> Photo:
	return Photo(
		id=model.id,
		event_id=model.event_id,
		filename=model.filename,
		storage_key=model.storage_key,
		file_size=int(model.file_size),
		mime_type=model.mime_type,
		width=model.width,
		height=model.height,
		status=PhotoStatus(model.status),
		unclassified_reason=(
			UnclassifiedReason(model.unclassified_reason)
			if model.unclassified_reason is not None
			else None
		),
		captured_at=as_utc(model.captured_at),
		uploaded_at=as_utc(model.uploaded_at),
		processed_at=as_utc(model.processed_at),
	)


def photo_to_list_item(model: PhotoModel) -> PhotoListItem:
	return PhotoListItem(
		id=model.id,
		event_id=model.event_id,
		filename=model.filename,
		storage_key=model.storage_key,
		status=_enum_value(model.status),
		width=model.width,
		height=model.height,
		uploaded_at=as_utc(model.uploaded_at),
	)


def photo_to_detail(model: PhotoModel) -> PhotoDetail:
	"""Folds a photo row and its loaded cyclist rows into the nested detail shape."""
	return PhotoDetail(
		id=model.id,
		event_id=model.event_id,
		filename=model.filename,
		storage_key=model.storage_key,
		file_size=int(model.file_size),
		mime_type=model.mime_type,
		width=model.width,
		height=model.height,
		status=_enum_value(model.status),
		unclassified_reason=_enum_value(model.unclassified_reason),
		captured_at=as_utc(model.captured_at),
		uploaded_at=as_utc(model.uploaded_at),
		processed_at=as_utc(model.processed_at),
		detected_cyclists=[cyclist_to_projection(c) for c in model.detected_cyclists],
	)


# Classifications


def cyclist_to_model(cyclist: DetectedCyclist) -> DetectedCyclistModel:
	return DetectedCyclistModel(
		id=cyclist.id,
		photo_id=cyclist.photo_id,
		bounding_box=dict(cyclist.bounding_box),
		confidence_score=cyclist.confidence_score,
		created_at=cyclist.created_at,
	)


def cyclist_to_entity(model: DetectedCyclistModel) -> DetectedCyclist:
	return DetectedCyclist(
		id=model.id,
		photo_id=model.photo_id,
		bounding_box=dict(model.bounding_box),
		confidence_score=to_float(model.confidence_score),
		created_at=as_utc(model.created_at),
	)


def plate_to_model(plate: PlateNumber) -> PlateNumberModel:
	return PlateNumberModel(
		id=plate.id,
		detected_cyclist_id=plate.detected_cyclist_id,
		number=plate.number,
		confidence_score=plate.confidence_score,
		manually_corrected=plate.manually_corrected,
		corrected_at=plate.corrected_at,
		created_at=plate.created_at,
	)


def plate_to_entity(model: PlateNumberModel) -> PlateNumber:
	return PlateNumber(
		id=model.id,
		detected_cyclist_id=model.detected_cyclist_id,
		number=model.number,
		confidence_score=to_float(model.confidence_score),
		manually_corrected=bool(model.manually_corrected),
		corrected_at=as_utc(model.corrected_at),
		created_at=as_utc(model.created_at),
	)


def color_to_model(color: EquipmentColor) -> EquipmentColorModel:
	return EquipmentColorModel(
		id=color.id,
		detected_cyclist_id=color.detected_cyclist_id,
		item_type=color.item_type,
		color_name=color.color_name,
		color_hex=color.color_hex,
		density_percentage=color.density_percentage,
		created_at=color.created_at,
	)


def color_to_entity(model: EquipmentColorModel) -> EquipmentColor:
	return EquipmentColor(
		id=model.id,
		detected_cyclist_id=model.detected_cyclist_id,
		item_type=EquipmentItem(model.item_type),
		color_name=model.color_name,
		color_hex=model.color_hex,
		density_percentage=to_float(model.density_percentage),
		created_at=as_utc(model.created_at),
	)


def bundle_to_model(bundle: ClassificationBundle) -> DetectedCyclistModel:
	"""Builds the cyclist row with its plate and color rows attached."""
	model = cyclist_to_model(bundle.cyclist)
	if bundle.plate is not None:
		model.plate_number = plate_to_model(bundle.plate)
	model.equipment_colors = [color_to_model(color) for color in bundle.colors]
	return model


def cyclist_to_projection(model: DetectedCyclistModel) -> DetectedCyclistRead:
	plate = model.plate_number
	return DetectedCyclistRead(
		id=model.id,
		bounding_box=dict(model.bounding_box),
		confidence_score=to_float(model.confidence_score),
		plate_number=(
			PlateNumberRead(
				number=plate.number,
				confidence_score=to_float(plate.confidence_score),
				manually_corrected=bool(plate.manually_corrected),
			)
			if plate is not None
			else None
		),
		equipment_colors=[
			EquipmentColorRead(
				item_type=_enum_value(color.item_type),
				color_name=color.color_name,
				color_hex=color.color_hex,
				density_percentage=to_float(color.density_percentage),
			)
			for color in model.equipment_colors
		],
	)
