"""Tests for entity factories and their business rules."""

import uuid
from datetime import timedelta

import pytest

from cycling_photos.core.errors import AppError, ErrorCode
from cycling_photos.domain.audit import utcnow
from cycling_photos.domain.classifications import (
	DetectedCyclist,
	EquipmentColor,
	EquipmentItem,
	PlateNumber,
)
from cycling_photos.domain.events import Event, EventStatus
from cycling_photos.domain.photos import Photo, PhotoStatus, UnclassifiedReason


def _rule_key(excinfo) -> str:
	assert excinfo.value.code == ErrorCode.BUSINESS_RULE
	assert excinfo.value.status_code == 422
	return excinfo.value.message_key


# Events


def test_event_create_defaults():
	event = Event.create(name="Tour de Test", date=utcnow().date() + timedelta(days=1))
	assert event.status == EventStatus.DRAFT
	assert event.total_photos == 0
	assert event.processed_photos == 0
	assert event.location is None
	assert event.audit.created_at == event.audit.updated_at
	assert not event.is_deleted


@pytest.mark.parametrize("name", ["ab", "x" * 201])
def test_event_name_length_rejected(name):
	with pytest.raises(AppError) as excinfo:
		Event.create(name=name, date=utcnow().date())
	assert _rule_key(excinfo) == "event.name_invalid_length"


@pytest.mark.parametrize("name", ["abc", "x" * 200])
def test_event_name_length_boundaries_accepted(name):
	assert Event.create(name=name, date=utcnow().date()).name == name


def test_event_date_today_accepted():
	assert Event.create(name="Criterium", date=utcnow().date()).date == utcnow().date()


def test_event_date_in_past_rejected():
	with pytest.raises(AppError) as excinfo:
		Event.create(name="Criterium", date=utcnow().date() - timedelta(days=1))
	assert _rule_key(excinfo) == "event.date_in_past"


def test_event_update_only_touches_given_fields():
	event = Event.create(name="Criterium", date=utcnow().date(), location="Ghent")
	before = event.audit.updated_at

	event.update(name="Night Criterium")
	assert event.name == "Night Criterium"
	assert event.location == "Ghent"
	assert event.audit.updated_at >= before

	event.update(location=None)
	assert event.location is None
	assert event.name == "Night Criterium"


def test_event_update_validates_new_values():
	event = Event.create(name="Criterium", date=utcnow().date())
	with pytest.raises(AppError) as excinfo:
		event.update(name="no")
	assert _rule_key(excinfo) == "event.name_invalid_length"
	assert event.name == "Criterium"


def test_event_soft_delete_sets_deleted_at():
	event = Event.create(name="Criterium", date=utcnow().date())
	event.soft_delete()
	assert event.is_deleted
	assert event.audit.deleted_at == event.audit.updated_at


# Photos


def _photo(**overrides):
	values = dict(
		event_id=uuid.uuid4(),
		filename="IMG_0001.jpg",
		storage_key="events/x/photos/y.jpg",
		file_size=1024,
		mime_type="image/jpeg",
	)
	values.update(overrides)
	return Photo.create(**values)


def test_photo_create_defaults():
	photo = _photo()
	assert photo.status == PhotoStatus.PENDING
	assert photo.unclassified_reason is None
	assert photo.processed_at is None
	assert photo.uploaded_at.tzinfo is not None


@pytest.mark.parametrize("mime_type", ["image/jpeg", "image/png", "image/webp"])
def test_photo_accepts_supported_mime_types(mime_type):
	assert _photo(mime_type=mime_type).mime_type == mime_type


@pytest.mark.parametrize(
	"overrides, key",
	[
		({"filename": ""}, "photo.filename_empty"),
		({"filename": "   "}, "photo.filename_empty"),
		({"mime_type": "image/gif"}, "photo.invalid_mime_type"),
		({"file_size": 0}, "photo.invalid_file_size"),
		({"file_size": -1}, "photo.invalid_file_size"),
	],
)
def test_photo_rules(overrides, key):
	with pytest.raises(AppError) as excinfo:
		_photo(**overrides)
	assert _rule_key(excinfo) == key


def test_photo_status_transitions():
	photo = _photo()
	photo.mark_as_failed(UnclassifiedReason.NO_CYCLIST)
	assert photo.status == PhotoStatus.FAILED
	assert photo.unclassified_reason == UnclassifiedReason.NO_CYCLIST
	assert photo.processed_at is not None

	photo.mark_as_completed()
	assert photo.status == PhotoStatus.COMPLETED
	assert photo.unclassified_reason is None


# Classifications


@pytest.mark.parametrize("number", [0, -1, 1000])
def test_plate_number_out_of_range(number):
	with pytest.raises(AppError) as excinfo:
		PlateNumber.create(detected_cyclist_id=uuid.uuid4(), number=number)
	assert _rule_key(excinfo) == "photo.plate_number_out_of_range"


@pytest.mark.parametrize("number", [1, 999])
def test_plate_number_boundaries_accepted(number):
	plate = PlateNumber.create(detected_cyclist_id=uuid.uuid4(), number=number)
	assert plate.number == number
	assert plate.confidence_score is None
	assert plate.manually_corrected is False
	assert plate.corrected_at is None


@pytest.mark.parametrize("density", [-0.1, 100.1])
def test_density_out_of_range(density):
	with pytest.raises(AppError) as excinfo:
		EquipmentColor.create(
			detected_cyclist_id=uuid.uuid4(),
			item_type=EquipmentItem.HELMET,
			color_name="red",
			color_hex="#FF0000",
			density_percentage=density,
		)
	assert _rule_key(excinfo) == "photo.density_percentage_out_of_range"


@pytest.mark.parametrize("density", [0, 100])
def test_density_boundaries_accepted(density):
	color = EquipmentColor.create(
		detected_cyclist_id=uuid.uuid4(),
		item_type="jersey",
		color_name="blue",
		color_hex="#0000FF",
		density_percentage=density,
	)
	assert color.density_percentage == density
	assert color.item_type == EquipmentItem.JERSEY


def test_detected_cyclist_copies_bounding_box():
	box = {"x": 1.0, "y": 2.0, "width": 30.0, "height": 60.0}
	cyclist = DetectedCyclist.create(photo_id=uuid.uuid4(), bounding_box=box, confidence_score=0.9)
	box["x"] = 99.0
	assert cyclist.bounding_box["x"] == 1.0
