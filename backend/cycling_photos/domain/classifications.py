from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List

from cycling_photos.core.errors import AppError
from cycling_photos.domain.audit import utcnow

PLATE_NUMBER_MIN = 1
PLATE_NUMBER_MAX = 999
DENSITY_MIN = 0
DENSITY_MAX = 100


class EquipmentItem(str, Enum):
	HELMET = "helmet"
	JERSEY = "jersey"
	BIKE = "bike"


@dataclass(frozen=True)
class DetectedCyclist:
	id: uuid.UUID
	photo_id: uuid.UUID
	bounding_box: Dict[str, float]
	confidence_score: float
	created_at: datetime

	@classmethod
	def create(
		cls,
		photo_id: uuid.UUID,
		bounding_box: Dict[str, float],
		confidence_score: float,
	) -> DetectedCyclist:
		return cls(
			id=uuid.uuid4(),
			photo_id=photo_id,
			bounding_box=dict(bounding_box),
			confidence_score=confidence_score,
			created_at=utcnow(),
		)


@dataclass(frozen=True)
class PlateNumber:
	id: uuid.UUID
	detected_cyclist_id: uuid.UUID
	number: int
	confidence_score: float | None
	manually_corrected: bool
	corrected_at: datetime | None
	created_at: datetime

	@classmethod
	def create(
		cls,
		detected_cyclist_id: uuid.UUID,
		number: int,
		confidence_score: float | None = None,
	) -> PlateNumber:
		if number < PLATE_NUMBER_MIN or number > PLATE_NUMBER_MAX:
			raise AppError.business_rule("photo.plate_number_out_of_range")
		return cls(
			id=uuid.uuid4(),
			detected_cyclist_id=detected_cyclist_id,
			number=number,
			confidence_score=confidence_score,
			manually_corrected=False,
			corrected_at=None,
			created_at=utcnow(),
		)


@dataclass(frozen=True)
class EquipmentColor:
	id: uuid.UUID
	detected_cyclist_id: uuid.UUID
	item_type: EquipmentItem
	color_name: str
	color_hex: str
	density_percentage: float
	created_at: datetime

	@classmethod
	def create(
		cls,
		detected_cyclist_id: uuid.UUID,
		item_type: EquipmentItem | str,
		color_name: str,
		color_hex: str,
		density_percentage: float,
	) -> EquipmentColor:
		if density_percentage < DENSITY_MIN or density_percentage > DENSITY_MAX:
			raise AppError.business_rule("photo.density_percentage_out_of_range")
		return cls(
			id=uuid.uuid4(),
			detected_cyclist_id=detected_cyclist_id,
			item_type=EquipmentItem(item_type),
			color_name=color_name,
			color_hex=color_hex,
			density_percentage=density_percentage,
			created_at=utcnow(),
		)


@dataclass(frozen=True)
class ClassificationBundle:
	"""One detected cyclist together with its optional plate and its colors."""

	cyclist: DetectedCyclist
	plate: PlateNumber | None = None
	colors: List[EquipmentColor] = field(default_factory=list)
