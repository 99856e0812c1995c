from typing import Dict, List
from uuid import UUID

from pydantic import Field

from cycling_photos.domain.classifications import EquipmentItem
from cycling_photos.schemas.common import CamelModel

HEX_COLOR_PATTERN = r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"


class PlateClassification(CamelModel):
	number: int = Field(ge=1, le=999)
	confidence_score: float | None = Field(default=None, ge=0, le=1)


class ColorClassification(CamelModel):
	item_type: EquipmentItem
	color_name: str = Field(min_length=1, max_length=50)
	color_hex: str = Field(pattern=HEX_COLOR_PATTERN)
	density_percentage: float = Field(ge=0, le=100)


class CyclistClassification(CamelModel):
	bounding_box: Dict[str, float]
	confidence_score: float = Field(ge=0, le=1)
	plate_number: PlateClassification | None = None
	colors: List[ColorClassification] = Field(default_factory=list)


class ClassifyPhotoRequest(CamelModel):
	cyclists: List[CyclistClassification]


class PlateNumberRead(CamelModel):
	number: int
	confidence_score: float | None = None
	manually_corrected: bool = False


class EquipmentColorRead(CamelModel):
	item_type: str
	color_name: str
	color_hex: str
	density_percentage: float


class DetectedCyclistRead(CamelModel):
	id: UUID
	bounding_box: Dict[str, float]
	confidence_score: float
	plate_number: PlateNumberRead | None = None
	equipment_colors: List[EquipmentColorRead] = Field(default_factory=list)
