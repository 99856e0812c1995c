import logging
from typing import List, Sequence
from uuid import UUID

from cycling_photos.core.context import RequestContext
from cycling_photos.core.errors import AppError
from cycling_photos.domain.classifications import (
	ClassificationBundle,
	DetectedCyclist,
	EquipmentColor,
	PlateNumber,
)
from cycling_photos.domain.ports import ClassificationWriteRepository, PhotoReadRepository
from cycling_photos.schemas.classification import CyclistClassification
from cycling_photos.schemas.common import EntityId

logger = logging.getLogger(__name__)


def build_bundle(photo_id: UUID, detection: CyclistClassification) -> ClassificationBundle:
	cyclist = DetectedCyclist.create(
		photo_id=photo_id,
		bounding_box=detection.bounding_box,
		confidence_score=detection.confidence_score,
	)
	plate = None
	if detection.plate_number is not None:
		plate = PlateNumber.create(
			detected_cyclist_id=cyclist.id,
			number=detection.plate_number.number,
			confidence_score=detection.plate_number.confidence_score,
		)
	colors = [
		EquipmentColor.create(
			detected_cyclist_id=cyclist.id,
			item_type=color.item_type,
			color_name=color.color_name,
			color_hex=color.color_hex,
			density_percentage=color.density_percentage,
		)
		for color in detection.colors
	]
	return ClassificationBundle(cyclist=cyclist, plate=plate, colors=colors)


class ClassificationService:
	def __init__(
		self,
		photo_repo: PhotoReadRepository,
		classification_repo: ClassificationWriteRepository,
		ctx: RequestContext,
	) -> None:
		self.photo_repo = photo_repo
		self.classification_repo = classification_repo
		self.ctx = ctx

	async def classify(
		self, photo_id: UUID, cyclists: Sequence[CyclistClassification]
	) -> EntityId:
		"""Records the detections against the photo and marks it completed.

		All entities are built (and validated) before the repository is
		called, so an invalid detection never reaches storage.
		"""
		photo = await self.photo_repo.find_by_id(photo_id)
		if photo is None:
			raise AppError.not_found("Photo", photo_id)

		bundles: List[ClassificationBundle] = [
			build_bundle(photo.id, detection) for detection in cyclists
		]

		photo.mark_as_completed()
		await self.classification_repo.save_classification(photo, bundles)

		logger.info(
			"Photo %s classified with %d cyclist(s) [request_id=%s]",
			photo.id,
			len(bundles),
			self.ctx.request_id,
		)
		return EntityId(id=photo.id)
