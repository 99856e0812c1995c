from typing import Sequence

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from cycling_photos.domain.classifications import ClassificationBundle
from cycling_photos.domain.photos import Photo
from cycling_photos.models.photo import PhotoModel
from cycling_photos.repositories import mappers


class SqlAlchemyClassificationWriteRepository:
	def __init__(self, session: AsyncSession) -> None:
		self.session = session

	async def save_classification(
		self, photo: Photo, bundles: Sequence[ClassificationBundle]
	) -> None:
		"""Writes the photo transition and all detection rows in one transaction.

		Any failure rolls back the photo update together with the inserts
		and is re-raised unchanged.
		"""
		try:
			await self.session.execute(
				update(PhotoModel)
				.where(PhotoModel.id == photo.id)
				.values(
					status=photo.status,
					processed_at=photo.processed_at,
					unclassified_reason=photo.unclassified_reason,
				)
			)
			self.session.add_all([mappers.bundle_to_model(bundle) for bundle in bundles])
			await self.session.commit()
		except Exception:
			await self.session.rollback()
			raise
