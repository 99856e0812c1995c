from sqlalchemy import (
	JSON,
	Boolean,
	Column,
	DateTime,
	Enum,
	ForeignKey,
	Integer,
	Numeric,
	String,
	Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from cycling_photos.db.base import Base
from cycling_photos.domain.classifications import EquipmentItem
from cycling_photos.models.event import enum_values


class DetectedCyclistModel(Base):
	__tablename__ = "detected_cyclists"

	id = Column(Uuid, primary_key=True)
	photo_id = Column(Uuid, ForeignKey("photos.id", ondelete="CASCADE"), nullable=False, index=True)
	bounding_box = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
	confidence_score = Column(Numeric(5, 4), nullable=False, index=True)
	created_at = Column(DateTime(timezone=True), nullable=False)

	photo = relationship("PhotoModel", back_populates="detected_cyclists")
	plate_number = relationship(
		"PlateNumberModel",
		back_populates="detected_cyclist",
		uselist=False,
		cascade="all, delete-orphan",
		passive_deletes=True,
	)
	equipment_colors = relationship(
		"EquipmentColorModel",
		back_populates="detected_cyclist",
		cascade="all, delete-orphan",
		passive_deletes=True,
		order_by="EquipmentColorModel.created_at",
	)


class PlateNumberModel(Base):
	__tablename__ = "plate_numbers"

	id = Column(Uuid, primary_key=True)
	detected_cyclist_id = Column(
		Uuid,
		ForeignKey("detected_cyclists.id", ondelete="CASCADE"),
		nullable=False,
		unique=True,
	)
	number = Column(Integer, nullable=False, index=True)
	confidence_score = Column(Numeric(5, 4), nullable=True)
	manually_corrected = Column(Boolean, nullable=False, default=False)
	corrected_at = Column(DateTime(timezone=True), nullable=True)
	created_at = Column(DateTime(timezone=True), nullable=False)

	detected_cyclist = relationship("DetectedCyclistModel", back_populates="plate_number")


class EquipmentColorModel(Base):
	__tablename__ = "equipment_colors"

	id = Column(Uuid, primary_key=True)
	detected_cyclist_id = Column(
		Uuid,
		ForeignKey("detected_cyclists.id", ondelete="CASCADE"),
		nullable=False,
		index=True,
	)
	item_type = Column(
		Enum(EquipmentItem, name="equipment_item", values_callable=enum_values),
		nullable=False,
		index=True,
	)
	color_name = Column(String(50), nullable=False, index=True)
	color_hex = Column(String(7), nullable=False)
	density_percentage = Column(Numeric(5, 2), nullable=False)
	created_at = Column(DateTime(timezone=True), nullable=False)

	detected_cyclist = relationship("DetectedCyclistModel", back_populates="equipment_colors")
