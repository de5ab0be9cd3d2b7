"""Raw-material batch and quality check models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from millops.core.workflow import CheckType, QualityStatus
from millops.db.base import Base, IdMixin, TimestampMixin, UTCDateTime, status_enum, utcnow
from millops.models.validators import percentage, positive


class RawMaterialBatch(Base, IdMixin, TimestampMixin):
    """Maize from an approved delivery, tracked through quality control."""

    __tablename__ = "raw_material_batches"

    batch_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    delivery_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("truck_deliveries.id"), nullable=True, index=True
    )
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    moisture_level: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    quality_status: Mapped[QualityStatus] = mapped_column(
        status_enum(QualityStatus, "quality_status"),
        default=QualityStatus.PENDING,
        nullable=False,
    )
    storage_location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Relationships
    delivery: Mapped[Optional["TruckDelivery"]] = relationship("TruckDelivery", back_populates="batches")
    quality_checks: Mapped[list["QualityCheck"]] = relationship("QualityCheck", back_populates="batch")

    @validates("quantity")
    def _validate_quantity(self, key, value):
        return positive(key, value)

    @validates("moisture_level")
    def _validate_moisture(self, key, value):
        return percentage(key, value)


class QualityCheck(Base, IdMixin):
    """Recorded inspection outcome. Append-only audit trail."""

    __tablename__ = "quality_checks"

    batch_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("raw_material_batches.id"), nullable=True, index=True
    )
    check_type: Mapped[CheckType] = mapped_column(
        status_enum(CheckType, "check_type"), nullable=False
    )
    moisture_level: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    contamination: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    grain_integrity: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[QualityStatus] = mapped_column(
        status_enum(QualityStatus, "quality_status"),
        default=QualityStatus.PENDING,
        nullable=False,
        index=True,
    )
    checked_by: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    checked_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False, index=True
    )

    batch: Mapped[Optional["RawMaterialBatch"]] = relationship("RawMaterialBatch", back_populates="quality_checks")

    @validates("moisture_level")
    def _validate_moisture(self, key, value):
        return percentage(key, value)


# Forward references
from millops.models.delivery import TruckDelivery
