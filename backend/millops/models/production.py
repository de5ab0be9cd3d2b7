"""Production order models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from millops.core.workflow import ProductionStatus, QualityStatus
from millops.db.base import Base, CreatedAtMixin, IdMixin, TimestampMixin, UTCDateTime, status_enum, utcnow
from millops.models.validators import non_negative, positive


class ProductionOrder(Base, IdMixin, TimestampMixin):
    """A unit of milling work with a target output."""

    __tablename__ = "production_orders"

    order_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    product_type: Mapped[str] = mapped_column(String(100), nullable=False)  # maize_flour_2kg, ...
    target_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[ProductionStatus] = mapped_column(
        status_enum(ProductionStatus, "production_status"),
        default=ProductionStatus.SCHEDULED,
        nullable=False,
        index=True,
    )
    scheduled_date: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    started_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    materials: Mapped[list["ProductionRunMaterial"]] = relationship(
        "ProductionRunMaterial", back_populates="production_order"
    )
    finished_batches: Mapped[list["FinishedProductBatch"]] = relationship(
        "FinishedProductBatch", back_populates="production_order"
    )

    @validates("target_quantity")
    def _validate_target(self, key, value):
        return positive(key, value)

    @validates("completed_quantity")
    def _validate_completed(self, key, value):
        return non_negative(key, value)

    @property
    def progress_percent(self) -> float:
        """Completion share for display, capped at 100."""
        if not self.target_quantity:
            return 0.0
        done = (self.completed_quantity or 0) / self.target_quantity * 100
        return round(min(done, 100.0), 1)


class ProductionRunMaterial(Base, IdMixin):
    """Raw-material batch consumed by a production order."""

    __tablename__ = "production_run_materials"

    production_order_id: Mapped[str] = mapped_column(
        ForeignKey("production_orders.id"), nullable=False, index=True
    )
    batch_id: Mapped[str] = mapped_column(
        ForeignKey("raw_material_batches.id"), nullable=False, index=True
    )
    quantity_used: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    used_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow, nullable=False)

    production_order: Mapped["ProductionOrder"] = relationship("ProductionOrder", back_populates="materials")

    @validates("quantity_used")
    def _validate_quantity_used(self, key, value):
        return positive(key, value)


class FinishedProductBatch(Base, IdMixin, CreatedAtMixin):
    """Packed flour produced by an order."""

    __tablename__ = "finished_product_batches"

    batch_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    production_order_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("production_orders.id"), nullable=True, index=True
    )
    product_type: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    package_size: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # 2kg, 4kg
    quality_grade: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    quality_status: Mapped[QualityStatus] = mapped_column(
        status_enum(QualityStatus, "quality_status"),
        default=QualityStatus.PENDING,
        nullable=False,
    )
    storage_location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    production_order: Mapped[Optional["ProductionOrder"]] = relationship(
        "ProductionOrder", back_populates="finished_batches"
    )

    @validates("quantity")
    def _validate_quantity(self, key, value):
        return positive(key, value)
