"""Truck delivery and weighbridge models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from millops.core.workflow import DeliveryStatus
from millops.db.base import Base, CreatedAtMixin, IdMixin, TimestampMixin, UTCDateTime, status_enum, utcnow
from millops.models.validators import non_negative


class TruckDelivery(Base, IdMixin, TimestampMixin):
    """A truck-load of raw maize arriving from a supplier."""

    __tablename__ = "truck_deliveries"

    truck_registration: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    driver_name: Mapped[str] = mapped_column(String(255), nullable=False)
    driver_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    supplier_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("suppliers.id"), nullable=True, index=True
    )
    expected_quantity: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    actual_quantity: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    status: Mapped[DeliveryStatus] = mapped_column(
        status_enum(DeliveryStatus, "delivery_status"),
        default=DeliveryStatus.PENDING,
        nullable=False,
        index=True,
    )
    delivery_date: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False, index=True
    )

    # Relationships
    supplier: Mapped[Optional["Supplier"]] = relationship("Supplier", back_populates="deliveries")
    weighbridge_readings: Mapped[list["WeighbridgeReading"]] = relationship(
        "WeighbridgeReading", back_populates="delivery"
    )
    batches: Mapped[list["RawMaterialBatch"]] = relationship(
        "RawMaterialBatch", back_populates="delivery"
    )

    @validates("expected_quantity", "actual_quantity")
    def _validate_quantities(self, key, value):
        return non_negative(key, value)


class WeighbridgeReading(Base, IdMixin, CreatedAtMixin):
    """Gross/tare weighing of one delivery. Never updated after insert."""

    __tablename__ = "weighbridge_readings"

    delivery_id: Mapped[str] = mapped_column(
        ForeignKey("truck_deliveries.id"), nullable=False, index=True
    )
    gross_weight: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tare_weight: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    net_weight: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    operator_name: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    weighbridge_charges: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    ticket_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    reading_time: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False, index=True
    )

    delivery: Mapped["TruckDelivery"] = relationship("TruckDelivery", back_populates="weighbridge_readings")

    @validates("gross_weight", "tare_weight", "net_weight", "weighbridge_charges")
    def _validate_weights(self, key, value):
        return non_negative(key, value)


# Forward references
from millops.models.supplier import Supplier
from millops.models.batch import RawMaterialBatch
