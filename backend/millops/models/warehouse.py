"""Warehouse stock model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, validates

from millops.db.base import Base, IdMixin, UTCDateTime, utcnow
from millops.models.validators import non_negative, positive


class WarehouseStock(Base, IdMixin):
    """Quantity on hand of one item type (optionally one batch) at a location.

    ``batch_id`` points at either a raw or a finished batch, so it carries no
    foreign key.
    """

    __tablename__ = "warehouse_stock"
    __table_args__ = (
        UniqueConstraint("item_type", "batch_id", name="uq_warehouse_stock_item_batch"),
    )

    item_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)  # raw_maize, maize_flour_2kg
    batch_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    current_quantity: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    reserved_quantity: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    max_capacity: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
        index=True,
    )

    @validates("current_quantity", "reserved_quantity")
    def _validate_quantities(self, key, value):
        return non_negative(key, value)

    @validates("max_capacity")
    def _validate_capacity(self, key, value):
        return positive(key, value)
