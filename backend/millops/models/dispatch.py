"""Dispatch order models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from millops.core.workflow import DispatchStatus
from millops.db.base import Base, IdMixin, TimestampMixin, UTCDateTime, status_enum
from millops.models.validators import positive


class DispatchOrder(Base, IdMixin, TimestampMixin):
    """Outbound customer shipment."""

    __tablename__ = "dispatch_orders"

    order_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    customer_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    delivery_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    scheduled_date: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    dispatched_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    delivered_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    status: Mapped[DispatchStatus] = mapped_column(
        status_enum(DispatchStatus, "dispatch_status"),
        default=DispatchStatus.SCHEDULED,
        nullable=False,
        index=True,
    )
    created_by: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    items: Mapped[list["DispatchItem"]] = relationship(
        "DispatchItem", back_populates="dispatch_order", cascade="all, delete-orphan"
    )


class DispatchItem(Base, IdMixin):
    """A line of a dispatch order drawn from one finished batch."""

    __tablename__ = "dispatch_items"

    dispatch_order_id: Mapped[str] = mapped_column(
        ForeignKey("dispatch_orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    finished_batch_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("finished_product_batches.id"), nullable=True, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    dispatch_order: Mapped["DispatchOrder"] = relationship("DispatchOrder", back_populates="items")

    @validates("quantity")
    def _validate_quantity(self, key, value):
        return positive(key, value)
