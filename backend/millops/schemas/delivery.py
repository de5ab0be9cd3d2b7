"""Truck delivery and weighbridge schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from millops.core.workflow import DeliveryStatus


class DeliveryBase(BaseModel):
    """Base delivery schema."""

    truck_registration: str = Field(..., min_length=1, max_length=50)
    driver_name: str = Field(..., min_length=1, max_length=255)
    driver_phone: Optional[str] = None
    supplier_id: Optional[str] = None
    expected_quantity: Optional[Decimal] = Field(None, ge=0)
    actual_quantity: Optional[Decimal] = Field(None, ge=0)


class DeliveryCreate(DeliveryBase):
    """Delivery registration. Status defaults to pending."""

    status: DeliveryStatus = DeliveryStatus.PENDING
    delivery_date: Optional[datetime] = None


class DeliveryResponse(DeliveryBase):
    """Delivery response schema."""

    id: str
    status: DeliveryStatus
    delivery_date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DeliveryStatusUpdate(BaseModel):
    """Requested delivery status."""

    status: DeliveryStatus


class WeighbridgeReadingCreate(BaseModel):
    """Operator-entered weights. Net weight is derived, never accepted."""

    delivery_id: str
    gross_weight: Decimal = Field(..., gt=0)
    tare_weight: Decimal = Field(..., ge=0)
    operator_name: str = Field(..., min_length=1, max_length=255)
    notes: Optional[str] = None
    weighbridge_charges: Optional[Decimal] = Field(None, ge=0)
    ticket_number: Optional[str] = None
    reading_time: Optional[datetime] = None


class WeighbridgeReadingResponse(BaseModel):
    """Weighbridge reading response schema."""

    id: str
    delivery_id: str
    gross_weight: Decimal
    tare_weight: Decimal
    net_weight: Decimal
    operator_name: str
    notes: Optional[str] = None
    weighbridge_charges: Optional[Decimal] = None
    ticket_number: Optional[str] = None
    reading_time: datetime
    created_at: datetime

    model_config = {"from_attributes": True}


class WeighbridgeReadingDetail(WeighbridgeReadingResponse):
    """Reading joined with the delivery it weighed."""

    delivery: Optional[DeliveryResponse] = None
