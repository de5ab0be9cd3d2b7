"""Dispatch order schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from millops.core.workflow import DispatchStatus


class DispatchItemCreate(BaseModel):
    """A dispatch line."""

    finished_batch_id: Optional[str] = None
    quantity: int = Field(..., gt=0)


class DispatchItemResponse(DispatchItemCreate):
    """Dispatch line response schema."""

    id: str
    dispatch_order_id: str

    model_config = {"from_attributes": True}


class DispatchOrderCreate(BaseModel):
    """Dispatch order creation. The creator is the logged-in user."""

    order_number: Optional[str] = Field(None, min_length=1, max_length=50)
    customer_id: Optional[str] = None
    customer_name: str = Field(..., min_length=1, max_length=255)
    delivery_address: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    items: List[DispatchItemCreate] = Field(default_factory=list)


class DispatchOrderResponse(BaseModel):
    """Dispatch order response schema."""

    id: str
    order_number: str
    customer_id: Optional[str] = None
    customer_name: str
    delivery_address: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    dispatched_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    status: DispatchStatus
    created_by: Optional[str] = None
    items: List[DispatchItemResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DispatchStatusUpdate(BaseModel):
    """Requested dispatch status."""

    status: DispatchStatus
