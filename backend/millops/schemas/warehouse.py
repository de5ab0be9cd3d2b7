"""Warehouse stock schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class StockUpsert(BaseModel):
    """Set the quantity on hand for an (item type, batch) pair."""

    item_type: str = Field(..., min_length=1, max_length=100)
    batch_id: Optional[str] = None
    location: str = Field(..., min_length=1, max_length=255)
    current_quantity: Decimal = Field(..., ge=0)
    reserved_quantity: Optional[Decimal] = Field(None, ge=0)
    max_capacity: Optional[Decimal] = Field(None, gt=0)


class StockResponse(BaseModel):
    """Warehouse stock response schema."""

    id: str
    item_type: str
    batch_id: Optional[str] = None
    location: str
    current_quantity: Decimal
    reserved_quantity: Decimal
    max_capacity: Optional[Decimal] = None
    updated_at: datetime

    model_config = {"from_attributes": True}
