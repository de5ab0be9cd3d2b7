"""Raw-material batch and quality check schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from millops.core.workflow import CheckType, QualityStatus


class RawMaterialBatchCreate(BaseModel):
    """Raw batch creation. The batch number is generated when omitted."""

    batch_number: Optional[str] = Field(None, min_length=1, max_length=50)
    delivery_id: Optional[str] = None
    quantity: Decimal = Field(..., gt=0)
    moisture_level: Optional[Decimal] = Field(None, ge=0, le=100)
    quality_status: QualityStatus = QualityStatus.PENDING
    storage_location: Optional[str] = None


class RawMaterialBatchResponse(BaseModel):
    """Raw batch response schema."""

    id: str
    batch_number: str
    delivery_id: Optional[str] = None
    quantity: Decimal
    moisture_level: Optional[Decimal] = None
    quality_status: QualityStatus
    storage_location: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class QualityStatusUpdate(BaseModel):
    """Requested batch quality status."""

    status: QualityStatus


class QualityCheckCreate(BaseModel):
    """Inspection result. The checker is the logged-in user."""

    batch_id: Optional[str] = None
    check_type: CheckType
    moisture_level: Optional[Decimal] = Field(None, ge=0, le=100)
    contamination: bool = False
    grain_integrity: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None
    status: QualityStatus = QualityStatus.PENDING


class QualityCheckResponse(BaseModel):
    """Quality check response schema."""

    id: str
    batch_id: Optional[str] = None
    check_type: CheckType
    moisture_level: Optional[Decimal] = None
    contamination: bool
    grain_integrity: Optional[str] = None
    notes: Optional[str] = None
    status: QualityStatus
    checked_by: Optional[str] = None
    checked_at: datetime

    model_config = {"from_attributes": True}
