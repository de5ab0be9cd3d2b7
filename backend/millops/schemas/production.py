"""Production order and finished batch schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from millops.core.workflow import ProductionStatus, QualityStatus


class RunMaterialCreate(BaseModel):
    """Raw batch consumed by an order."""

    batch_id: str
    quantity_used: Decimal = Field(..., gt=0)
    used_at: Optional[datetime] = None


class RunMaterialResponse(BaseModel):
    """Run material response schema."""

    id: str
    production_order_id: str
    batch_id: str
    quantity_used: Decimal
    used_at: datetime

    model_config = {"from_attributes": True}


class ProductionOrderCreate(BaseModel):
    """Production order creation. The creator is the logged-in user."""

    order_number: Optional[str] = Field(None, min_length=1, max_length=50)
    product_type: str = Field(..., min_length=1, max_length=100)
    target_quantity: int = Field(..., gt=0)
    scheduled_date: Optional[datetime] = None
    materials: List[RunMaterialCreate] = Field(default_factory=list)


class ProductionOrderResponse(BaseModel):
    """Production order response schema."""

    id: str
    order_number: str
    product_type: str
    target_quantity: int
    completed_quantity: int
    progress_percent: float
    status: ProductionStatus
    scheduled_date: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductionStatusUpdate(BaseModel):
    """Requested production status."""

    status: ProductionStatus


class ProductionProgressUpdate(BaseModel):
    """New cumulative completed quantity."""

    completed_quantity: int = Field(..., ge=0)


class FinishedProductBatchCreate(BaseModel):
    """Finished batch creation. The batch number is generated when omitted."""

    batch_number: Optional[str] = Field(None, min_length=1, max_length=50)
    production_order_id: Optional[str] = None
    product_type: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(..., gt=0)
    package_size: Optional[str] = None
    quality_grade: Optional[str] = None
    quality_status: QualityStatus = QualityStatus.PENDING
    storage_location: Optional[str] = None


class FinishedProductBatchResponse(BaseModel):
    """Finished batch response schema."""

    id: str
    batch_number: str
    production_order_id: Optional[str] = None
    product_type: str
    quantity: int
    package_size: Optional[str] = None
    quality_grade: Optional[str] = None
    quality_status: QualityStatus
    storage_location: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
