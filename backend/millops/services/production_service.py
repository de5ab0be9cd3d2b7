"""Production order, run material and finished batch operations."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from millops.core.auth import Principal
from millops.core.exceptions import NotFoundError, ValidationError
from millops.core.workflow import ProductionStatus, check_transition
from millops.db.base import utcnow
from millops.models.production import FinishedProductBatch, ProductionOrder, ProductionRunMaterial
from millops.schemas.production import (
    FinishedProductBatchCreate,
    ProductionOrderCreate,
    RunMaterialCreate,
)
from millops.services.identifiers import FINISHED_BATCH_PREFIX, PRODUCTION_ORDER_PREFIX, next_number
from millops.services.persistence import transaction

logger = logging.getLogger(__name__)


# ==================== PRODUCTION ORDERS ====================

def create_production_order(
    db: Session, data: ProductionOrderCreate, principal: Principal
) -> ProductionOrder:
    """Create an order and any run materials it lists, in one commit."""
    values = data.model_dump(exclude_none=True, exclude={"materials"})
    if not values.get("order_number"):
        values["order_number"] = next_number(
            db, ProductionOrder, "order_number", PRODUCTION_ORDER_PREFIX
        )

    with transaction(db, "Production order"):
        order = ProductionOrder(**values, created_by=principal.user_id)
        db.add(order)
        db.flush()
        for material in data.materials:
            db.add(ProductionRunMaterial(
                production_order_id=order.id,
                **material.model_dump(exclude_none=True),
            ))
    db.refresh(order)
    logger.info(f"Production order {order.order_number} created by {principal.email}")
    return order


def list_production_orders(db: Session) -> List[ProductionOrder]:
    return db.query(ProductionOrder).order_by(ProductionOrder.created_at.desc()).all()


def get_production_order(db: Session, order_id: str) -> Optional[ProductionOrder]:
    return db.get(ProductionOrder, order_id)


def _require_order(db: Session, order_id: str) -> ProductionOrder:
    order = db.get(ProductionOrder, order_id)
    if order is None:
        raise NotFoundError("Production order", order_id)
    return order


def update_production_order_status(
    db: Session, order_id: str, status: ProductionStatus
) -> ProductionOrder:
    """Apply a checked status change and stamp start or completion time."""
    order = _require_order(db, order_id)

    with transaction(db, "Production order"):
        order.status = check_transition("production order", order.status, status)
        now = utcnow()
        if status == ProductionStatus.IN_PROGRESS:
            order.started_at = now
        elif status == ProductionStatus.COMPLETED:
            order.completed_at = now
        order.updated_at = now
    db.refresh(order)
    return order


def update_production_order_progress(
    db: Session, order_id: str, completed_quantity: int
) -> ProductionOrder:
    """Set the cumulative completed quantity. Status is not changed.

    Raises:
        ValidationError: the value exceeds the target or goes backwards.
    """
    order = _require_order(db, order_id)

    if completed_quantity > order.target_quantity:
        raise ValidationError(
            f"completed_quantity {completed_quantity} exceeds target_quantity {order.target_quantity}"
        )
    if completed_quantity < order.completed_quantity:
        raise ValidationError(
            f"completed_quantity cannot decrease from {order.completed_quantity} to {completed_quantity}"
        )

    with transaction(db, "Production order"):
        order.completed_quantity = completed_quantity
        order.updated_at = utcnow()
    db.refresh(order)
    return order


# ==================== RUN MATERIALS ====================

def record_run_material(
    db: Session, order_id: str, data: RunMaterialCreate
) -> ProductionRunMaterial:
    _require_order(db, order_id)

    with transaction(db, "Run material"):
        material = ProductionRunMaterial(
            production_order_id=order_id,
            **data.model_dump(exclude_none=True),
        )
        db.add(material)
    db.refresh(material)
    return material


def list_run_materials(db: Session, order_id: str) -> List[ProductionRunMaterial]:
    _require_order(db, order_id)
    return (
        db.query(ProductionRunMaterial)
        .filter(ProductionRunMaterial.production_order_id == order_id)
        .order_by(ProductionRunMaterial.used_at.desc())
        .all()
    )


# ==================== FINISHED PRODUCT BATCHES ====================

def create_finished_product_batch(
    db: Session, data: FinishedProductBatchCreate
) -> FinishedProductBatch:
    values = data.model_dump(exclude_none=True)
    if not values.get("batch_number"):
        values["batch_number"] = next_number(
            db, FinishedProductBatch, "batch_number", FINISHED_BATCH_PREFIX
        )

    with transaction(db, "Finished product batch"):
        batch = FinishedProductBatch(**values)
        db.add(batch)
    db.refresh(batch)
    return batch


def list_finished_product_batches(db: Session) -> List[FinishedProductBatch]:
    return db.query(FinishedProductBatch).order_by(FinishedProductBatch.created_at.desc()).all()
