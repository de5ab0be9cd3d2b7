"""Truck delivery and weighbridge operations.

Recording a weighbridge reading is the one place where a delivery's status is
set without consulting the transition table: the reading itself is the proof
that the truck was weighed, so the delivery is approved as part of the same
transaction.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from millops.core.exceptions import ConstraintError, NotFoundError, ValidationError
from millops.core.workflow import DeliveryStatus, can_transition, check_transition
from millops.db.base import utcnow
from millops.models.delivery import TruckDelivery, WeighbridgeReading
from millops.schemas.delivery import DeliveryCreate, WeighbridgeReadingCreate
from millops.services.persistence import transaction

logger = logging.getLogger(__name__)


# ==================== DELIVERIES ====================

def create_delivery(db: Session, data: DeliveryCreate) -> TruckDelivery:
    values = data.model_dump(exclude_none=True)
    with transaction(db, "Delivery"):
        delivery = TruckDelivery(**values)
        db.add(delivery)
    db.refresh(delivery)
    logger.info(f"Delivery registered: {delivery.truck_registration} ({delivery.id})")
    return delivery


def list_deliveries(db: Session) -> List[TruckDelivery]:
    return db.query(TruckDelivery).order_by(TruckDelivery.delivery_date.desc()).all()


def get_delivery(db: Session, delivery_id: str) -> Optional[TruckDelivery]:
    return db.get(TruckDelivery, delivery_id)


def get_pending_weighbridge_deliveries(db: Session) -> List[TruckDelivery]:
    """Deliveries still waiting to be weighed."""
    return (
        db.query(TruckDelivery)
        .filter(TruckDelivery.status == DeliveryStatus.PENDING)
        .order_by(TruckDelivery.delivery_date.desc())
        .all()
    )


def update_delivery_status(db: Session, delivery_id: str, status: DeliveryStatus) -> TruckDelivery:
    delivery = db.get(TruckDelivery, delivery_id)
    if delivery is None:
        raise NotFoundError("Delivery", delivery_id)

    with transaction(db, "Delivery"):
        delivery.status = check_transition("delivery", delivery.status, status)
        delivery.updated_at = utcnow()
    db.refresh(delivery)
    return delivery


# ==================== WEIGHBRIDGE ====================

def create_weighbridge_reading(db: Session, data: WeighbridgeReadingCreate) -> WeighbridgeReading:
    """Store a reading and approve its delivery in one commit.

    The net weight is derived here and never accepted from the caller. When
    the delivery has no actual quantity yet it takes the net weight.

    Raises:
        ValidationError: tare weight exceeds gross weight.
        ConstraintError: the delivery does not exist.
    """
    net_weight = data.gross_weight - data.tare_weight
    if net_weight < 0:
        raise ValidationError("tare_weight cannot exceed gross_weight")

    delivery = db.get(TruckDelivery, data.delivery_id)
    if delivery is None:
        raise ConstraintError("Weighbridge reading references a delivery that does not exist")

    with transaction(db, "Weighbridge reading"):
        reading = WeighbridgeReading(
            **data.model_dump(exclude_none=True),
            net_weight=net_weight,
        )
        db.add(reading)

        previous = delivery.status
        if previous != DeliveryStatus.APPROVED:
            if not can_transition(previous, DeliveryStatus.APPROVED):
                logger.warning(
                    f"Weighbridge reading forces delivery {delivery.id} "
                    f"from '{previous.value}' to 'approved'"
                )
            delivery.status = DeliveryStatus.APPROVED
        if delivery.actual_quantity is None:
            delivery.actual_quantity = net_weight
        delivery.updated_at = utcnow()

    db.refresh(reading)
    logger.info(
        f"Weighbridge reading {reading.id}: delivery {delivery.id} net {net_weight} kg"
    )
    return reading


def list_weighbridge_readings(db: Session) -> List[WeighbridgeReading]:
    """All readings with their delivery loaded, newest first."""
    return (
        db.query(WeighbridgeReading)
        .options(joinedload(WeighbridgeReading.delivery))
        .order_by(WeighbridgeReading.reading_time.desc())
        .all()
    )


def get_weighbridge_reading(db: Session, reading_id: str) -> Optional[WeighbridgeReading]:
    return (
        db.query(WeighbridgeReading)
        .options(joinedload(WeighbridgeReading.delivery))
        .filter(WeighbridgeReading.id == reading_id)
        .first()
    )


def get_weighbridge_reading_by_delivery(db: Session, delivery_id: str) -> Optional[WeighbridgeReading]:
    """Most recent reading for a delivery, if it has been weighed."""
    return (
        db.query(WeighbridgeReading)
        .filter(WeighbridgeReading.delivery_id == delivery_id)
        .order_by(WeighbridgeReading.reading_time.desc())
        .first()
    )
