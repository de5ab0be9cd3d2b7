"""Dispatch order operations."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from millops.core.auth import Principal
from millops.core.exceptions import NotFoundError
from millops.core.workflow import DispatchStatus, check_transition
from millops.db.base import utcnow
from millops.models.dispatch import DispatchItem, DispatchOrder
from millops.schemas.dispatch import DispatchOrderCreate
from millops.services.identifiers import DISPATCH_ORDER_PREFIX, next_number
from millops.services.persistence import transaction

logger = logging.getLogger(__name__)


def create_dispatch_order(
    db: Session, data: DispatchOrderCreate, principal: Principal
) -> DispatchOrder:
    """Create the order together with its items in one commit."""
    values = data.model_dump(exclude_none=True, exclude={"items"})
    if not values.get("order_number"):
        values["order_number"] = next_number(db, DispatchOrder, "order_number", DISPATCH_ORDER_PREFIX)

    with transaction(db, "Dispatch order"):
        order = DispatchOrder(**values, created_by=principal.user_id)
        order.items = [DispatchItem(**item.model_dump()) for item in data.items]
        db.add(order)
    db.refresh(order)
    logger.info(
        f"Dispatch order {order.order_number} for {order.customer_name} "
        f"with {len(order.items)} item(s)"
    )
    return order


def list_dispatch_orders(db: Session) -> List[DispatchOrder]:
    return (
        db.query(DispatchOrder)
        .options(selectinload(DispatchOrder.items))
        .order_by(DispatchOrder.created_at.desc())
        .all()
    )


def get_dispatch_order(db: Session, order_id: str) -> Optional[DispatchOrder]:
    return db.get(DispatchOrder, order_id)


def update_dispatch_order_status(
    db: Session, order_id: str, status: DispatchStatus
) -> DispatchOrder:
    order = db.get(DispatchOrder, order_id)
    if order is None:
        raise NotFoundError("Dispatch order", order_id)

    with transaction(db, "Dispatch order"):
        order.status = check_transition("dispatch order", order.status, status)
        now = utcnow()
        if status == DispatchStatus.DISPATCHED:
            order.dispatched_at = now
        elif status == DispatchStatus.DELIVERED:
            order.delivered_at = now
        order.updated_at = now
    db.refresh(order)
    return order
