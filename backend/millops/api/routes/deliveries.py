"""Truck delivery routes."""

from typing import Optional

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.exceptions import NotFoundError
from millops.core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.delivery import (
    DeliveryCreate,
    DeliveryResponse,
    DeliveryStatusUpdate,
    WeighbridgeReadingResponse,
)
from millops.services import delivery_service

router = APIRouter()


@router.get("", response_model=list[DeliveryResponse])
@limiter.limit(READ_LIMIT)
def list_deliveries(request: Request, db: DbSession, principal: CurrentPrincipal):
    """List deliveries, most recent delivery date first."""
    return delivery_service.list_deliveries(db)


@router.post("", response_model=DeliveryResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
def create_delivery(request: Request, delivery: DeliveryCreate, db: DbSession, principal: CurrentPrincipal):
    return delivery_service.create_delivery(db, delivery)


# Must be registered before /{delivery_id}
@router.get("/pending-weighbridge", response_model=list[DeliveryResponse])
@limiter.limit(READ_LIMIT)
def list_pending_weighbridge(request: Request, db: DbSession, principal: CurrentPrincipal):
    """Deliveries waiting at the weighbridge."""
    return delivery_service.get_pending_weighbridge_deliveries(db)


@router.get("/{delivery_id}", response_model=DeliveryResponse)
@limiter.limit(READ_LIMIT)
def get_delivery(request: Request, delivery_id: str, db: DbSession, principal: CurrentPrincipal):
    delivery = delivery_service.get_delivery(db, delivery_id)
    if delivery is None:
        raise NotFoundError("Delivery", delivery_id)
    return delivery


@router.get("/{delivery_id}/weighbridge-reading", response_model=Optional[WeighbridgeReadingResponse])
@limiter.limit(READ_LIMIT)
def get_delivery_reading(request: Request, delivery_id: str, db: DbSession, principal: CurrentPrincipal):
    """The delivery's weighbridge reading, or null if it has not been weighed."""
    if delivery_service.get_delivery(db, delivery_id) is None:
        raise NotFoundError("Delivery", delivery_id)
    return delivery_service.get_weighbridge_reading_by_delivery(db, delivery_id)


@router.patch("/{delivery_id}/status", response_model=DeliveryResponse)
@limiter.limit(WRITE_LIMIT)
def update_delivery_status(
    request: Request,
    delivery_id: str,
    body: DeliveryStatusUpdate,
    db: DbSession,
    principal: CurrentPrincipal,
):
    return delivery_service.update_delivery_status(db, delivery_id, body.status)
