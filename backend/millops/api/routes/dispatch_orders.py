"""Dispatch order routes."""

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.dispatch import DispatchOrderCreate, DispatchOrderResponse, DispatchStatusUpdate
from millops.services import dispatch_service

router = APIRouter()


@router.get("", response_model=list[DispatchOrderResponse])
@limiter.limit(READ_LIMIT)
def list_orders(request: Request, db: DbSession, principal: CurrentPrincipal):
    return dispatch_service.list_dispatch_orders(db)


@router.post("", response_model=DispatchOrderResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
def create_order(
    request: Request, order: DispatchOrderCreate, db: DbSession, principal: CurrentPrincipal
):
    """Create a dispatch order with its items."""
    return dispatch_service.create_dispatch_order(db, order, principal)


@router.patch("/{order_id}/status", response_model=DispatchOrderResponse)
@limiter.limit(WRITE_LIMIT)
def update_status(
    request: Request,
    order_id: str,
    body: DispatchStatusUpdate,
    db: DbSession,
    principal: CurrentPrincipal,
):
    return dispatch_service.update_dispatch_order_status(db, order_id, body.status)
