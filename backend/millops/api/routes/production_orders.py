"""Production order routes."""

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.production import (
    ProductionOrderCreate,
    ProductionOrderResponse,
    ProductionProgressUpdate,
    ProductionStatusUpdate,
    RunMaterialCreate,
    RunMaterialResponse,
)
from millops.services import production_service

router = APIRouter()


@router.get("", response_model=list[ProductionOrderResponse])
@limiter.limit(READ_LIMIT)
def list_orders(request: Request, db: DbSession, principal: CurrentPrincipal):
    return production_service.list_production_orders(db)


@router.post("", response_model=ProductionOrderResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
def create_order(
    request: Request, order: ProductionOrderCreate, db: DbSession, principal: CurrentPrincipal
):
    return production_service.create_production_order(db, order, principal)


@router.patch("/{order_id}/status", response_model=ProductionOrderResponse)
@limiter.limit(WRITE_LIMIT)
def update_status(
    request: Request,
    order_id: str,
    body: ProductionStatusUpdate,
    db: DbSession,
    principal: CurrentPrincipal,
):
    return production_service.update_production_order_status(db, order_id, body.status)


@router.patch("/{order_id}/progress", response_model=ProductionOrderResponse)
@limiter.limit(WRITE_LIMIT)
def update_progress(
    request: Request,
    order_id: str,
    body: ProductionProgressUpdate,
    db: DbSession,
    principal: CurrentPrincipal,
):
    """Set how many units are done so far. Never above target, never backwards."""
    return production_service.update_production_order_progress(db, order_id, body.completed_quantity)


@router.get("/{order_id}/materials", response_model=list[RunMaterialResponse])
@limiter.limit(READ_LIMIT)
def list_materials(request: Request, order_id: str, db: DbSession, principal: CurrentPrincipal):
    return production_service.list_run_materials(db, order_id)


@router.post("/{order_id}/materials", response_model=RunMaterialResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
def record_material(
    request: Request,
    order_id: str,
    material: RunMaterialCreate,
    db: DbSession,
    principal: CurrentPrincipal,
):
    return production_service.record_run_material(db, order_id, material)
