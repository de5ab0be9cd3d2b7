"""Warehouse stock routes."""

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.warehouse import StockResponse, StockUpsert
from millops.services import warehouse_service

router = APIRouter()


@router.get("/stock", response_model=list[StockResponse])
@limiter.limit(READ_LIMIT)
def list_stock(request: Request, db: DbSession, principal: CurrentPrincipal):
    """Stock rows, most recently updated first."""
    return warehouse_service.list_warehouse_stock(db)


@router.put("/stock", response_model=StockResponse)
@limiter.limit(WRITE_LIMIT)
def upsert_stock(request: Request, stock: StockUpsert, db: DbSession, principal: CurrentPrincipal):
    """Create or overwrite the row for the item type and batch."""
    return warehouse_service.upsert_warehouse_stock(db, stock)
