"""Supplier routes."""

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.exceptions import NotFoundError
from millops.core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.supplier import SupplierCreate, SupplierResponse
from millops.services import supplier_service

router = APIRouter()


@router.get("", response_model=list[SupplierResponse])
@limiter.limit(READ_LIMIT)
def list_suppliers(request: Request, db: DbSession, principal: CurrentPrincipal):
    """List all suppliers, newest first."""
    return supplier_service.list_suppliers(db)


@router.post("", response_model=SupplierResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
def create_supplier(request: Request, supplier: SupplierCreate, db: DbSession, principal: CurrentPrincipal):
    return supplier_service.create_supplier(db, supplier)


@router.get("/{supplier_id}", response_model=SupplierResponse)
@limiter.limit(READ_LIMIT)
def get_supplier(request: Request, supplier_id: str, db: DbSession, principal: CurrentPrincipal):
    supplier = supplier_service.get_supplier(db, supplier_id)
    if supplier is None:
        raise NotFoundError("Supplier", supplier_id)
    return supplier
