"""Raw-material batch routes."""

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.exceptions import NotFoundError
from millops.core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.batch import (
    QualityCheckResponse,
    QualityStatusUpdate,
    RawMaterialBatchCreate,
    RawMaterialBatchResponse,
)
from millops.services import quality_service

router = APIRouter()


@router.get("", response_model=list[RawMaterialBatchResponse])
@limiter.limit(READ_LIMIT)
def list_batches(request: Request, db: DbSession, principal: CurrentPrincipal):
    return quality_service.list_raw_material_batches(db)


@router.post("", response_model=RawMaterialBatchResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
def create_batch(
    request: Request, batch: RawMaterialBatchCreate, db: DbSession, principal: CurrentPrincipal
):
    """Create a batch; a batch number is generated when none is given."""
    return quality_service.create_raw_material_batch(db, batch)


@router.get("/{batch_id}/quality-checks", response_model=list[QualityCheckResponse])
@limiter.limit(READ_LIMIT)
def list_batch_checks(request: Request, batch_id: str, db: DbSession, principal: CurrentPrincipal):
    if quality_service.get_raw_material_batch(db, batch_id) is None:
        raise NotFoundError("Raw material batch", batch_id)
    return quality_service.list_quality_checks_for_batch(db, batch_id)


@router.patch("/{batch_id}/quality-status", response_model=RawMaterialBatchResponse)
@limiter.limit(WRITE_LIMIT)
def update_quality_status(
    request: Request,
    batch_id: str,
    body: QualityStatusUpdate,
    db: DbSession,
    principal: CurrentPrincipal,
):
    return quality_service.update_batch_quality_status(db, batch_id, body.status)
