"""Finished product batch routes."""

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.production import FinishedProductBatchCreate, FinishedProductBatchResponse
from millops.services import production_service

router = APIRouter()


@router.get("", response_model=list[FinishedProductBatchResponse])
@limiter.limit(READ_LIMIT)
def list_batches(request: Request, db: DbSession, principal: CurrentPrincipal):
    return production_service.list_finished_product_batches(db)


@router.post("", response_model=FinishedProductBatchResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
def create_batch(
    request: Request, batch: FinishedProductBatchCreate, db: DbSession, principal: CurrentPrincipal
):
    return production_service.create_finished_product_batch(db, batch)
