"""Quality check routes."""

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.batch import QualityCheckCreate, QualityCheckResponse
from millops.services import quality_service

router = APIRouter()


@router.get("", response_model=list[QualityCheckResponse])
@limiter.limit(READ_LIMIT)
def list_checks(request: Request, db: DbSession, principal: CurrentPrincipal):
    return quality_service.list_quality_checks(db)


@router.post("", response_model=QualityCheckResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
def create_check(request: Request, check: QualityCheckCreate, db: DbSession, principal: CurrentPrincipal):
    """Record an inspection; the checker is the logged-in user."""
    return quality_service.create_quality_check(db, check, principal)
