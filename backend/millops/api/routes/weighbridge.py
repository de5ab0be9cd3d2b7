"""Weighbridge routes."""

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.exceptions import NotFoundError
from millops.core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.delivery import WeighbridgeReadingCreate, WeighbridgeReadingDetail
from millops.services import delivery_service

router = APIRouter()


@router.get("", response_model=list[WeighbridgeReadingDetail])
@limiter.limit(READ_LIMIT)
def list_readings(request: Request, db: DbSession, principal: CurrentPrincipal):
    """All readings with their delivery, newest reading first."""
    return delivery_service.list_weighbridge_readings(db)


@router.post("", response_model=WeighbridgeReadingDetail, status_code=201)
@limiter.limit(WRITE_LIMIT)
def create_reading(
    request: Request, reading: WeighbridgeReadingCreate, db: DbSession, principal: CurrentPrincipal
):
    """Record a weighing. The delivery is approved in the same transaction."""
    return delivery_service.create_weighbridge_reading(db, reading)


@router.get("/{reading_id}", response_model=WeighbridgeReadingDetail)
@limiter.limit(READ_LIMIT)
def get_reading(request: Request, reading_id: str, db: DbSession, principal: CurrentPrincipal):
    reading = delivery_service.get_weighbridge_reading(db, reading_id)
    if reading is None:
        raise NotFoundError("Weighbridge reading", reading_id)
    return reading
