"""Demo data route."""

from typing import Dict

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.rate_limit import WRITE_LIMIT, limiter
from millops.db.session import DbSession
from millops.services import seed_service

router = APIRouter()


@router.post("/seed-demo-data", status_code=201)
@limiter.limit(WRITE_LIMIT)
def seed_demo_data(request: Request, db: DbSession, principal: CurrentPrincipal) -> Dict[str, object]:
    """Load the demo mill dataset. Fails if it is already loaded."""
    counts = seed_service.seed_demo_data(db, principal)
    return {"message": "Demo data seeded successfully", "created": counts}
