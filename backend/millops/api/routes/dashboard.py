"""Dashboard routes."""

from fastapi import APIRouter, Request

from millops.core.auth import CurrentPrincipal
from millops.core.rate_limit import READ_LIMIT, limiter
from millops.db.session import DbSession
from millops.schemas.dashboard import DashboardMetrics
from millops.services import dashboard_service

router = APIRouter()


@router.get("/metrics", response_model=DashboardMetrics)
@limiter.limit(READ_LIMIT)
def get_metrics(request: Request, db: DbSession, principal: CurrentPrincipal):
    return dashboard_service.get_dashboard_metrics(db)
