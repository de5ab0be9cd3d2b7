"""Dashboard metrics, computed on every request."""

from datetime import datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy import func
from sqlalchemy.orm import Session

from millops.core.config import settings
from millops.core.workflow import ProductionStatus, QualityStatus
from millops.models.batch import QualityCheck
from millops.models.production import FinishedProductBatch, ProductionOrder
from millops.models.warehouse import WarehouseStock
from millops.schemas.dashboard import DashboardMetrics


def start_of_local_day(now: Optional[datetime] = None, tz_name: Optional[str] = None) -> datetime:
    """Midnight of the current day in the mill's timezone, as a UTC datetime."""
    tz = ZoneInfo(tz_name or settings.timezone)
    local_now = (now or datetime.now(timezone.utc)).astimezone(tz)
    midnight = datetime.combine(local_now.date(), time.min, tzinfo=tz)
    return midnight.astimezone(timezone.utc)


def daily_production(db: Session, now: Optional[datetime] = None) -> int:
    since = start_of_local_day(now)
    total = (
        db.query(func.coalesce(func.sum(FinishedProductBatch.quantity), 0))
        .filter(FinishedProductBatch.created_at >= since)
        .scalar()
    )
    return int(total or 0)


def quality_score(db: Session) -> float:
    """Share of quality checks that passed, as a percentage; 0 with no checks."""
    total = db.query(func.count(QualityCheck.id)).scalar() or 0
    if total == 0:
        return 0.0
    passed = (
        db.query(func.count(QualityCheck.id))
        .filter(QualityCheck.status == QualityStatus.PASSED)
        .scalar()
        or 0
    )
    return passed / total * 100


def pending_orders(db: Session) -> int:
    return (
        db.query(func.count(ProductionOrder.id))
        .filter(ProductionOrder.status == ProductionStatus.SCHEDULED)
        .scalar()
        or 0
    )


def inventory_total(db: Session) -> float:
    total = db.query(func.coalesce(func.sum(WarehouseStock.current_quantity), 0)).scalar()
    return float(total or 0)


def inventory_level(db: Session) -> float:
    """Stock on hand as a percentage of declared capacity.

    Only rows with a ``max_capacity`` count. Clamped to [0, 100].
    """
    current, capacity = (
        db.query(
            func.coalesce(func.sum(WarehouseStock.current_quantity), 0),
            func.coalesce(func.sum(WarehouseStock.max_capacity), 0),
        )
        .filter(WarehouseStock.max_capacity.isnot(None))
        .one()
    )
    capacity = float(capacity or 0)
    if capacity <= 0:
        return 0.0
    level = float(current or 0) / capacity * 100
    return max(0.0, min(level, 100.0))


def get_dashboard_metrics(db: Session, now: Optional[datetime] = None) -> DashboardMetrics:
    return DashboardMetrics(
        daily_production=daily_production(db, now),
        quality_score=quality_score(db),
        pending_orders=pending_orders(db),
        inventory_level=inventory_level(db),
        inventory_total=inventory_total(db),
    )
