"""Dashboard schemas."""

from pydantic import BaseModel


class DashboardMetrics(BaseModel):
    """Headline figures for the dashboard cards."""

    daily_production: int
    quality_score: float
    pending_orders: int
    inventory_level: float
    inventory_total: float
