"""API routes."""

from fastapi import APIRouter

from millops.api.routes import (
    auth,
    dashboard,
    deliveries,
    dispatch_orders,
    finished_product_batches,
    production_orders,
    quality_checks,
    raw_material_batches,
    seed,
    suppliers,
    warehouse,
    weighbridge,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
api_router.include_router(deliveries.router, prefix="/deliveries", tags=["deliveries"])
api_router.include_router(weighbridge.router, prefix="/weighbridge-readings", tags=["weighbridge"])
api_router.include_router(raw_material_batches.router, prefix="/raw-material-batches", tags=["quality"])
api_router.include_router(quality_checks.router, prefix="/quality-checks", tags=["quality"])
api_router.include_router(production_orders.router, prefix="/production-orders", tags=["production"])
api_router.include_router(
    finished_product_batches.router, prefix="/finished-product-batches", tags=["production"]
)
api_router.include_router(warehouse.router, prefix="/warehouse", tags=["warehouse"])
api_router.include_router(dispatch_orders.router, prefix="/dispatch-orders", tags=["dispatch"])
api_router.include_router(seed.router, tags=["demo"])
