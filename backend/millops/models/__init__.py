"""SQLAlchemy models."""

from millops.models.user import User
from millops.models.supplier import Supplier
from millops.models.delivery import TruckDelivery, WeighbridgeReading
from millops.models.batch import RawMaterialBatch, QualityCheck
from millops.models.production import ProductionOrder, ProductionRunMaterial, FinishedProductBatch
from millops.models.warehouse import WarehouseStock
from millops.models.dispatch import DispatchOrder, DispatchItem

__all__ = [
    "User",
    "Supplier",
    "TruckDelivery",
    "WeighbridgeReading",
    "RawMaterialBatch",
    "QualityCheck",
    "ProductionOrder",
    "ProductionRunMaterial",
    "FinishedProductBatch",
    "WarehouseStock",
    "DispatchOrder",
    "DispatchItem",
]
