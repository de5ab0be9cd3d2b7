"""Demo dataset for a Kenyan maize mill.

Loaded in a single transaction. Identifiers and business numbers are fixed,
so a second run fails with ``ConstraintError`` and leaves the first intact.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict

from sqlalchemy.orm import Session

from millops.core.auth import Principal
from millops.core.exceptions import ConstraintError
from millops.core.workflow import (
    CheckType,
    DeliveryStatus,
    DispatchStatus,
    ProductionStatus,
    QualityStatus,
)
from millops.models.batch import QualityCheck, RawMaterialBatch
from millops.models.delivery import TruckDelivery, WeighbridgeReading
from millops.models.dispatch import DispatchItem, DispatchOrder
from millops.models.production import FinishedProductBatch, ProductionOrder
from millops.models.supplier import Supplier
from millops.models.warehouse import WarehouseStock
from millops.services.persistence import transaction

logger = logging.getLogger(__name__)


def _at(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


SUPPLIERS = [
    dict(id="supplier-001", name="Green Valley Farms", contact_person="John Kamau",
         phone="+254712345678", email="contact@greenvalley.co.ke", address="Nakuru County, Kenya"),
    dict(id="supplier-002", name="Highlands Agriculture Co.", contact_person="Mary Wanjiku",
         phone="+254723456789", email="info@highlands-ag.com", address="Uasin Gishu County, Kenya"),
    dict(id="supplier-003", name="Maize Masters Ltd", contact_person="Peter Kipchoge",
         phone="+254734567890", email="sales@maizmasters.co.ke", address="Trans Nzoia County, Kenya"),
]

DELIVERIES = [
    dict(id="delivery-001", supplier_id="supplier-001", truck_registration="KCA 123A",
         driver_name="Samuel Mwangi", driver_phone="+254745678901",
         expected_quantity=Decimal("2500"), actual_quantity=Decimal("2500"),
         delivery_date=_at("2025-01-07T08:30:00"), status=DeliveryStatus.APPROVED),
    dict(id="delivery-002", supplier_id="supplier-002", truck_registration="KBZ 456B",
         driver_name="Grace Akinyi", driver_phone="+254756789012",
         expected_quantity=Decimal("3200"), actual_quantity=Decimal("3150"),
         delivery_date=_at("2025-01-07T10:15:00"), status=DeliveryStatus.APPROVED),
    dict(id="delivery-003", supplier_id="supplier-003", truck_registration="KDX 789C",
         driver_name="David Kiprotich", driver_phone="+254767890123",
         expected_quantity=Decimal("1800"),
         delivery_date=_at("2025-01-08T09:00:00"), status=DeliveryStatus.QUALITY_CHECK),
    dict(id="delivery-004", supplier_id="supplier-001", truck_registration="KCA 321D",
         driver_name="Jane Mutindi", driver_phone="+254778901234",
         expected_quantity=Decimal("2800"),
         delivery_date=_at("2025-01-08T11:30:00"), status=DeliveryStatus.PENDING),
]

READINGS = [
    dict(id="wb-001", delivery_id="delivery-001", gross_weight=Decimal("27500"),
         tare_weight=Decimal("25000"), operator_name="Robert Ochieng",
         reading_time=_at("2025-01-07T08:45:00")),
    dict(id="wb-002", delivery_id="delivery-002", gross_weight=Decimal("28150"),
         tare_weight=Decimal("25000"), operator_name="Robert Ochieng",
         reading_time=_at("2025-01-07T10:30:00")),
    dict(id="wb-003", delivery_id="delivery-003", gross_weight=Decimal("26800"),
         tare_weight=Decimal("25000"), operator_name="Sarah Chepkemoi",
         reading_time=_at("2025-01-08T09:15:00")),
]

RAW_BATCHES = [
    dict(id="batch-raw-001", delivery_id="delivery-001", batch_number="RM-2025-001",
         quantity=Decimal("2500"), moisture_level=Decimal("12.5"),
         quality_status=QualityStatus.PASSED, storage_location="Warehouse A - Section 1",
         created_at=_at("2025-01-07T09:00:00")),
    dict(id="batch-raw-002", delivery_id="delivery-002", batch_number="RM-2025-002",
         quantity=Decimal("3150"), moisture_level=Decimal("11.8"),
         quality_status=QualityStatus.PASSED, storage_location="Warehouse A - Section 2",
         created_at=_at("2025-01-07T10:45:00")),
    dict(id="batch-raw-003", delivery_id="delivery-003", batch_number="RM-2025-003",
         quantity=Decimal("1800"), moisture_level=Decimal("13.2"),
         quality_status=QualityStatus.PENDING, storage_location="Quarantine Area",
         created_at=_at("2025-01-08T09:30:00")),
]

QUALITY_CHECKS = [
    dict(id="qc-001", batch_id="batch-raw-001", moisture_level=Decimal("12.5"),
         contamination=False, grain_integrity="good", status=QualityStatus.PASSED,
         notes="Excellent quality maize, meets all standards. Inspector: Dr. Alice Wambui",
         checked_at=_at("2025-01-07T09:30:00")),
    dict(id="qc-002", batch_id="batch-raw-002", moisture_level=Decimal("11.8"),
         contamination=False, grain_integrity="good", status=QualityStatus.PASSED,
         notes="High quality batch, ready for processing. Inspector: Dr. Alice Wambui",
         checked_at=_at("2025-01-07T11:00:00")),
    dict(id="qc-003", batch_id="batch-raw-003", moisture_level=Decimal("13.2"),
         contamination=True, grain_integrity="fair", status=QualityStatus.IN_REVIEW,
         notes="Slight contamination detected, requires additional testing. Inspector: James Mutua",
         checked_at=_at("2025-01-08T10:00:00")),
]

PRODUCTION_ORDERS = [
    dict(id="prod-001", order_number="PO-2025-001", product_type="maize_flour_2kg",
         target_quantity=1000, completed_quantity=850, status=ProductionStatus.IN_PROGRESS,
         scheduled_date=_at("2025-01-07T12:00:00"), started_at=_at("2025-01-07T12:30:00")),
    dict(id="prod-002", order_number="PO-2025-002", product_type="maize_flour_4kg",
         target_quantity=500, completed_quantity=500, status=ProductionStatus.COMPLETED,
         scheduled_date=_at("2025-01-06T08:00:00"), started_at=_at("2025-01-06T08:30:00"),
         completed_at=_at("2025-01-06T14:30:00")),
    dict(id="prod-003", order_number="PO-2025-003", product_type="maize_flour_1kg",
         target_quantity=800, completed_quantity=0, status=ProductionStatus.SCHEDULED,
         scheduled_date=_at("2025-01-09T08:00:00")),
]

FINISHED_BATCHES = [
    dict(id="batch-finished-001", production_order_id="prod-002", batch_number="FP-2025-001",
         product_type="maize_flour_4kg", quantity=500, package_size="4kg", quality_grade="A",
         quality_status=QualityStatus.PASSED, storage_location="Warehouse B - Section 1",
         created_at=_at("2025-01-06T14:30:00")),
    dict(id="batch-finished-002", production_order_id="prod-001", batch_number="FP-2025-002",
         product_type="maize_flour_2kg", quantity=420, package_size="2kg", quality_grade="A",
         quality_status=QualityStatus.PASSED, storage_location="Warehouse B - Section 2",
         created_at=_at("2025-01-07T16:00:00")),
]

WAREHOUSE_STOCK = [
    dict(id="stock-001", item_type="maize_flour_4kg", location="Warehouse B - Section 1",
         current_quantity=Decimal("450"), reserved_quantity=Decimal("50"),
         max_capacity=Decimal("1000"), updated_at=_at("2025-01-07T16:30:00")),
    dict(id="stock-002", item_type="maize_flour_2kg", location="Warehouse B - Section 2",
         current_quantity=Decimal("380"), reserved_quantity=Decimal("40"),
         max_capacity=Decimal("1500"), updated_at=_at("2025-01-07T16:30:00")),
    dict(id="stock-003", item_type="raw_maize", location="Warehouse A",
         current_quantity=Decimal("3850"), reserved_quantity=Decimal("2100"),
         max_capacity=Decimal("10000"), updated_at=_at("2025-01-08T10:00:00")),
]

# in_transit is not a dispatch status; shipments on the road are "dispatched"
DISPATCH_ORDERS = [
    dict(id="dispatch-001", order_number="DO-2025-001", customer_name="Tuskys Supermarket",
         delivery_address="Westlands, Nairobi", scheduled_date=_at("2025-01-08T14:00:00"),
         status=DispatchStatus.DELIVERED, dispatched_at=_at("2025-01-08T14:30:00"),
         items=[("batch-finished-001", 50)]),
    dict(id="dispatch-002", order_number="DO-2025-002", customer_name="Naivas Supermarket",
         delivery_address="Karen, Nairobi", scheduled_date=_at("2025-01-08T16:00:00"),
         status=DispatchStatus.DISPATCHED, dispatched_at=_at("2025-01-08T16:15:00"),
         items=[("batch-finished-002", 40)]),
    dict(id="dispatch-003", order_number="DO-2025-003", customer_name="Carrefour Supermarket",
         delivery_address="Kilimani, Nairobi", scheduled_date=_at("2025-01-09T10:00:00"),
         status=DispatchStatus.SCHEDULED,
         items=[("batch-finished-001", 75), ("batch-finished-002", 60)]),
]


def seed_demo_data(db: Session, principal: Principal) -> Dict[str, int]:
    """Insert the demo dataset and return the row count per table."""
    if db.get(Supplier, SUPPLIERS[0]["id"]) is not None:
        raise ConstraintError("Demo data has already been loaded")

    with transaction(db, "Demo data"):
        db.add_all(Supplier(**row) for row in SUPPLIERS)
        db.flush()
        db.add_all(TruckDelivery(**row) for row in DELIVERIES)
        db.flush()
        db.add_all(
            WeighbridgeReading(**row, net_weight=row["gross_weight"] - row["tare_weight"])
            for row in READINGS
        )
        db.add_all(RawMaterialBatch(**row) for row in RAW_BATCHES)
        db.flush()
        db.add_all(
            QualityCheck(**row, check_type=CheckType.RAW_MATERIAL, checked_by=principal.user_id)
            for row in QUALITY_CHECKS
        )
        db.add_all(ProductionOrder(**row, created_by=principal.user_id) for row in PRODUCTION_ORDERS)
        db.flush()
        db.add_all(FinishedProductBatch(**row) for row in FINISHED_BATCHES)
        db.add_all(WarehouseStock(**row) for row in WAREHOUSE_STOCK)
        db.flush()
        for row in DISPATCH_ORDERS:
            values = {k: v for k, v in row.items() if k != "items"}
            order = DispatchOrder(**values, created_by=principal.user_id)
            order.items = [
                DispatchItem(finished_batch_id=batch_id, quantity=quantity)
                for batch_id, quantity in row["items"]
            ]
            db.add(order)

    counts = {
        "suppliers": len(SUPPLIERS),
        "deliveries": len(DELIVERIES),
        "weighbridge_readings": len(READINGS),
        "raw_material_batches": len(RAW_BATCHES),
        "quality_checks": len(QUALITY_CHECKS),
        "production_orders": len(PRODUCTION_ORDERS),
        "finished_product_batches": len(FINISHED_BATCHES),
        "warehouse_stock": len(WAREHOUSE_STOCK),
        "dispatch_orders": len(DISPATCH_ORDERS),
        "dispatch_items": sum(len(row["items"]) for row in DISPATCH_ORDERS),
    }
    logger.info(f"Demo data loaded by {principal.email}: {counts}")
    return counts
