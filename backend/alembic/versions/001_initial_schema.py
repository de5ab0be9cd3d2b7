"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-01-06 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DELIVERY_STATUS = ("pending", "quality_check", "approved", "rejected", "in_storage")
QUALITY_STATUS = ("pending", "passed", "failed", "in_review")
PRODUCTION_STATUS = ("scheduled", "in_progress", "completed", "cancelled")
DISPATCH_STATUS = ("scheduled", "dispatched", "delivered")
CHECK_TYPE = ("raw_material", "production", "packaging")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    quality_status = sa.Enum(*QUALITY_STATUS, name="quality_status", native_enum=False)

    # Users table
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("profile_image_url", sa.String(500), nullable=True),
        sa.Column("role", sa.String(100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    # Suppliers table
    op.create_table(
        "suppliers",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, index=True),
        sa.Column("contact_person", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        *_timestamps(),
    )

    # Truck deliveries
    op.create_table(
        "truck_deliveries",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("truck_registration", sa.String(50), nullable=False, index=True),
        sa.Column("driver_name", sa.String(255), nullable=False),
        sa.Column("driver_phone", sa.String(50), nullable=True),
        sa.Column("supplier_id", sa.String(36), sa.ForeignKey("suppliers.id"), nullable=True, index=True),
        sa.Column("expected_quantity", sa.Numeric(12, 2), nullable=True),
        sa.Column("actual_quantity", sa.Numeric(12, 2), nullable=True),
        sa.Column("status", sa.Enum(*DELIVERY_STATUS, name="delivery_status", native_enum=False), nullable=False, index=True),
        sa.Column("delivery_date", sa.DateTime(timezone=True), nullable=False, index=True),
        *_timestamps(),
    )

    # Weighbridge readings (append-only)
    op.create_table(
        "weighbridge_readings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("delivery_id", sa.String(36), sa.ForeignKey("truck_deliveries.id"), nullable=False, index=True),
        sa.Column("gross_weight", sa.Numeric(12, 2), nullable=False),
        sa.Column("tare_weight", sa.Numeric(12, 2), nullable=False),
        sa.Column("net_weight", sa.Numeric(12, 2), nullable=False),
        sa.Column("operator_name", sa.String(255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("weighbridge_charges", sa.Numeric(10, 2), nullable=True),
        sa.Column("ticket_number", sa.String(100), nullable=True),
        sa.Column("reading_time", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Raw material batches
    op.create_table(
        "raw_material_batches",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("batch_number", sa.String(50), unique=True, nullable=False, index=True),
        sa.Column("delivery_id", sa.String(36), sa.ForeignKey("truck_deliveries.id"), nullable=True, index=True),
        sa.Column("quantity", sa.Numeric(12, 2), nullable=False),
        sa.Column("moisture_level", sa.Numeric(5, 2), nullable=True),
        sa.Column("quality_status", quality_status, nullable=False),
        sa.Column("storage_location", sa.String(255), nullable=True),
        *_timestamps(),
    )

    # Quality checks (append-only)
    op.create_table(
        "quality_checks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("batch_id", sa.String(36), sa.ForeignKey("raw_material_batches.id"), nullable=True, index=True),
        sa.Column("check_type", sa.Enum(*CHECK_TYPE, name="check_type", native_enum=False), nullable=False),
        sa.Column("moisture_level", sa.Numeric(5, 2), nullable=True),
        sa.Column("contamination", sa.Boolean(), nullable=False),
        sa.Column("grain_integrity", sa.String(50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", quality_status, nullable=False, index=True),
        sa.Column("checked_by", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("checked_at", sa.DateTime(timezone=True), nullable=False, index=True),
    )

    # Production orders
    op.create_table(
        "production_orders",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("order_number", sa.String(50), unique=True, nullable=False, index=True),
        sa.Column("product_type", sa.String(100), nullable=False),
        sa.Column("target_quantity", sa.Integer(), nullable=False),
        sa.Column("completed_quantity", sa.Integer(), nullable=False),
        sa.Column("status", sa.Enum(*PRODUCTION_STATUS, name="production_status", native_enum=False), nullable=False, index=True),
        sa.Column("scheduled_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "production_run_materials",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("production_order_id", sa.String(36), sa.ForeignKey("production_orders.id"), nullable=False, index=True),
        sa.Column("batch_id", sa.String(36), sa.ForeignKey("raw_material_batches.id"), nullable=False, index=True),
        sa.Column("quantity_used", sa.Numeric(12, 2), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Finished product batches
    op.create_table(
        "finished_product_batches",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("batch_number", sa.String(50), unique=True, nullable=False, index=True),
        sa.Column("production_order_id", sa.String(36), sa.ForeignKey("production_orders.id"), nullable=True, index=True),
        sa.Column("product_type", sa.String(100), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("package_size", sa.String(20), nullable=True),
        sa.Column("quality_grade", sa.String(20), nullable=True),
        sa.Column("quality_status", quality_status, nullable=False),
        sa.Column("storage_location", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Warehouse stock
    op.create_table(
        "warehouse_stock",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("item_type", sa.String(100), nullable=False, index=True),
        sa.Column("batch_id", sa.String(36), nullable=True),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("current_quantity", sa.Numeric(12, 2), nullable=False),
        sa.Column("reserved_quantity", sa.Numeric(12, 2), nullable=False),
        sa.Column("max_capacity", sa.Numeric(12, 2), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, index=True),
        sa.UniqueConstraint("item_type", "batch_id", name="uq_warehouse_stock_item_batch"),
    )

    # Dispatch orders
    op.create_table(
        "dispatch_orders",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("order_number", sa.String(50), unique=True, nullable=False, index=True),
        sa.Column("customer_id", sa.String(100), nullable=True),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("delivery_address", sa.Text(), nullable=True),
        sa.Column("scheduled_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("dispatched_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("delivered_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.Enum(*DISPATCH_STATUS, name="dispatch_status", native_enum=False), nullable=False, index=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "dispatch_items",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("dispatch_order_id", sa.String(36), sa.ForeignKey("dispatch_orders.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("finished_batch_id", sa.String(36), sa.ForeignKey("finished_product_batches.id"), nullable=True, index=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    for table in (
        "dispatch_items",
        "dispatch_orders",
        "warehouse_stock",
        "finished_product_batches",
        "production_run_materials",
        "production_orders",
        "quality_checks",
        "raw_material_batches",
        "weighbridge_readings",
        "truck_deliveries",
        "suppliers",
        "users",
    ):
        op.drop_table(table)
