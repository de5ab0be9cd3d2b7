"""Warehouse stock operations."""

import logging
from typing import List

from sqlalchemy.orm import Session

from millops.db.base import utcnow
from millops.models.warehouse import WarehouseStock
from millops.schemas.warehouse import StockUpsert
from millops.services.persistence import transaction

logger = logging.getLogger(__name__)


def list_warehouse_stock(db: Session) -> List[WarehouseStock]:
    return db.query(WarehouseStock).order_by(WarehouseStock.updated_at.desc()).all()


def upsert_warehouse_stock(db: Session, data: StockUpsert) -> WarehouseStock:
    """Insert or overwrite the row for ``(item_type, batch_id)``.

    A missing batch id is its own key, so there is at most one batchless row
    per item type. Optional fields left out of the request keep their stored
    values.
    """
    query = db.query(WarehouseStock).filter(WarehouseStock.item_type == data.item_type)
    if data.batch_id is None:
        query = query.filter(WarehouseStock.batch_id.is_(None))
    else:
        query = query.filter(WarehouseStock.batch_id == data.batch_id)
    stock = query.first()

    with transaction(db, "Warehouse stock"):
        if stock is None:
            stock = WarehouseStock(**data.model_dump(exclude_none=True))
            db.add(stock)
            logger.info(f"Stock row created: {data.item_type} at {data.location}")
        else:
            stock.location = data.location
            stock.current_quantity = data.current_quantity
            if data.reserved_quantity is not None:
                stock.reserved_quantity = data.reserved_quantity
            if data.max_capacity is not None:
                stock.max_capacity = data.max_capacity
            stock.updated_at = utcnow()
    db.refresh(stock)
    return stock
