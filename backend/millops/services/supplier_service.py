"""Supplier operations."""

from typing import List, Optional

from sqlalchemy.orm import Session

from millops.models.supplier import Supplier
from millops.schemas.supplier import SupplierCreate
from millops.services.persistence import transaction


def create_supplier(db: Session, data: SupplierCreate) -> Supplier:
    with transaction(db, "Supplier"):
        supplier = Supplier(**data.model_dump())
        db.add(supplier)
    db.refresh(supplier)
    return supplier


def list_suppliers(db: Session) -> List[Supplier]:
    return db.query(Supplier).order_by(Supplier.created_at.desc()).all()


def get_supplier(db: Session, supplier_id: str) -> Optional[Supplier]:
    return db.get(Supplier, supplier_id)
