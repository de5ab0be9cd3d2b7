"""Raw-material batch and quality check operations."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from millops.core.auth import Principal
from millops.core.exceptions import NotFoundError
from millops.core.workflow import QualityStatus, check_transition
from millops.db.base import utcnow
from millops.models.batch import QualityCheck, RawMaterialBatch
from millops.schemas.batch import QualityCheckCreate, RawMaterialBatchCreate
from millops.services.identifiers import RAW_BATCH_PREFIX, next_number
from millops.services.persistence import transaction

logger = logging.getLogger(__name__)


# ==================== RAW MATERIAL BATCHES ====================

def create_raw_material_batch(db: Session, data: RawMaterialBatchCreate) -> RawMaterialBatch:
    values = data.model_dump(exclude_none=True)
    if not values.get("batch_number"):
        values["batch_number"] = next_number(db, RawMaterialBatch, "batch_number", RAW_BATCH_PREFIX)

    with transaction(db, "Raw material batch"):
        batch = RawMaterialBatch(**values)
        db.add(batch)
    db.refresh(batch)
    return batch


def list_raw_material_batches(db: Session) -> List[RawMaterialBatch]:
    return db.query(RawMaterialBatch).order_by(RawMaterialBatch.created_at.desc()).all()


def get_raw_material_batch(db: Session, batch_id: str) -> Optional[RawMaterialBatch]:
    return db.get(RawMaterialBatch, batch_id)


def update_batch_quality_status(db: Session, batch_id: str, status: QualityStatus) -> RawMaterialBatch:
    batch = db.get(RawMaterialBatch, batch_id)
    if batch is None:
        raise NotFoundError("Raw material batch", batch_id)

    with transaction(db, "Raw material batch"):
        batch.quality_status = check_transition("raw material batch", batch.quality_status, status)
        batch.updated_at = utcnow()
    db.refresh(batch)
    return batch


# ==================== QUALITY CHECKS ====================

def create_quality_check(db: Session, data: QualityCheckCreate, principal: Principal) -> QualityCheck:
    """Record an inspection. The batch's own quality status is left alone."""
    with transaction(db, "Quality check"):
        check = QualityCheck(**data.model_dump(exclude_none=True), checked_by=principal.user_id)
        db.add(check)
    db.refresh(check)
    logger.info(
        f"Quality check {check.id} ({check.check_type.value}) recorded as "
        f"'{check.status.value}' by {principal.email}"
    )
    return check


def list_quality_checks(db: Session) -> List[QualityCheck]:
    return db.query(QualityCheck).order_by(QualityCheck.checked_at.desc()).all()


def list_quality_checks_for_batch(db: Session, batch_id: str) -> List[QualityCheck]:
    return (
        db.query(QualityCheck)
        .filter(QualityCheck.batch_id == batch_id)
        .order_by(QualityCheck.checked_at.desc())
        .all()
    )
