"""Status enumerations and transition tables for the mill workflow.

A delivery is weighed and checked, its maize becomes raw-material batches,
production orders turn batches into finished flour, and dispatch orders ship
it. Every status field in that chain is a closed enum here, and the only way
to move between values is through ``check_transition``.
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet, TypeVar

from millops.core.exceptions import IllegalTransitionError

logger = logging.getLogger(__name__)


class DeliveryStatus(str, Enum):
    """Lifecycle of a truck delivery."""

    PENDING = "pending"
    QUALITY_CHECK = "quality_check"
    APPROVED = "approved"
    REJECTED = "rejected"
    IN_STORAGE = "in_storage"


class QualityStatus(str, Enum):
    """Outcome of a quality check, also the quality state of a batch."""

    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    IN_REVIEW = "in_review"


class ProductionStatus(str, Enum):
    """Lifecycle of a production order."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DispatchStatus(str, Enum):
    """Lifecycle of an outbound dispatch order."""

    SCHEDULED = "scheduled"
    DISPATCHED = "dispatched"
    DELIVERED = "delivered"


class CheckType(str, Enum):
    """Stage of the process a quality check inspects."""

    RAW_MATERIAL = "raw_material"
    PRODUCTION = "production"
    PACKAGING = "packaging"


DELIVERY_TRANSITIONS: Dict[DeliveryStatus, FrozenSet[DeliveryStatus]] = {
    DeliveryStatus.PENDING: frozenset({DeliveryStatus.QUALITY_CHECK}),
    DeliveryStatus.QUALITY_CHECK: frozenset({DeliveryStatus.APPROVED, DeliveryStatus.REJECTED}),
    DeliveryStatus.APPROVED: frozenset({DeliveryStatus.IN_STORAGE}),
    DeliveryStatus.REJECTED: frozenset(),
    DeliveryStatus.IN_STORAGE: frozenset(),
}

BATCH_QUALITY_TRANSITIONS: Dict[QualityStatus, FrozenSet[QualityStatus]] = {
    QualityStatus.PENDING: frozenset({
        QualityStatus.IN_REVIEW, QualityStatus.PASSED, QualityStatus.FAILED,
    }),
    QualityStatus.IN_REVIEW: frozenset({QualityStatus.PASSED, QualityStatus.FAILED}),
    # failed batches may be re-tested
    QualityStatus.FAILED: frozenset({QualityStatus.IN_REVIEW}),
    QualityStatus.PASSED: frozenset(),
}

PRODUCTION_TRANSITIONS: Dict[ProductionStatus, FrozenSet[ProductionStatus]] = {
    ProductionStatus.SCHEDULED: frozenset({ProductionStatus.IN_PROGRESS, ProductionStatus.CANCELLED}),
    ProductionStatus.IN_PROGRESS: frozenset({ProductionStatus.COMPLETED, ProductionStatus.CANCELLED}),
    ProductionStatus.COMPLETED: frozenset(),
    ProductionStatus.CANCELLED: frozenset(),
}

DISPATCH_TRANSITIONS: Dict[DispatchStatus, FrozenSet[DispatchStatus]] = {
    DispatchStatus.SCHEDULED: frozenset({DispatchStatus.DISPATCHED}),
    DispatchStatus.DISPATCHED: frozenset({DispatchStatus.DELIVERED}),
    DispatchStatus.DELIVERED: frozenset(),
}

_TABLES = {
    DeliveryStatus: DELIVERY_TRANSITIONS,
    QualityStatus: BATCH_QUALITY_TRANSITIONS,
    ProductionStatus: PRODUCTION_TRANSITIONS,
    DispatchStatus: DISPATCH_TRANSITIONS,
}

S = TypeVar("S", bound=Enum)


def allowed_transitions(current: S) -> FrozenSet[S]:
    """Statuses reachable in one step from *current*."""
    return _TABLES[type(current)][current]


def can_transition(current: S, requested: S) -> bool:
    return requested in allowed_transitions(current)


def check_transition(entity: str, current: S, requested: S) -> S:
    """Return *requested* if it is reachable from *current*.

    Raises:
        IllegalTransitionError: if the table does not list the move.
            Re-applying the current status is also rejected.
    """
    if not can_transition(current, requested):
        raise IllegalTransitionError(entity, current.value, requested.value)
    logger.info(f"{entity}: {current.value} -> {requested.value}")
    return requested
