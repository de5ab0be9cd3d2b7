"""Business identifiers of the form PREFIX-YYYY-NNN.

Numbers run per prefix and per year. The next number is one above the
highest existing number for that year, so gaps left by deleted rows or by
hand-entered identifiers are never refilled.
"""

import re
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from millops.core.config import settings

RAW_BATCH_PREFIX = "RM"
FINISHED_BATCH_PREFIX = "FP"
PRODUCTION_ORDER_PREFIX = "PO"
DISPATCH_ORDER_PREFIX = "DO"

DEFAULT_WIDTH = 3


def current_year() -> int:
    return datetime.now(ZoneInfo(settings.timezone)).year


def format_number(prefix: str, year: int, sequence: int, width: int = DEFAULT_WIDTH) -> str:
    return f"{prefix}-{year}-{str(sequence).zfill(width)}"


def next_number(
    db: Session,
    model,
    field: str,
    prefix: str,
    year: Optional[int] = None,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Next free identifier for *prefix* in *year* (default: this year).

    Example: with ``RM-2025-001`` and ``RM-2025-007`` stored, returns
    ``RM-2025-008``.
    """
    year = year or current_year()
    col = getattr(model, field)
    base = f"{prefix}-{year}-"
    pat = re.compile(rf"^{re.escape(base)}(\d+)$")
    max_n = 0
    for (code,) in db.query(col).filter(col.like(f"{base}%")).all():
        m = pat.match(code or "")
        if m:
            max_n = max(max_n, int(m.group(1)))
    return format_number(prefix, year, max_n + 1, width)
