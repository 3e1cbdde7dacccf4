"""UTC helpers for audit timestamps."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

ISO_Z_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utcnow() -> datetime:
    """Audit clock: current UTC time, naive, as stored in created_at / updated_at."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """Second-precision ISO-8601 with a trailing Z. Naive values are read as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.strftime(ISO_Z_FORMAT)
