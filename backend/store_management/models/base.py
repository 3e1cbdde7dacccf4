from __future__ import annotations

import uuid

from ..extensions import db
from ..time_utils import utcnow


class BaseEntity(db.Model):
    """
    Columns shared by every catalog entity.

    created_at / updated_at are stamped by the unit of work when a flush
    inserts or modifies a row; the column default only covers rows written
    outside of it (fixtures, shell sessions).
    """
    __abstract__ = True

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=True)
