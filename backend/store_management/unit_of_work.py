"""
Unit of Work: the transactional commit boundary for one request.

Repositories stage changes on the shared session; nothing is durable until
commit(). Audit timestamps are stamped here, on every flush, so services
never set created_at / updated_at themselves:

- rows being inserted get created_at = now (UTC) and updated_at = None
- rows with a net attribute change get updated_at = now (UTC)

A failed commit rolls the whole batch back and raises a typed error
(ConstraintViolationError for unique-index violations, StorageError for
anything else). No retries happen here.
"""
from __future__ import annotations

import logging

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_dirty

from .errors import translate_storage_error
from .models import BaseEntity
from .time_utils import utcnow

logger = logging.getLogger(__name__)

_CHANGED_ROWS_KEY = "store_management.changed_rows"
_TOUCHED_KEY = "store_management.touched"


def _is_net_modified(session, obj) -> bool:
    return obj not in session.deleted and session.is_modified(obj, include_collections=False)


@event.listens_for(Session, "before_flush")
def _stamp_audit_fields(session, flush_context, instances):
    now = utcnow()
    touched = session.info.pop(_TOUCHED_KEY, set())

    for obj in session.new:
        if isinstance(obj, BaseEntity):
            obj.created_at = now
            obj.updated_at = None

    for obj in session.dirty:
        if not isinstance(obj, BaseEntity) or obj in session.deleted:
            continue
        if obj in touched or _is_net_modified(session, obj):
            obj.updated_at = now


@event.listens_for(Session, "after_flush")
def _count_flushed_rows(session, flush_context):
    # new / dirty / deleted still describe the pre-flush state here.
    changed = len(session.new) + len(session.deleted)
    changed += sum(1 for obj in session.dirty if _is_net_modified(session, obj))
    session.info[_CHANGED_ROWS_KEY] = session.info.get(_CHANGED_ROWS_KEY, 0) + changed


@event.listens_for(Session, "after_soft_rollback")
def _reset_flushed_rows(session, previous_transaction):
    session.info.pop(_CHANGED_ROWS_KEY, None)
    session.info.pop(_TOUCHED_KEY, None)


class UnitOfWork:
    def __init__(self, session):
        self.session = session

    def commit(self) -> int:
        """
        Flush and commit every staged change atomically.

        Returns the number of rows the session inserted, updated or deleted
        in this unit of work (rows removed by ON DELETE CASCADE are not
        counted).
        """
        try:
            self.session.flush()
            changed = self.session.info.pop(_CHANGED_ROWS_KEY, 0)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            error = translate_storage_error(exc)
            logger.warning("Commit rejected by storage: %s", error)
            raise error from exc
        return changed

    def rollback(self) -> None:
        """
        Discard the current unit of work.

        Pending inserts are expunged, deleted rows become persistent again and
        every loaded entity is expired so it reloads its committed values.
        """
        self.session.rollback()


def mark_modified(session, entity) -> None:
    """
    Stage an entity as updated even when no column value actually changed.

    Full updates and patches always count as a mutation, so the next flush
    stamps updated_at on it.
    """
    flag_dirty(entity)
    session.info.setdefault(_TOUCHED_KEY, set()).add(entity)
