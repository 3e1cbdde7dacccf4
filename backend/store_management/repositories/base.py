from __future__ import annotations

import logging
import uuid
from typing import Generic, Iterable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from ..errors import translate_storage_error
from ..models import BaseEntity
from ..unit_of_work import mark_modified

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)


def coerce_id(value) -> Optional[uuid.UUID]:
    """Accept UUIDs or their string form; anything else cannot match a row."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class Repository(Generic[T]):
    """
    Data access for one entity type over a tracked session.

    Reads return entities or None; writes only stage changes, except add()
    which flushes the INSERT immediately so a duplicate code surfaces as a
    ConstraintViolationError from the insert itself. Nothing is committed
    here; see UnitOfWork.commit().
    """

    model: type[T]
    entity_name: str = "Entity"

    def __init__(self, session):
        self.session = session

    def _query(self, options: Iterable = ()):
        query = self.session.query(self.model)
        for option in options:
            query = query.options(option)
        return query

    def _eager(self, include_parent: bool, include_children: bool) -> list:
        return []

    def get_by_id(
        self,
        entity_id: uuid.UUID,
        *,
        include_parent: bool = True,
        include_children: bool = False,
    ) -> Optional[T]:
        entity_id = coerce_id(entity_id)
        if entity_id is None:
            return None
        options = self._eager(include_parent, include_children)
        return self._query(options).filter(self.model.id == entity_id).first()

    def get_all(self) -> list[T]:
        return self._query(self._eager(True, False)).order_by(self.model.code.asc()).all()

    def get_active(self) -> list[T]:
        return (
            self._query(self._eager(True, False))
            .filter(self.model.is_active.is_(True))
            .order_by(self.model.code.asc())
            .all()
        )

    def exists(self, entity_id: uuid.UUID) -> bool:
        entity_id = coerce_id(entity_id)
        if entity_id is None:
            return False
        return self.session.query(self.model.id).filter(self.model.id == entity_id).first() is not None

    def count(self) -> int:
        return self.session.query(self.model).count()

    def add(self, entity: T) -> T:
        self.session.add(entity)
        try:
            self.session.flush()
        except SQLAlchemyError as exc:
            self.session.rollback()
            error = translate_storage_error(exc, entity=self.entity_name)
            logger.warning("Insert of %s rejected: %s", self.entity_name, error)
            raise error from exc
        return entity

    def update(self, entity: T) -> T:
        # Written on the next flush; re-attaches detached entities.
        self.session.add(entity)
        mark_modified(self.session, entity)
        return entity

    def delete(self, entity_id: uuid.UUID) -> bool:
        entity_id = coerce_id(entity_id)
        entity = None
        if entity_id is not None:
            entity = self.session.query(self.model).filter(self.model.id == entity_id).first()
        if entity is None:
            return False
        self.session.delete(entity)
        return True
