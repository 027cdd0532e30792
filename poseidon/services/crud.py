"""Generic create/read/update/delete over one ORM model."""

import logging
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poseidon.core.exceptions import NotFoundError
from poseidon.models import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CrudService(Generic[ModelT]):
    """
    Persistence operations for a single entity.

    The only rule beyond plain ORM calls is the existence check before update
    and delete, which raises NotFoundError with a fixed-format message.
    on_create / on_update name timestamp columns stamped with the current time.
    """

    def __init__(
        self,
        model: type[ModelT],
        entity: str,
        *,
        on_create: tuple[str, ...] = (),
        on_update: tuple[str, ...] = (),
    ) -> None:
        self.model = model
        self.entity = entity
        self.on_create = on_create
        self.on_update = on_update

    def list_all(self, db: Session) -> list[ModelT]:
        return db.query(self.model).order_by(self.model.id).all()

    def get(self, db: Session, record_id: int) -> ModelT:
        record = db.get(self.model, record_id)
        if record is None:
            raise NotFoundError(self.entity, f"Invalid {self.entity} id")
        return record

    def create(self, db: Session, values: dict[str, Any]) -> ModelT:
        record = self.model(**values)
        self._stamp(record, self.on_create)
        db.add(record)
        self._commit(db)
        db.refresh(record)
        logger.info("Created %s id=%s", self.entity, record.id)
        return record

    def update(self, db: Session, record_id: int, values: dict[str, Any]) -> ModelT:
        record = self.get(db, record_id)
        for key, value in values.items():
            setattr(record, key, value)
        self._stamp(record, self.on_update)
        self._commit(db)
        db.refresh(record)
        logger.info("Updated %s id=%s", self.entity, record_id)
        return record

    def delete(self, db: Session, record_id: int) -> None:
        record = db.get(self.model, record_id)
        if record is None:
            raise NotFoundError(self.entity, f"No {self.entity} with given id")
        db.delete(record)
        self._commit(db)
        logger.info("Deleted %s id=%s", self.entity, record_id)

    @staticmethod
    def _stamp(record: ModelT, columns: tuple[str, ...]) -> None:
        now = datetime.now(UTC)
        for column in columns:
            setattr(record, column, now)

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Persisting %s failed", self.entity)
            raise
