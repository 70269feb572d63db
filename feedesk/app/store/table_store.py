"""Row-level persistence for one table.

Every call is atomic for a single row only. Callers that write several
rows are responsible for compensating on failure.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from feedesk.app.core.errors import StoreError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class TableStore(Protocol):
    def insert(self, record: Row) -> Row: ...

    def update(self, record_id, patch: Row) -> Row: ...

    def delete(self, record_id) -> None: ...

    def select_all(self, order_by: Optional[str] = None) -> List[Row]: ...


def row_to_dict(instance) -> Row:
    return {attr.key: getattr(instance, attr.key) for attr in inspect(instance).mapper.column_attrs}


class SqlTableStore:
    """TableStore backed by a SQLAlchemy model; one session per call."""

    def __init__(self, session_factory: sessionmaker, model):
        self.session_factory = session_factory
        self.model = model
        self.name = model.__tablename__

    def _column(self, name: str):
        column = getattr(self.model, name, None)
        if column is None:
            raise StoreError(f"{self.name} has no column {name!r}")
        return column

    def insert(self, record: Row) -> Row:
        db = self.session_factory()
        try:
            instance = self.model(**record)
            db.add(instance)
            db.commit()
            db.refresh(instance)
            return row_to_dict(instance)
        except (SQLAlchemyError, OverflowError) as exc:
            db.rollback()
            logger.error("Insert into %s failed: %s", self.name, exc)
            raise StoreError(f"Could not insert into {self.name}") from exc
        finally:
            db.close()

    def update(self, record_id, patch: Row) -> Row:
        db = self.session_factory()
        try:
            instance = db.get(self.model, record_id)
            if instance is None:
                raise StoreError(f"{self.name} row {record_id} does not exist")
            for key, value in patch.items():
                setattr(instance, key, value)
            db.commit()
            db.refresh(instance)
            return row_to_dict(instance)
        except (SQLAlchemyError, OverflowError) as exc:
            db.rollback()
            logger.error("Update of %s %s failed: %s", self.name, record_id, exc)
            raise StoreError(f"Could not update {self.name} row {record_id}") from exc
        finally:
            db.close()

    def delete(self, record_id) -> None:
        db = self.session_factory()
        try:
            instance = db.get(self.model, record_id)
            if instance is None:
                raise StoreError(f"{self.name} row {record_id} does not exist")
            db.delete(instance)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Delete of %s %s failed: %s", self.name, record_id, exc)
            raise StoreError(f"Could not delete {self.name} row {record_id}") from exc
        finally:
            db.close()

    def select_all(self, order_by: Optional[str] = None) -> List[Row]:
        db = self.session_factory()
        try:
            query = db.query(self.model)
            if order_by:
                descending = order_by.startswith("-")
                column = self._column(order_by.lstrip("-"))
                query = query.order_by(column.desc() if descending else column.asc())
            return [row_to_dict(instance) for instance in query.all()]
        except SQLAlchemyError as exc:
            logger.error("Select from %s failed: %s", self.name, exc)
            raise StoreError(f"Could not read {self.name}") from exc
        finally:
            db.close()
