"""Shared ClickHouse persistence of single entities."""
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar
import logging
import threading

from pydantic import BaseModel

from market_monitor.domain.change_detection import ensure_changed
from market_monitor.domain.exceptions import NotFoundError
from market_monitor.domain.interfaces import EntityRepository
from market_monitor.repository.clickhouse_client import ClickHouseConnection

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Mutations have to be applied before the next read of the same entity.
MUTATION_SETTINGS = {"mutations_sync": 1}


class ClickHouseEntityRepository(EntityRepository[T]):
    """Entity persistence in a ClickHouse table keyed by ``id``.

    ClickHouse has no transactions, so reading the stored entity, comparing it
    and writing the change happen under one lock per repository. IDs are
    assigned under the same lock.
    """

    TABLE: str = ""
    COLUMNS: Tuple[str, ...] = ()
    ENTITY: Type[T] = None

    def __init__(self, connection: ClickHouseConnection):
        self._conn = connection
        self._write_lock = threading.RLock()

    @property
    def _column_list(self) -> str:
        return ", ".join(self.COLUMNS)

    def _to_row(self, entity: T) -> Tuple[Any, ...]:
        values = []
        for column in self.COLUMNS:
            value = getattr(entity, column)
            values.append(value.value if isinstance(value, Enum) else value)
        return tuple(values)

    def _from_row(self, row: Tuple[Any, ...]) -> T:
        return self.ENTITY(**dict(zip(self.COLUMNS, row)))

    def _select(
        self, where: str = "", params: Optional[Dict[str, Any]] = None, order_by: str = "id ASC"
    ) -> List[T]:
        query = f"SELECT {self._column_list} FROM {self.TABLE}"
        if where:
            query += f" WHERE {where}"
        query += f" ORDER BY {order_by}"
        return [self._from_row(row) for row in self._conn.execute(query, params or {})]

    def _next_id(self) -> int:
        result = self._conn.execute(f"SELECT max(id) FROM {self.TABLE}")
        current = result[0][0] if result else 0
        return (current or 0) + 1

    def _check_update(self, entity: T, stored: T) -> None:
        """Reject an update before it is written."""
        ensure_changed(entity, stored)

    def get(self, entity_id: int) -> Optional[T]:
        entities = self._select("id = %(id)s", {"id": entity_id})
        return entities[0] if entities else None

    def insert(self, entity: T) -> T:
        with self._write_lock:
            stored = entity.model_copy(update={"id": self._next_id()})
            self._conn.insert(
                f"INSERT INTO {self.TABLE} ({self._column_list}) VALUES",
                [self._to_row(stored)],
            )
        logger.info(f"Inserted {self.ENTITY.__name__} {stored.id}")
        return stored

    def update(self, entity: T) -> None:
        with self._write_lock:
            stored = self.get(entity.id)
            if stored is None:
                raise NotFoundError(self.ENTITY.__name__, entity.id)
            self._check_update(entity, stored)

            params = dict(zip(self.COLUMNS, self._to_row(entity)))
            assignments = ", ".join(
                f"{column} = %({column})s" for column in self.COLUMNS if column != "id"
            )
            self._conn.execute(
                f"ALTER TABLE {self.TABLE} UPDATE {assignments} WHERE id = %(id)s",
                params,
                settings=MUTATION_SETTINGS,
            )
        logger.info(f"Updated {self.ENTITY.__name__} {entity.id}")

    def delete(self, entity: T) -> None:
        with self._write_lock:
            if self.get(entity.id) is None:
                raise NotFoundError(self.ENTITY.__name__, entity.id)
            self._conn.execute(
                f"ALTER TABLE {self.TABLE} DELETE WHERE id = %(id)s",
                {"id": entity.id},
                settings=MUTATION_SETTINGS,
            )
        logger.info(f"Deleted {self.ENTITY.__name__} {entity.id}")
