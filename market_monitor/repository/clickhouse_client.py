"""ClickHouse connection used by all repositories."""
from typing import Any, Dict, List, Optional
import logging

from clickhouse_driver import Client
from clickhouse_driver.errors import Error as ClickHouseError

from market_monitor.config import ClickHouseConfig, clickhouse_config
from market_monitor.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class ClickHouseConnection:
    """A single ClickHouse client bound to the market monitor database.

    Driver errors of queries and inserts are raised as StorageError.
    """

    def __init__(self, config: ClickHouseConfig = clickhouse_config):
        self._config = config
        self._client: Optional[Client] = None

    @property
    def database(self) -> str:
        return self._config.DATABASE

    def _new_client(self, database: str) -> Client:
        return Client(
            host=self._config.HOST,
            port=self._config.PORT,
            database=database,
            user=self._config.USER,
            password=self._config.PASSWORD,
        )

    def connect(self) -> None:
        """Create the database if missing and connect to it."""
        try:
            bootstrap = self._new_client("default")
            bootstrap.execute(f"CREATE DATABASE IF NOT EXISTS {self.database}")
            bootstrap.disconnect()
            self._client = self._new_client(self.database)
        except ClickHouseError as e:
            logger.error(f"Failed to connect to ClickHouse: {e}")
            raise StorageError(f"ClickHouse at {self._config.HOST}:{self._config.PORT} unavailable") from e
        logger.info(f"Connected to ClickHouse database {self.database} at {self._config.HOST}:{self._config.PORT}")

    def disconnect(self) -> None:
        if self._client is not None:
            self._client.disconnect()
            self._client = None
            logger.info("Disconnected from ClickHouse")

    @property
    def client(self) -> Client:
        if self._client is None:
            raise RuntimeError("Not connected to ClickHouse")
        return self._client

    def execute(
        self,
        query: str,
        params: Optional[Dict[str, Any]] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> List[tuple]:
        """Run a query with named parameters and return its rows."""
        try:
            return self.client.execute(query, params or {}, settings=settings)
        except ClickHouseError as e:
            raise StorageError(f"ClickHouse query failed: {e}") from e

    def insert(self, query: str, rows: List[tuple]) -> None:
        """Insert rows with an INSERT ... VALUES statement."""
        try:
            self.client.execute(query, rows)
        except ClickHouseError as e:
            raise StorageError(f"ClickHouse insert failed: {e}") from e

    def is_available(self) -> bool:
        try:
            self.execute("SELECT 1")
        except (StorageError, RuntimeError):
            return False
        return True
