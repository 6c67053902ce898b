"""Repository interfaces (Ports) - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from market_monitor.domain.entities import (
    ConfirmationStatus,
    HistoricalData,
    HorizontalLine,
    InstrumentType,
    PriceAlert,
    Statistic,
    StatisticScope,
    StockExchange,
    StockQuote,
    TriggerStatus,
)

T = TypeVar("T")


class EntityRepository(ABC, Generic[T]):
    """Single-entity persistence.

    update() refuses a write that changes nothing by raising
    ObjectUnchangedError; update() and delete() raise NotFoundError when the
    entity is no longer stored. Backend failures surface as StorageError.
    """

    @abstractmethod
    def get(self, entity_id: int) -> Optional[T]:
        """Get an entity by ID, None if it does not exist."""
        pass

    @abstractmethod
    def insert(self, entity: T) -> T:
        """Insert an entity and return it with its assigned ID."""
        pass

    @abstractmethod
    def update(self, entity: T) -> None:
        """Write a changed entity."""
        pass

    @abstractmethod
    def delete(self, entity: T) -> None:
        """Delete an entity."""
        pass


class StatisticRepository(EntityRepository[Statistic]):
    """Interface for breadth statistic data access."""

    @abstractmethod
    def get_statistics(
        self, instrument_type: InstrumentType, scope: StatisticScope = None
    ) -> List[Statistic]:
        """Get statistics of a type and scope, newest first."""
        pass


class PriceAlertRepository(EntityRepository[PriceAlert]):
    """Interface for price alert data access."""

    @abstractmethod
    def get_price_alerts(
        self,
        trigger_status: TriggerStatus = TriggerStatus.ALL,
        confirmation_status: ConfirmationStatus = ConfirmationStatus.ALL,
    ) -> List[PriceAlert]:
        """Get price alerts ordered by ID."""
        pass


class HorizontalLineRepository(EntityRepository[HorizontalLine]):
    """Interface for horizontal line chart object data access."""

    @abstractmethod
    def get_horizontal_lines(
        self, symbol: Optional[str] = None, stock_exchange: Optional[StockExchange] = None
    ) -> List[HorizontalLine]:
        """Get horizontal lines, optionally of a single instrument."""
        pass


class HistoricalDataRepository(ABC):
    """Interface for historical OHLCV data access."""

    @abstractmethod
    def get_by_symbol(self, symbol: str) -> List[HistoricalData]:
        """Get the complete daily history of a symbol, oldest first."""
        pass

    @abstractmethod
    def insert_batch(self, records: List[HistoricalData]) -> None:
        """Store daily records, replacing stored records of the same symbol and date."""
        pass


class HistoricalDataProvider(ABC):
    """Interface for daily history retrieval."""

    @abstractmethod
    def get_history(self, symbol: str, period: str) -> List[HistoricalData]:
        """Get the daily history of a symbol for a period such as '1y', raising RetrievalError on failure."""
        pass


class StockQuoteProvider(ABC):
    """Interface for current quote retrieval."""

    @abstractmethod
    def get_quote(self, symbol: str, stock_exchange: StockExchange) -> StockQuote:
        """Get the current quote, raising RetrievalError on failure."""
        pass
