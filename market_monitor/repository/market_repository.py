"""ClickHouse implementation of the market data repositories."""
from typing import List, Optional
import logging

from market_monitor.domain.change_detection import ensure_changed
from market_monitor.domain.entities import (
    ConfirmationStatus,
    HistoricalData,
    HorizontalLine,
    IndustryGroupScope,
    InstrumentType,
    PriceAlert,
    SectorScope,
    Statistic,
    StatisticScope,
    StockExchange,
    TriggerStatus,
)
from market_monitor.domain.exceptions import DuplicateStatisticError, LocalizedError
from market_monitor.domain.interfaces import (
    HistoricalDataRepository,
    HorizontalLineRepository,
    PriceAlertRepository,
    StatisticRepository,
)
from market_monitor.repository.base_repository import ClickHouseEntityRepository
from market_monitor.repository.clickhouse_client import ClickHouseConnection

logger = logging.getLogger(__name__)


def _scope_condition(scope: StatisticScope) -> str:
    if isinstance(scope, SectorScope):
        return "sector_id = %(sector_id)s AND industry_group_id IS NULL"
    if isinstance(scope, IndustryGroupScope):
        return "sector_id IS NULL AND industry_group_id = %(industry_group_id)s"
    return "sector_id IS NULL AND industry_group_id IS NULL"


class ClickHouseStatisticRepository(ClickHouseEntityRepository[Statistic], StatisticRepository):
    """ClickHouse implementation for statistic repository."""

    TABLE = "statistics"
    COLUMNS = (
        "id",
        "date",
        "instrument_type",
        "sector_id",
        "industry_group_id",
        "number_of_instruments",
        "number_advance",
        "number_decline",
        "number_above_sma50",
        "number_at_or_below_sma50",
        "number_above_sma200",
        "number_at_or_below_sma200",
        "number_ritter_market_trend",
        "advance_decline_sum",
    )
    ENTITY = Statistic

    def get_statistics(
        self, instrument_type: InstrumentType, scope: StatisticScope = None
    ) -> List[Statistic]:
        """Get statistics of a type and scope, newest first."""
        params = {"instrument_type": instrument_type.value}
        if scope is not None:
            params.update(scope.model_dump())
        return self._select(
            f"instrument_type = %(instrument_type)s AND {_scope_condition(scope)}",
            params,
            order_by="date DESC",
        )

    def _find_same_day(self, statistic: Statistic) -> Optional[Statistic]:
        scope = statistic.scope
        params = {
            "instrument_type": statistic.instrument_type.value,
            "date": statistic.date,
        }
        if scope is not None:
            params.update(scope.model_dump())
        statistics = self._select(
            "instrument_type = %(instrument_type)s AND date = %(date)s"
            f" AND {_scope_condition(scope)}",
            params,
        )
        return statistics[0] if statistics else None

    def insert(self, entity: Statistic) -> Statistic:
        with self._write_lock:
            existing = self._find_same_day(entity)
            if existing is not None:
                raise DuplicateStatisticError(existing.instrument_type.value, existing.date)
            return super().insert(entity)


class ClickHousePriceAlertRepository(ClickHouseEntityRepository[PriceAlert], PriceAlertRepository):
    """ClickHouse implementation for price alert repository."""

    TABLE = "price_alerts"
    COLUMNS = (
        "id",
        "symbol",
        "stock_exchange",
        "alert_type",
        "price",
        "trigger_time",
        "confirmation_time",
        "last_stock_quote_time",
    )
    ENTITY = PriceAlert

    def get_price_alerts(
        self,
        trigger_status: TriggerStatus = TriggerStatus.ALL,
        confirmation_status: ConfirmationStatus = ConfirmationStatus.ALL,
    ) -> List[PriceAlert]:
        """Get price alerts ordered by ID."""
        conditions = []
        if trigger_status == TriggerStatus.TRIGGERED:
            conditions.append("trigger_time IS NOT NULL")
        elif trigger_status == TriggerStatus.NOT_TRIGGERED:
            conditions.append("trigger_time IS NULL")
        if confirmation_status == ConfirmationStatus.CONFIRMED:
            conditions.append("confirmation_time IS NOT NULL")
        elif confirmation_status == ConfirmationStatus.NOT_CONFIRMED:
            conditions.append("confirmation_time IS NULL")
        return self._select(" AND ".join(conditions))

    def _check_update(self, entity: PriceAlert, stored: PriceAlert) -> None:
        ensure_changed(entity, stored)
        # A triggered and confirmed alert is closed.
        if stored.is_triggered and stored.is_confirmed:
            raise LocalizedError("price_alert.update_after_triggered")
        # After triggering only the confirmation may be set.
        if stored.is_triggered and (
            entity.symbol != stored.symbol
            or entity.stock_exchange != stored.stock_exchange
            or entity.alert_type != stored.alert_type
            or entity.price is None
            or entity.price.compare(stored.price) != 0
        ):
            raise LocalizedError("price_alert.update_after_triggered")


class ClickHouseHorizontalLineRepository(
    ClickHouseEntityRepository[HorizontalLine], HorizontalLineRepository
):
    """ClickHouse implementation for horizontal line repository."""

    TABLE = "horizontal_lines"
    COLUMNS = ("id", "symbol", "stock_exchange", "price")
    ENTITY = HorizontalLine

    def get_horizontal_lines(
        self, symbol: Optional[str] = None, stock_exchange: Optional[StockExchange] = None
    ) -> List[HorizontalLine]:
        """Get horizontal lines, optionally of a single instrument."""
        conditions = []
        params = {}
        if symbol:
            conditions.append("symbol = %(symbol)s")
            params["symbol"] = symbol
        if stock_exchange is not None:
            conditions.append("stock_exchange = %(stock_exchange)s")
            params["stock_exchange"] = stock_exchange.value
        return self._select(" AND ".join(conditions), params)


class ClickHouseHistoricalRepository(HistoricalDataRepository):
    """ClickHouse implementation for historical data repository."""

    def __init__(self, connection: ClickHouseConnection):
        self._conn = connection

    def get_by_symbol(self, symbol: str) -> List[HistoricalData]:
        """Get the complete daily history of a symbol, oldest first."""
        query = """
        SELECT date, symbol, open, high, low, close, volume
        FROM historical_data FINAL
        WHERE symbol = %(symbol)s
        ORDER BY date ASC
        """
        results = self._conn.execute(query, {"symbol": symbol})
        return [
            HistoricalData(
                date=row[0],
                symbol=row[1],
                open_price=row[2],
                high=row[3],
                low=row[4],
                close=row[5],
                volume=row[6],
            )
            for row in results
        ]

    def insert_batch(self, records: List[HistoricalData]) -> None:
        """Insert daily records; the table keeps the latest record per symbol and date."""
        if not records:
            return
        values = [
            (rec.date, rec.symbol, rec.open, rec.high, rec.low, rec.close, rec.volume)
            for rec in records
        ]
        self._conn.insert(
            "INSERT INTO historical_data (date, symbol, open, high, low, close, volume) VALUES",
            values,
        )
        logger.info(f"Inserted {len(records)} historical records")
