"""FastAPI dependency injection setup."""
from typing import Optional

from market_monitor.config import app_config
from market_monitor.infrastructure.yahoo_quote_provider import (
    YahooHistoricalDataProvider,
    YahooStockQuoteProvider,
)
from market_monitor.repository.clickhouse_client import ClickHouseConnection
from market_monitor.repository.market_repository import (
    ClickHouseHistoricalRepository,
    ClickHouseHorizontalLineRepository,
    ClickHousePriceAlertRepository,
    ClickHouseStatisticRepository,
)
from market_monitor.services.chart_object_service import ChartObjectService
from market_monitor.services.price_alert_service import PriceAlertService
from market_monitor.services.quote_service import QuoteService
from market_monitor.services.statistic_service import StatisticService


# Application state (set during lifespan)
_connection: Optional[ClickHouseConnection] = None
_statistic_service: Optional[StatisticService] = None
_price_alert_service: Optional[PriceAlertService] = None
_chart_object_service: Optional[ChartObjectService] = None
_quote_service: Optional[QuoteService] = None


def init_services(connection: ClickHouseConnection) -> None:
    """Initialize all services with connection."""
    global _connection, _statistic_service, _price_alert_service, _chart_object_service, _quote_service
    _connection = connection

    quote_provider = YahooStockQuoteProvider()

    _statistic_service = StatisticService(
        ClickHouseStatisticRepository(connection),
        ClickHouseHistoricalRepository(connection),
        symbols=app_config.STATISTIC_SYMBOLS,
        history_provider=YahooHistoricalDataProvider(),
        history_period=app_config.HISTORY_PERIOD,
    )
    _price_alert_service = PriceAlertService(ClickHousePriceAlertRepository(connection), quote_provider)
    _chart_object_service = ChartObjectService(ClickHouseHorizontalLineRepository(connection))
    _quote_service = QuoteService(quote_provider)


def get_connection() -> ClickHouseConnection:
    """Get database connection."""
    if _connection is None:
        raise RuntimeError("Services not initialized")
    return _connection


def get_statistic_service() -> StatisticService:
    """Get statistic service dependency."""
    if _statistic_service is None:
        raise RuntimeError("Services not initialized")
    return _statistic_service


def get_price_alert_service() -> PriceAlertService:
    """Get price alert service dependency."""
    if _price_alert_service is None:
        raise RuntimeError("Services not initialized")
    return _price_alert_service


def get_chart_object_service() -> ChartObjectService:
    """Get chart object service dependency."""
    if _chart_object_service is None:
        raise RuntimeError("Services not initialized")
    return _chart_object_service


def get_quote_service() -> QuoteService:
    """Get quote service dependency."""
    if _quote_service is None:
        raise RuntimeError("Services not initialized")
    return _quote_service
