"""Pytest configuration and fixtures."""
from datetime import date
from decimal import Decimal

import pytest
from unittest.mock import MagicMock

from market_monitor.domain.entities import (
    HorizontalLine,
    InstrumentType,
    PriceAlert,
    PriceAlertType,
    Statistic,
    StockExchange,
    StockQuote,
)
from market_monitor.domain.interfaces import (
    HistoricalDataRepository,
    HorizontalLineRepository,
    PriceAlertRepository,
    StatisticRepository,
    StockQuoteProvider,
)
from market_monitor.domain.messages import get_catalog


@pytest.fixture
def catalog():
    """Process-wide message catalog used to build expected messages."""
    return get_catalog()


@pytest.fixture
def statistic():
    """Valid market-wide statistic."""
    return Statistic(
        id=1,
        date=date(2024, 1, 2),
        instrument_type=InstrumentType.STOCK,
        number_of_instruments=5,
        number_advance=4,
        number_decline=1,
        number_above_sma50=3,
        number_at_or_below_sma50=2,
        number_above_sma200=2,
        number_at_or_below_sma200=3,
    )


@pytest.fixture
def price_alert():
    """Valid, untriggered price alert."""
    return PriceAlert(
        id=1,
        symbol="AAPL",
        stock_exchange=StockExchange.NYSE,
        alert_type=PriceAlertType.GREATER_OR_EQUAL,
        price=Decimal("185.50"),
    )


@pytest.fixture
def horizontal_line():
    """Valid horizontal line."""
    return HorizontalLine(id=1, symbol="AAPL", stock_exchange=StockExchange.NYSE, price=Decimal("180.00"))


@pytest.fixture
def mock_statistic_repository():
    """Mock statistic repository."""
    return MagicMock(spec=StatisticRepository)


@pytest.fixture
def mock_historical_repository():
    """Mock historical data repository."""
    return MagicMock(spec=HistoricalDataRepository)


@pytest.fixture
def mock_price_alert_repository():
    """Mock price alert repository."""
    return MagicMock(spec=PriceAlertRepository)


@pytest.fixture
def mock_horizontal_line_repository():
    """Mock horizontal line repository."""
    return MagicMock(spec=HorizontalLineRepository)


@pytest.fixture
def mock_quote_provider():
    """Mock quote provider returning a fixed AAPL quote."""
    provider = MagicMock(spec=StockQuoteProvider)
    provider.get_quote.return_value = StockQuote(
        symbol="AAPL", stock_exchange=StockExchange.NYSE, price=Decimal("190.10")
    )
    return provider


@pytest.fixture
def mock_clickhouse_connection():
    """Mock ClickHouse connection without stored rows."""
    connection = MagicMock()
    connection.execute = MagicMock(return_value=[])
    connection.insert = MagicMock(return_value=None)
    return connection
