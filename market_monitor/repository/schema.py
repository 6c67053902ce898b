"""ClickHouse table definitions."""
import logging

from market_monitor.repository.clickhouse_client import ClickHouseConnection

logger = logging.getLogger(__name__)

TABLES = {
    "statistics": """
    CREATE TABLE IF NOT EXISTS statistics (
        id UInt32,
        date Date,
        instrument_type LowCardinality(String),
        sector_id Nullable(UInt32),
        industry_group_id Nullable(UInt32),
        number_of_instruments UInt32,
        number_advance UInt32,
        number_decline UInt32,
        number_above_sma50 UInt32,
        number_at_or_below_sma50 UInt32,
        number_above_sma200 UInt32,
        number_at_or_below_sma200 UInt32,
        number_ritter_market_trend Int32,
        advance_decline_sum Int64
    ) ENGINE = MergeTree()
    ORDER BY id
    """,
    "price_alerts": """
    CREATE TABLE IF NOT EXISTS price_alerts (
        id UInt32,
        symbol String,
        stock_exchange LowCardinality(String),
        alert_type LowCardinality(String),
        price Decimal(12, 4),
        trigger_time Nullable(DateTime),
        confirmation_time Nullable(DateTime),
        last_stock_quote_time Nullable(DateTime)
    ) ENGINE = MergeTree()
    ORDER BY id
    """,
    "horizontal_lines": """
    CREATE TABLE IF NOT EXISTS horizontal_lines (
        id UInt32,
        symbol String,
        stock_exchange LowCardinality(String),
        price Decimal(12, 4)
    ) ENGINE = MergeTree()
    ORDER BY id
    """,
    "historical_data": """
    CREATE TABLE IF NOT EXISTS historical_data (
        date Date,
        symbol String,
        open Float64,
        high Float64,
        low Float64,
        close Float64,
        volume UInt64
    ) ENGINE = ReplacingMergeTree()
    ORDER BY (symbol, date)
    """,
}


def ensure_schema(connection: ClickHouseConnection) -> None:
    """Create missing tables."""
    for name, ddl in TABLES.items():
        connection.execute(ddl)
        logger.debug(f"Ensured table {name}")
    logger.info(f"Schema ready ({len(TABLES)} tables)")
