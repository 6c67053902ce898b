"""Configuration management using python-dotenv."""
import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


def _split_symbols(value: str) -> List[str]:
    return [symbol.strip().upper() for symbol in value.split(",") if symbol.strip()]


class ClickHouseConfig:
    """ClickHouse connection configuration."""
    HOST: str = os.getenv("CLICKHOUSE_HOST", "localhost")
    PORT: int = int(os.getenv("CLICKHOUSE_PORT", "9000"))
    DATABASE: str = os.getenv("CLICKHOUSE_DB", "market_monitor")
    USER: str = os.getenv("CLICKHOUSE_USER", "default")
    PASSWORD: str = os.getenv("CLICKHOUSE_PASSWORD", "")


class AppConfig:
    """Application configuration."""
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # Locale of validation and service messages, fixed at process start.
    LOCALE: str = os.getenv("LOCALE", "en")
    ALERT_CHECK_INTERVAL_SECONDS: int = int(os.getenv("ALERT_CHECK_INTERVAL_SECONDS", "300"))
    STATISTIC_UPDATE_HOUR: int = int(os.getenv("STATISTIC_UPDATE_HOUR", "23"))
    # Daily history fetched per symbol before the statistics are recalculated.
    HISTORY_PERIOD: str = os.getenv("HISTORY_PERIOD", "1y")
    CORS_ORIGINS: List[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]
    STATISTIC_SYMBOLS: List[str] = _split_symbols(
        os.getenv(
            "STATISTIC_SYMBOLS",
            "AAPL,NVDA,TSLA,META,AMZN,GOOGL,MSFT,AMD,NFLX,COIN",
        )
    )


# Singleton instances
clickhouse_config = ClickHouseConfig()
app_config = AppConfig()
