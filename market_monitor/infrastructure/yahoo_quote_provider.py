"""Yahoo Finance quote and history retrieval."""
from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging

import yfinance as yf

from market_monitor.domain.entities import Currency, HistoricalData, StockExchange, StockQuote
from market_monitor.domain.exceptions import RetrievalError
from market_monitor.domain.interfaces import HistoricalDataProvider, StockQuoteProvider

logger = logging.getLogger(__name__)

# Yahoo exchange codes of the supported stock exchanges.
EXCHANGE_CODES: Dict[str, StockExchange] = {
    "VAN": StockExchange.TSXV,
    "TOR": StockExchange.TSX,
    "NYQ": StockExchange.NYSE,
    "NMS": StockExchange.NYSE,  # Nasdaq
}

CURRENCY_CODES: Dict[str, Currency] = {
    "USD": Currency.USD,
    "CAD": Currency.CAD,
}

OHLCV_COLUMNS = ["Open", "High", "Low", "Close", "Volume"]

# Suffix Yahoo appends to the symbol of an exchange.
SYMBOL_SUFFIXES: Dict[StockExchange, str] = {
    StockExchange.NYSE: "",
    StockExchange.TSX: ".TO",
    StockExchange.TSXV: ".V",
}


def map_exchange(code: Optional[str]) -> Optional[StockExchange]:
    """Map a Yahoo exchange code, None if the exchange is not supported."""
    return EXCHANGE_CODES.get(code)


def map_symbol(ticker: str) -> str:
    """Strip the exchange suffix: 'ABC.V' -> 'ABC'."""
    return ticker.split(".", 1)[0]


def map_price(value: Any) -> Decimal:
    """Convert without binary floating point artifacts: 12.345 -> Decimal('12.345')."""
    return Decimal(str(value))


def map_currency(code: Optional[str]) -> Optional[Currency]:
    """Map a currency code, None if the currency is not supported."""
    return CURRENCY_CODES.get(code)


def normalize_quote(exchange_code: str, ticker: str, price: Any, currency_code: str) -> StockQuote:
    """Build a StockQuote from raw Yahoo quote attributes."""
    return StockQuote(
        symbol=map_symbol(ticker),
        stock_exchange=map_exchange(exchange_code),
        price=map_price(price),
        currency=map_currency(currency_code),
    )


def query_symbol(symbol: str, stock_exchange: StockExchange) -> str:
    """Yahoo symbol of an instrument: 'ABC' at TSXV -> 'ABC.V'."""
    return symbol + SYMBOL_SUFFIXES.get(stock_exchange, "")


class YahooStockQuoteProvider(StockQuoteProvider):
    """Fetches current quotes from Yahoo Finance via the yfinance library."""

    def get_quote(self, symbol: str, stock_exchange: StockExchange) -> StockQuote:
        yahoo_symbol = query_symbol(symbol, stock_exchange)
        try:
            info = yf.Ticker(yahoo_symbol).info
        except Exception as e:
            raise RetrievalError(f"Quote request for {yahoo_symbol} failed: {e}") from e

        price = info.get("regularMarketPrice") or info.get("currentPrice")
        if price is None:
            raise RetrievalError(f"No price data available for symbol: {yahoo_symbol!r}")

        quote = normalize_quote(
            info.get("exchange"),
            info.get("symbol", yahoo_symbol),
            price,
            info.get("financialCurrency") or info.get("currency"),
        )
        logger.debug(f"Quote {yahoo_symbol}: {quote.price} {quote.currency}")
        return quote


class YahooHistoricalDataProvider(HistoricalDataProvider):
    """Fetches daily OHLCV history from Yahoo Finance via the yfinance library."""

    def get_history(self, symbol: str, period: str = "1y") -> List[HistoricalData]:
        try:
            history = yf.Ticker(symbol).history(period=period, interval="1d")
        except Exception as e:
            raise RetrievalError(f"History request for {symbol} failed: {e}") from e

        if history.empty:
            raise RetrievalError(f"No historical data available for symbol: {symbol!r}")

        # The running session is often reported with NaN prices or volume.
        complete = history.dropna(subset=OHLCV_COLUMNS)
        if len(complete) < len(history):
            logger.debug(f"Skipped {len(history) - len(complete)} incomplete rows of {symbol}")

        if complete.empty:
            raise RetrievalError(f"No historical data available for symbol: {symbol!r}")

        records = [
            HistoricalData(
                date=day.date(),
                symbol=symbol,
                open_price=round(float(row["Open"]), 4),
                high=round(float(row["High"]), 4),
                low=round(float(row["Low"]), 4),
                close=round(float(row["Close"]), 4),
                volume=int(row["Volume"]),
            )
            for day, row in complete.iterrows()
        ]
        logger.info(f"Fetched {len(records)} daily records for {symbol} ({period})")
        return records
