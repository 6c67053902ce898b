"""Stock quote business logic."""
import logging

from market_monitor.domain.entities import StockExchange
from market_monitor.domain.exceptions import RetrievalError
from market_monitor.domain.interfaces import StockQuoteProvider
from market_monitor.domain.results import WebServiceMessageType, WebServiceResult
from market_monitor.services.common import message

logger = logging.getLogger(__name__)


class QuoteService:
    """Business logic for current stock quotes."""

    def __init__(self, provider: StockQuoteProvider):
        self._provider = provider

    def get_quote(self, symbol: str, stock_exchange: StockExchange) -> WebServiceResult:
        """Get the current quote (symbol uppercase normalized)."""
        result = WebServiceResult()
        symbol = symbol.upper()
        try:
            result.data = self._provider.get_quote(symbol, stock_exchange)
        except RetrievalError as e:
            result.add_message(
                message(
                    WebServiceMessageType.ERROR,
                    "stock_quote.get_error",
                    symbol=symbol,
                    stock_exchange=stock_exchange.value,
                )
            )
            logger.error(f"Error getting quote for {symbol}: {e}")
        return result
