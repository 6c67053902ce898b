"""Stock quote endpoints."""
from fastapi import APIRouter, Depends

from market_monitor.api.dependencies import get_quote_service
from market_monitor.domain.entities import StockExchange
from market_monitor.domain.results import WebServiceResult
from market_monitor.services.quote_service import QuoteService

router = APIRouter(prefix="/api/v1", tags=["quotes"])


@router.get("/quotes/{symbol}", response_model=WebServiceResult)
def get_quote(
    symbol: str,
    stock_exchange: StockExchange = StockExchange.NYSE,
    service: QuoteService = Depends(get_quote_service)
) -> WebServiceResult:
    """Get the current quote of an instrument."""
    return service.get_quote(symbol, stock_exchange)
