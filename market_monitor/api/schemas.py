"""API request/response schemas (DTOs)."""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel

from market_monitor.domain.entities import (
    HorizontalLine,
    PriceAlert,
    PriceAlertType,
    StockExchange,
)


# Request models
class PriceAlertRequest(BaseModel):
    """Price alert as sent by the front end.

    Attributes are optional so that missing values are reported by the
    localized validation instead of a schema error.
    """
    id: Optional[int] = None
    symbol: str = ""
    stock_exchange: Optional[StockExchange] = None
    alert_type: Optional[PriceAlertType] = None
    price: Optional[Decimal] = None
    trigger_time: Optional[datetime] = None
    confirmation_time: Optional[datetime] = None
    last_stock_quote_time: Optional[datetime] = None

    def to_entity(self) -> PriceAlert:
        return PriceAlert(**self.model_dump())


class HorizontalLineRequest(BaseModel):
    """Horizontal line as sent by the front end."""
    id: Optional[int] = None
    symbol: str = ""
    stock_exchange: Optional[StockExchange] = None
    price: Optional[Decimal] = None

    def to_entity(self) -> HorizontalLine:
        return HorizontalLine(**self.model_dump())


# Response models
class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    database_available: bool
    scheduled_jobs: int
