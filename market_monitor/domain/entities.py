"""Domain entities - core business objects."""
import datetime as dt
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import ClassVar, Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator

from market_monitor.domain.validation import (
    require_min,
    require_mutually_exclusive,
    require_not_empty,
    require_not_null,
    require_price,
)

HUNDRED_PERCENT = Decimal(100)
PERCENT_PRECISION = Decimal("0.01")


class InstrumentType(str, Enum):
    STOCK = "STOCK"
    ETF = "ETF"
    SECTOR = "SECTOR"
    IND_GROUP = "IND_GROUP"
    RATIO = "RATIO"


class StockExchange(str, Enum):
    NYSE = "NYSE"
    TSX = "TSX"
    TSXV = "TSXV"


class Currency(str, Enum):
    USD = "USD"
    CAD = "CAD"


class PriceAlertType(str, Enum):
    """Direction in which the quote has to cross the alert price."""
    LESS_OR_EQUAL = "LESS_OR_EQUAL"
    GREATER_OR_EQUAL = "GREATER_OR_EQUAL"


class TriggerStatus(str, Enum):
    ALL = "ALL"
    TRIGGERED = "TRIGGERED"
    NOT_TRIGGERED = "NOT_TRIGGERED"


class ConfirmationStatus(str, Enum):
    ALL = "ALL"
    CONFIRMED = "CONFIRMED"
    NOT_CONFIRMED = "NOT_CONFIRMED"


class SectorScope(BaseModel):
    """Statistic restricted to the instruments of a sector."""
    sector_id: int

    class Config:
        frozen = True


class IndustryGroupScope(BaseModel):
    """Statistic restricted to the instruments of an industry group."""
    industry_group_id: int

    class Config:
        frozen = True


StatisticScope = Optional[Union[SectorScope, IndustryGroupScope]]


def _percentage(part: int, rest: int) -> float:
    total = part + rest
    if total == 0:
        return 0.0
    percent = Decimal(part) * HUNDRED_PERCENT / Decimal(total)
    return float(percent.quantize(PERCENT_PRECISION, rounding=ROUND_HALF_UP))


class Statistic(BaseModel):
    """Breadth statistic of all instruments of a type on one trading day.

    A statistic is either market-wide or scoped to a sector or to an industry
    group. Percentages and the advance/decline number are derived from the
    stored counts and serialized with them.
    """
    id: Optional[int] = None
    date: Optional[dt.date] = None
    instrument_type: Optional[InstrumentType] = None
    sector_id: Optional[int] = None
    industry_group_id: Optional[int] = None
    number_of_instruments: int = 0
    number_advance: int = 0
    number_decline: int = 0
    number_above_sma50: int = 0
    number_at_or_below_sma50: int = 0
    number_above_sma200: int = 0
    number_at_or_below_sma200: int = 0
    number_ritter_market_trend: int = 0
    advance_decline_sum: int = 0

    class Config:
        from_attributes = True

    @field_validator("date", mode="before")
    @classmethod
    def strip_time(cls, value):
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    @classmethod
    def for_scope(
        cls,
        date: dt.date,
        instrument_type: InstrumentType,
        scope: StatisticScope = None,
        **counts,
    ) -> "Statistic":
        """Create a statistic for a market-wide, sector or industry group scope."""
        references = {}
        if isinstance(scope, SectorScope):
            references["sector_id"] = scope.sector_id
        elif isinstance(scope, IndustryGroupScope):
            references["industry_group_id"] = scope.industry_group_id
        return cls(date=date, instrument_type=instrument_type, **references, **counts)

    @property
    def scope(self) -> StatisticScope:
        if self.sector_id is not None:
            return SectorScope(sector_id=self.sector_id)
        if self.industry_group_id is not None:
            return IndustryGroupScope(industry_group_id=self.industry_group_id)
        return None

    @computed_field
    @property
    def advance_decline_number(self) -> int:
        return self.number_advance - self.number_decline

    @computed_field
    @property
    def percent_above_sma50(self) -> float:
        """Percentage of instruments trading above their SMA(50); 0.0 if none were counted."""
        return _percentage(self.number_above_sma50, self.number_at_or_below_sma50)

    @computed_field
    @property
    def percent_above_sma200(self) -> float:
        """Percentage of instruments trading above their SMA(200); 0.0 if none were counted."""
        return _percentage(self.number_above_sma200, self.number_at_or_below_sma200)

    def validate(self) -> None:
        """Check the statistic, raising ValidationError on the first violation."""
        require_not_null("statistic", "date", self.date)
        require_not_null("statistic", "instrument_type", self.instrument_type)
        require_mutually_exclusive(
            "statistic",
            "sector_and_ig_defined",
            sector_id=self.sector_id,
            industry_group_id=self.industry_group_id,
        )
        for field in (
            "number_of_instruments",
            "number_advance",
            "number_decline",
            "number_above_sma50",
            "number_at_or_below_sma50",
            "number_above_sma200",
            "number_at_or_below_sma200",
        ):
            require_min("statistic", field, getattr(self, field), 0)

    def content_equals(self, other: "Statistic") -> bool:
        return (
            self.id == other.id
            and self.date == other.date
            and self.instrument_type == other.instrument_type
            and self.sector_id == other.sector_id
            and self.industry_group_id == other.industry_group_id
            and self.number_of_instruments == other.number_of_instruments
            and self.number_advance == other.number_advance
            and self.number_decline == other.number_decline
            and self.number_above_sma50 == other.number_above_sma50
            and self.number_at_or_below_sma50 == other.number_at_or_below_sma50
            and self.number_above_sma200 == other.number_above_sma200
            and self.number_at_or_below_sma200 == other.number_at_or_below_sma200
            and self.number_ritter_market_trend == other.number_ritter_market_trend
            and self.advance_decline_sum == other.advance_decline_sum
        )


class PriceAlert(BaseModel):
    """An alert that a stock has reached a certain price at a stock exchange."""
    MIN_PRICE: ClassVar[Decimal] = Decimal("0.01")
    MAX_PRICE: ClassVar[Decimal] = Decimal("100000")

    id: Optional[int] = None
    symbol: str = ""
    stock_exchange: Optional[StockExchange] = None
    alert_type: Optional[PriceAlertType] = None
    price: Optional[Decimal] = None
    trigger_time: Optional[dt.datetime] = None
    confirmation_time: Optional[dt.datetime] = None
    last_stock_quote_time: Optional[dt.datetime] = None

    class Config:
        from_attributes = True

    @property
    def is_triggered(self) -> bool:
        return self.trigger_time is not None

    @property
    def is_confirmed(self) -> bool:
        return self.confirmation_time is not None

    def is_triggered_by(self, price: Decimal) -> bool:
        """Check if a quote price reaches the alert price."""
        if self.alert_type == PriceAlertType.GREATER_OR_EQUAL:
            return price >= self.price
        if self.alert_type == PriceAlertType.LESS_OR_EQUAL:
            return price <= self.price
        return False

    def validate(self) -> None:
        """Check the alert, raising ValidationError on the first violation."""
        require_min("price_alert", "id", self.id, 1)
        require_not_empty("price_alert", "symbol", self.symbol)
        require_not_null("price_alert", "stock_exchange", self.stock_exchange)
        require_not_null("price_alert", "alert_type", self.alert_type)
        require_price("price_alert", "price", self.price, self.MIN_PRICE, self.MAX_PRICE)

    def content_equals(self, other: "PriceAlert") -> bool:
        return (
            self.id == other.id
            and self.symbol == other.symbol
            and self.stock_exchange == other.stock_exchange
            and self.alert_type == other.alert_type
            and _same_amount(self.price, other.price)
            and self.trigger_time == other.trigger_time
            and self.confirmation_time == other.confirmation_time
            and self.last_stock_quote_time == other.last_stock_quote_time
        )


class HorizontalLine(BaseModel):
    """A horizontal price level drawn on the chart of an instrument."""
    MIN_PRICE: ClassVar[Decimal] = Decimal("0.01")

    id: Optional[int] = None
    symbol: str = ""
    stock_exchange: Optional[StockExchange] = None
    price: Optional[Decimal] = None

    class Config:
        from_attributes = True

    def validate(self) -> None:
        require_min("horizontal_line", "id", self.id, 1)
        require_not_empty("horizontal_line", "symbol", self.symbol)
        require_not_null("horizontal_line", "stock_exchange", self.stock_exchange)
        require_price("horizontal_line", "price", self.price, self.MIN_PRICE)

    def content_equals(self, other: "HorizontalLine") -> bool:
        return (
            self.id == other.id
            and self.symbol == other.symbol
            and self.stock_exchange == other.stock_exchange
            and _same_amount(self.price, other.price)
        )


def _same_amount(first: Optional[Decimal], second: Optional[Decimal]) -> bool:
    if first is None or second is None:
        return first is None and second is None
    return first.compare(second) == 0


class StockQuote(BaseModel):
    """Current price of an instrument as delivered by a quote provider."""
    symbol: str
    stock_exchange: Optional[StockExchange] = None
    price: Decimal
    currency: Optional[Currency] = None


class HistoricalData(BaseModel):
    """Daily OHLCV data entity."""
    date: dt.date
    symbol: str
    open: float = Field(alias="open_price")
    high: float
    low: float
    close: float
    volume: int

    class Config:
        from_attributes = True
        populate_by_name = True
