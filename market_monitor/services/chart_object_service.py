"""Chart object business logic."""
from typing import Optional
import logging

from market_monitor.domain.entities import HorizontalLine, StockExchange
from market_monitor.domain.interfaces import HorizontalLineRepository
from market_monitor.domain.results import WebServiceResult
from market_monitor.services.common import (
    add_entity,
    delete_entity,
    get_entity,
    list_entities,
    update_entity,
)

logger = logging.getLogger(__name__)


class ChartObjectService:
    """Business logic for objects drawn on instrument charts."""

    def __init__(self, repository: HorizontalLineRepository):
        self._repository = repository

    def get_horizontal_line(self, line_id: int) -> WebServiceResult:
        return get_entity(self._repository, "horizontal_line", line_id)

    def get_horizontal_lines(
        self, symbol: Optional[str] = None, stock_exchange: Optional[StockExchange] = None
    ) -> WebServiceResult:
        """Get horizontal lines, optionally of a single instrument (symbol uppercase normalized)."""
        if symbol:
            symbol = symbol.upper()
        return list_entities(
            "horizontal_line",
            lambda: self._repository.get_horizontal_lines(symbol, stock_exchange),
        )

    def add_horizontal_line(self, line: HorizontalLine) -> WebServiceResult:
        return add_entity(self._repository, "horizontal_line", line)

    def update_horizontal_line(self, line: HorizontalLine) -> WebServiceResult:
        return update_entity(self._repository, "horizontal_line", line)

    def delete_horizontal_line(self, line_id: int) -> WebServiceResult:
        return delete_entity(self._repository, "horizontal_line", line_id)
