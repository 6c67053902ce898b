"""Breadth statistic business logic."""
from typing import Dict, List, Optional
import datetime as dt
import logging

from market_monitor.domain.entities import (
    IndustryGroupScope,
    InstrumentType,
    SectorScope,
    Statistic,
    StatisticScope,
)
from market_monitor.domain.exceptions import LocalizedError, ObjectUnchangedError, RetrievalError
from market_monitor.domain.interfaces import (
    HistoricalDataProvider,
    HistoricalDataRepository,
    StatisticRepository,
)
from market_monitor.domain.messages import get_catalog
from market_monitor.domain.results import WebServiceMessageType, WebServiceResult
from market_monitor.services.common import get_entity, list_entities, message
from market_monitor.services.statistic_calculator import calculate_statistics

logger = logging.getLogger(__name__)

# Counts that a recalculation replaces on a stored statistic.
CALCULATED_FIELDS = (
    "number_of_instruments",
    "number_advance",
    "number_decline",
    "number_above_sma50",
    "number_at_or_below_sma50",
    "number_above_sma200",
    "number_at_or_below_sma200",
    "number_ritter_market_trend",
)


def scope_of(sector_id: Optional[int], industry_group_id: Optional[int]) -> StatisticScope:
    """Build the statistic scope of a request, which may name a sector or an industry group."""
    if sector_id is not None and industry_group_id is not None:
        raise LocalizedError("statistic.error_on_sector_and_ig_requested")
    if sector_id is not None:
        return SectorScope(sector_id=sector_id)
    if industry_group_id is not None:
        return IndustryGroupScope(industry_group_id=industry_group_id)
    return None


class StatisticService:
    """Business logic for breadth statistic operations."""

    def __init__(
        self,
        repository: StatisticRepository,
        historical_repository: HistoricalDataRepository,
        symbols: List[str],
        history_provider: Optional[HistoricalDataProvider] = None,
        history_period: str = "1y",
    ):
        self._repository = repository
        self._historical_repository = historical_repository
        self._symbols = symbols
        self._history_provider = history_provider
        self._history_period = history_period

    def get_statistic(self, statistic_id: int) -> WebServiceResult:
        return get_entity(self._repository, "statistic", statistic_id)

    def get_statistics(
        self,
        instrument_type: InstrumentType,
        sector_id: Optional[int] = None,
        industry_group_id: Optional[int] = None,
    ) -> WebServiceResult:
        """Get the statistics of a type, newest first."""
        try:
            scope = scope_of(sector_id, industry_group_id)
        except LocalizedError as e:
            result = WebServiceResult()
            result.add_message(message(WebServiceMessageType.ERROR, e.key))
            return result
        return list_entities(
            "statistic", lambda: self._repository.get_statistics(instrument_type, scope)
        )

    def update_statistics(self, instrument_type: InstrumentType = InstrumentType.STOCK) -> WebServiceResult:
        """Recalculate the market-wide statistics and persist the differences."""
        result = WebServiceResult()
        try:
            self._refresh_histories()
            histories = [self._historical_repository.get_by_symbol(symbol) for symbol in self._symbols]
            calculated = calculate_statistics(instrument_type, histories)
            inserted, updated, deleted = self._persist(
                calculated, self._repository.get_statistics(instrument_type)
            )
        except Exception as e:
            result.add_message(
                message(WebServiceMessageType.ERROR, "statistic.update_error", instrument_type=instrument_type.value)
            )
            logger.error(
                get_catalog().message("statistic.update_error", instrument_type=instrument_type.value),
                exc_info=e,
            )
            return result

        result.add_message(
            message(
                WebServiceMessageType.SUCCESS,
                "statistic.update_success",
                instrument_type=instrument_type.value,
                inserted=inserted,
                updated=updated,
                deleted=deleted,
            )
        )
        return result

    def _refresh_histories(self) -> None:
        """Store the latest daily history of every symbol.

        A symbol whose history can not be retrieved keeps its stored history.
        """
        if self._history_provider is None:
            return
        for symbol in self._symbols:
            try:
                records = self._history_provider.get_history(symbol, self._history_period)
            except RetrievalError as e:
                logger.warning(f"Keeping stored history of {symbol}: {e}")
                continue
            self._historical_repository.insert_batch(records)

    def _persist(self, calculated: List[Statistic], stored: List[Statistic]):
        calculated_by_date: Dict[dt.date, Statistic] = {s.date: s for s in calculated}
        stored_by_date: Dict[dt.date, Statistic] = {s.date: s for s in stored}
        inserted = updated = deleted = 0

        for day, statistic in calculated_by_date.items():
            if day not in stored_by_date:
                statistic.validate()
                self._repository.insert(statistic)
                inserted += 1

        for day, statistic in stored_by_date.items():
            if day not in calculated_by_date:
                self._repository.delete(statistic)
                deleted += 1

        for day, statistic in calculated_by_date.items():
            if day not in stored_by_date:
                continue
            # The stored ID and cumulative sum are kept, only the counts are replaced.
            changed = stored_by_date[day].model_copy(
                update={field: getattr(statistic, field) for field in CALCULATED_FIELDS}
            )
            changed.validate()
            try:
                self._repository.update(changed)
                updated += 1
            except ObjectUnchangedError:
                continue

        logger.info(f"Statistics persisted: {inserted} inserted, {updated} updated, {deleted} deleted")
        return inserted, updated, deleted
