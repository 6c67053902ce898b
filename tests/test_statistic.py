"""Tests for the statistic entity and its breadth metrics."""
from datetime import date, datetime

import pytest

from market_monitor.domain.entities import (
    IndustryGroupScope,
    InstrumentType,
    SectorScope,
    Statistic,
)
from market_monitor.domain.exceptions import ValidationError


def test_advance_decline_number(statistic):
    """Advances minus declines."""
    assert statistic.advance_decline_number == 3


def test_advance_decline_number_negative():
    statistic = Statistic(number_advance=1, number_decline=6)
    assert statistic.advance_decline_number == -5


def test_percent_above_sma50(statistic):
    assert statistic.percent_above_sma50 == 60


def test_percent_above_sma200(statistic):
    assert statistic.percent_above_sma200 == 40


def test_percent_is_fractional():
    """Percentages keep two decimals, rounded half up."""
    statistic = Statistic(number_above_sma50=1, number_at_or_below_sma50=2)
    assert statistic.percent_above_sma50 == 33.33

    statistic = Statistic(number_above_sma200=2, number_at_or_below_sma200=1)
    assert statistic.percent_above_sma200 == 66.67


def test_percent_without_counted_instruments_is_zero():
    """No instruments counted for a moving average yields 0.0."""
    statistic = Statistic(number_above_sma50=0, number_at_or_below_sma50=0)
    assert statistic.percent_above_sma50 == 0.0
    assert statistic.percent_above_sma200 == 0.0


def test_metrics_follow_count_changes(statistic):
    """Derived values are computed from the current counts."""
    statistic.number_above_sma50 = 1
    statistic.number_at_or_below_sma50 = 3
    assert statistic.percent_above_sma50 == 25


def test_datetime_is_normalized_to_date():
    statistic = Statistic(date=datetime(2024, 1, 2, 15, 30), instrument_type=InstrumentType.STOCK)
    assert statistic.date == date(2024, 1, 2)


def test_valid_statistic_passes_twice(statistic):
    """Validation has no side effects."""
    before = statistic.model_dump()
    statistic.validate()
    statistic.validate()
    assert statistic.model_dump() == before


def test_sector_and_industry_group_defined(statistic, catalog):
    statistic.sector_id = 1
    statistic.industry_group_id = 2

    with pytest.raises(ValidationError) as error:
        statistic.validate()

    assert str(error.value) == catalog.message("statistic.sector_and_ig_defined")
    assert error.value.key == "statistic.sector_and_ig_defined"
    assert error.value.entity == "statistic"


def test_only_sector_defined_is_valid(statistic):
    statistic.sector_id = 1
    statistic.validate()
    assert statistic.scope == SectorScope(sector_id=1)


def test_only_industry_group_defined_is_valid(statistic):
    statistic.industry_group_id = 7
    statistic.validate()
    assert statistic.scope == IndustryGroupScope(industry_group_id=7)


def test_market_wide_scope_is_none(statistic):
    assert statistic.scope is None


def test_for_scope_sets_single_reference():
    statistic = Statistic.for_scope(
        date(2024, 1, 2), InstrumentType.ETF, IndustryGroupScope(industry_group_id=3), number_advance=2
    )
    assert statistic.industry_group_id == 3
    assert statistic.sector_id is None
    assert statistic.number_advance == 2
    statistic.validate()


def test_date_missing(statistic, catalog):
    statistic.date = None
    with pytest.raises(ValidationError) as error:
        statistic.validate()
    assert str(error.value) == catalog.validation_message("statistic", "date", "not_null")


def test_instrument_type_missing(statistic, catalog):
    statistic.instrument_type = None
    with pytest.raises(ValidationError) as error:
        statistic.validate()
    assert str(error.value) == catalog.validation_message("statistic", "instrument_type", "not_null")


def test_negative_count(statistic, catalog):
    statistic.number_decline = -1
    with pytest.raises(ValidationError) as error:
        statistic.validate()
    assert error.value.field == "number_decline"
    assert str(error.value) == catalog.validation_message(
        "statistic", "number_decline", "min", value="0"
    )


def test_check_order(catalog):
    """The date is checked before the scope, the scope before the counts."""
    statistic = Statistic(
        instrument_type=InstrumentType.STOCK, sector_id=1, industry_group_id=2, number_advance=-1
    )
    with pytest.raises(ValidationError) as error:
        statistic.validate()
    assert error.value.field == "date"

    statistic.date = date(2024, 1, 2)
    with pytest.raises(ValidationError) as error:
        statistic.validate()
    assert error.value.key == "statistic.sector_and_ig_defined"

    statistic.industry_group_id = None
    with pytest.raises(ValidationError) as error:
        statistic.validate()
    assert error.value.field == "number_advance"
