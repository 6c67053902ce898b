"""Tests for the ClickHouse repositories."""
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from clickhouse_driver.errors import Error as ClickHouseError

from market_monitor.domain.entities import (
    ConfirmationStatus,
    HistoricalData,
    InstrumentType,
    SectorScope,
    StockExchange,
    TriggerStatus,
)
from market_monitor.domain.exceptions import (
    DuplicateStatisticError,
    LocalizedError,
    NotFoundError,
    ObjectUnchangedError,
    StorageError,
)
from market_monitor.repository.base_repository import MUTATION_SETTINGS
from market_monitor.repository.clickhouse_client import ClickHouseConnection
from market_monitor.repository.market_repository import (
    ClickHouseHistoricalRepository,
    ClickHouseHorizontalLineRepository,
    ClickHousePriceAlertRepository,
    ClickHouseStatisticRepository,
)
from market_monitor.repository.schema import TABLES, ensure_schema


def respond(rows, max_id=0):
    """Connection.execute stand-in answering SELECTs with rows."""
    def execute(query, params=None, settings=None):
        if query.startswith("SELECT max(id)"):
            return [(max_id,)]
        if query.startswith("SELECT"):
            return rows
        return []
    return execute


def queries(connection, prefix):
    return [c for c in connection.execute.call_args_list if c.args[0].startswith(prefix)]


class TestPriceAlertRepository:
    """Tests for ClickHousePriceAlertRepository."""

    def test_get(self, mock_clickhouse_connection, price_alert):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(price_alert)])

        stored = repository.get(1)

        assert stored == price_alert
        query, params = mock_clickhouse_connection.execute.call_args.args
        assert "WHERE id = %(id)s" in query
        assert params == {"id": 1}

    def test_get_missing(self, mock_clickhouse_connection):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)
        assert repository.get(42) is None

    def test_insert_assigns_next_id(self, mock_clickhouse_connection, price_alert):
        price_alert.id = None
        mock_clickhouse_connection.execute.side_effect = respond([], max_id=4)
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)

        stored = repository.insert(price_alert)

        assert stored.id == 5
        assert price_alert.id is None
        query, rows = mock_clickhouse_connection.insert.call_args.args
        assert query.startswith("INSERT INTO price_alerts (id, symbol, stock_exchange")
        assert rows == [(5, "AAPL", "NYSE", "GREATER_OR_EQUAL", Decimal("185.50"), None, None, None)]

    def test_insert_into_empty_table(self, mock_clickhouse_connection, price_alert):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)
        assert repository.insert(price_alert).id == 1

    def test_update(self, mock_clickhouse_connection, price_alert):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(price_alert)])
        changed = price_alert.model_copy(update={"price": Decimal("190")})

        repository.update(changed)

        (update,) = queries(mock_clickhouse_connection, "ALTER TABLE price_alerts UPDATE")
        assert "WHERE id = %(id)s" in update.args[0]
        assert update.args[1]["price"] == Decimal("190")
        assert update.args[1]["stock_exchange"] == "NYSE"
        assert update.kwargs["settings"] == MUTATION_SETTINGS

    def test_update_unchanged(self, mock_clickhouse_connection, price_alert):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(price_alert)])

        with pytest.raises(ObjectUnchangedError):
            repository.update(price_alert.model_copy())

        assert queries(mock_clickhouse_connection, "ALTER") == []

    def test_update_missing(self, mock_clickhouse_connection, price_alert):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)

        with pytest.raises(NotFoundError):
            repository.update(price_alert)

    def test_triggered_alert_accepts_confirmation(self, mock_clickhouse_connection, price_alert):
        triggered = price_alert.model_copy(update={"trigger_time": datetime(2024, 1, 2, 15, 0)})
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(triggered)])

        repository.update(triggered.model_copy(update={"confirmation_time": datetime(2024, 1, 2, 16, 0)}))

        assert len(queries(mock_clickhouse_connection, "ALTER TABLE price_alerts UPDATE")) == 1

    def test_triggered_alert_rejects_price_change(self, mock_clickhouse_connection, price_alert, catalog):
        triggered = price_alert.model_copy(update={"trigger_time": datetime(2024, 1, 2, 15, 0)})
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(triggered)])

        with pytest.raises(LocalizedError) as error:
            repository.update(triggered.model_copy(update={"price": Decimal("200")}))

        assert str(error.value) == catalog.message("price_alert.update_after_triggered")
        assert queries(mock_clickhouse_connection, "ALTER") == []

    def test_confirmed_alert_is_closed(self, mock_clickhouse_connection, price_alert):
        closed = price_alert.model_copy(
            update={
                "trigger_time": datetime(2024, 1, 2, 15, 0),
                "confirmation_time": datetime(2024, 1, 2, 16, 0),
            }
        )
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(closed)])

        with pytest.raises(LocalizedError):
            repository.update(closed.model_copy(update={"confirmation_time": None}))

    def test_delete(self, mock_clickhouse_connection, price_alert):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(price_alert)])

        repository.delete(price_alert)

        (delete,) = queries(mock_clickhouse_connection, "ALTER TABLE price_alerts DELETE")
        assert delete.args[1] == {"id": 1}
        assert delete.kwargs["settings"] == MUTATION_SETTINGS

    def test_delete_missing(self, mock_clickhouse_connection, price_alert):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)

        with pytest.raises(NotFoundError):
            repository.delete(price_alert)

    def test_get_price_alerts_filters(self, mock_clickhouse_connection):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)

        repository.get_price_alerts(TriggerStatus.TRIGGERED, ConfirmationStatus.NOT_CONFIRMED)

        query = mock_clickhouse_connection.execute.call_args.args[0]
        assert "trigger_time IS NOT NULL AND confirmation_time IS NULL" in query
        assert query.endswith("ORDER BY id ASC")

    def test_get_all_price_alerts(self, mock_clickhouse_connection):
        repository = ClickHousePriceAlertRepository(mock_clickhouse_connection)

        repository.get_price_alerts()

        assert "WHERE" not in mock_clickhouse_connection.execute.call_args.args[0]


class TestStatisticRepository:
    """Tests for ClickHouseStatisticRepository."""

    def test_get_statistics_of_sector(self, mock_clickhouse_connection, statistic):
        repository = ClickHouseStatisticRepository(mock_clickhouse_connection)
        sector_statistic = statistic.model_copy(update={"sector_id": 3})
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(sector_statistic)])

        statistics = repository.get_statistics(InstrumentType.STOCK, SectorScope(sector_id=3))

        assert statistics == [sector_statistic]
        query, params = mock_clickhouse_connection.execute.call_args.args
        assert "sector_id = %(sector_id)s AND industry_group_id IS NULL" in query
        assert query.endswith("ORDER BY date DESC")
        assert params == {"instrument_type": "STOCK", "sector_id": 3}

    def test_insert_duplicate(self, mock_clickhouse_connection, statistic, catalog):
        repository = ClickHouseStatisticRepository(mock_clickhouse_connection)
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(statistic)])

        with pytest.raises(DuplicateStatisticError) as error:
            repository.insert(statistic.model_copy(update={"id": None}))

        assert str(error.value) == catalog.message("statistic.duplicate", instrument_type="STOCK", date=date(2024, 1, 2))
        mock_clickhouse_connection.insert.assert_not_called()

    def test_insert(self, mock_clickhouse_connection, statistic):
        mock_clickhouse_connection.execute.side_effect = respond([], max_id=9)
        repository = ClickHouseStatisticRepository(mock_clickhouse_connection)

        stored = repository.insert(statistic.model_copy(update={"id": None}))

        assert stored.id == 10
        row = mock_clickhouse_connection.insert.call_args.args[1][0]
        assert row[:3] == (10, date(2024, 1, 2), "STOCK")

    def test_update_counts(self, mock_clickhouse_connection, statistic):
        repository = ClickHouseStatisticRepository(mock_clickhouse_connection)
        mock_clickhouse_connection.execute.side_effect = respond([repository._to_row(statistic)])

        repository.update(statistic.model_copy(update={"number_advance": 5}))

        (update,) = queries(mock_clickhouse_connection, "ALTER TABLE statistics UPDATE")
        assert update.args[1]["number_advance"] == 5


class TestHorizontalLineRepository:
    """Tests for ClickHouseHorizontalLineRepository."""

    def test_get_horizontal_lines_of_instrument(self, mock_clickhouse_connection):
        repository = ClickHouseHorizontalLineRepository(mock_clickhouse_connection)

        repository.get_horizontal_lines("AAPL", StockExchange.NYSE)

        query, params = mock_clickhouse_connection.execute.call_args.args
        assert "symbol = %(symbol)s AND stock_exchange = %(stock_exchange)s" in query
        assert params == {"symbol": "AAPL", "stock_exchange": "NYSE"}


class TestHistoricalRepository:
    """Tests for ClickHouseHistoricalRepository."""

    def test_get_by_symbol(self, mock_clickhouse_connection):
        mock_clickhouse_connection.execute.return_value = [
            (date(2024, 1, 2), "AAPL", 185.0, 187.5, 184.0, 186.0, 1000000),
        ]
        repository = ClickHouseHistoricalRepository(mock_clickhouse_connection)

        history = repository.get_by_symbol("AAPL")

        assert len(history) == 1
        assert history[0].open == 185.0
        assert history[0].close == 186.0
        assert history[0].volume == 1000000
        assert mock_clickhouse_connection.execute.call_args.args[1] == {"symbol": "AAPL"}

    def test_insert_batch(self, mock_clickhouse_connection):
        repository = ClickHouseHistoricalRepository(mock_clickhouse_connection)
        record = HistoricalData(
            date=date(2024, 1, 2), symbol="AAPL", open_price=185.0, high=187.5, low=184.0, close=186.0, volume=10
        )

        repository.insert_batch([record])

        query, rows = mock_clickhouse_connection.insert.call_args.args
        assert query.startswith("INSERT INTO historical_data")
        assert rows == [(date(2024, 1, 2), "AAPL", 185.0, 187.5, 184.0, 186.0, 10)]

    def test_insert_empty_batch(self, mock_clickhouse_connection):
        ClickHouseHistoricalRepository(mock_clickhouse_connection).insert_batch([])
        mock_clickhouse_connection.insert.assert_not_called()


class TestClickHouseConnection:
    """Tests for ClickHouseConnection."""

    def test_client_requires_connection(self):
        with pytest.raises(RuntimeError):
            ClickHouseConnection().client

    @patch("market_monitor.repository.clickhouse_client.Client")
    def test_connect_creates_database(self, mock_client_class):
        connection = ClickHouseConnection()

        connection.connect()

        mock_client_class.return_value.execute.assert_called_once_with(
            f"CREATE DATABASE IF NOT EXISTS {connection.database}"
        )
        assert mock_client_class.call_args.kwargs["database"] == connection.database

    @patch("market_monitor.repository.clickhouse_client.Client")
    def test_connect_failure(self, mock_client_class):
        mock_client_class.return_value.execute.side_effect = ClickHouseError("connection refused")

        with pytest.raises(StorageError):
            ClickHouseConnection().connect()

    @patch("market_monitor.repository.clickhouse_client.Client")
    def test_execute_passes_settings(self, mock_client_class):
        connection = ClickHouseConnection()
        connection.connect()

        connection.execute("ALTER TABLE t DELETE WHERE id = %(id)s", {"id": 1}, settings=MUTATION_SETTINGS)

        mock_client_class.return_value.execute.assert_called_with(
            "ALTER TABLE t DELETE WHERE id = %(id)s", {"id": 1}, settings=MUTATION_SETTINGS
        )

    @patch("market_monitor.repository.clickhouse_client.Client")
    def test_driver_errors_become_storage_errors(self, mock_client_class):
        connection = ClickHouseConnection()
        connection.connect()
        mock_client_class.return_value.execute.side_effect = ClickHouseError("table missing")

        with pytest.raises(StorageError):
            connection.execute("SELECT 1")
        with pytest.raises(StorageError):
            connection.insert("INSERT INTO t VALUES", [(1,)])
        assert not connection.is_available()

    @patch("market_monitor.repository.clickhouse_client.Client")
    def test_disconnect(self, mock_client_class):
        connection = ClickHouseConnection()
        connection.connect()
        assert connection.is_available()

        connection.disconnect()

        with pytest.raises(RuntimeError):
            connection.client
        assert not connection.is_available()


def test_ensure_schema():
    connection = MagicMock()

    ensure_schema(connection)

    assert connection.execute.call_count == len(TABLES)
    assert all("CREATE TABLE IF NOT EXISTS" in c.args[0] for c in connection.execute.call_args_list)
