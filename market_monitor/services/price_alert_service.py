"""Price alert business logic."""
from datetime import datetime
from typing import List
import logging

from market_monitor.domain.entities import ConfirmationStatus, PriceAlert, TriggerStatus
from market_monitor.domain.exceptions import NotFoundError, RetrievalError, StorageError
from market_monitor.domain.interfaces import PriceAlertRepository, StockQuoteProvider
from market_monitor.domain.results import WebServiceResult
from market_monitor.services.common import (
    add_entity,
    delete_entity,
    get_entity,
    list_entities,
    update_entity,
)

logger = logging.getLogger(__name__)


class PriceAlertService:
    """Business logic for price alerts."""

    def __init__(self, repository: PriceAlertRepository, quote_provider: StockQuoteProvider):
        self._repository = repository
        self._quote_provider = quote_provider

    def get_price_alert(self, alert_id: int) -> WebServiceResult:
        return get_entity(self._repository, "price_alert", alert_id)

    def get_price_alerts(
        self,
        trigger_status: TriggerStatus = TriggerStatus.ALL,
        confirmation_status: ConfirmationStatus = ConfirmationStatus.ALL,
    ) -> WebServiceResult:
        return list_entities(
            "price_alert",
            lambda: self._repository.get_price_alerts(trigger_status, confirmation_status),
        )

    def add_price_alert(self, price_alert: PriceAlert) -> WebServiceResult:
        return add_entity(self._repository, "price_alert", price_alert)

    def update_price_alert(self, price_alert: PriceAlert) -> WebServiceResult:
        return update_entity(self._repository, "price_alert", price_alert)

    def delete_price_alert(self, alert_id: int) -> WebServiceResult:
        return delete_entity(self._repository, "price_alert", alert_id)

    def check_price_alerts(self) -> List[PriceAlert]:
        """Compare all untriggered alerts with current quotes.

        Every alert gets the time of its latest quote; alerts whose price has
        been reached also get a trigger time. Returns the triggered alerts.
        """
        triggered: List[PriceAlert] = []
        alerts = self._repository.get_price_alerts(trigger_status=TriggerStatus.NOT_TRIGGERED)

        for alert in alerts:
            try:
                quote = self._quote_provider.get_quote(alert.symbol, alert.stock_exchange)
            except RetrievalError as e:
                logger.warning(f"Skipping price alert {alert.id}: {e}")
                continue

            now = datetime.now()
            update = {"last_stock_quote_time": now}
            if alert.is_triggered_by(quote.price):
                update["trigger_time"] = now
            checked = alert.model_copy(update=update)
            try:
                self._repository.update(checked)
            except (StorageError, NotFoundError) as e:
                logger.error(f"Price alert {alert.id} could not be updated: {e}")
                continue

            if checked.is_triggered:
                logger.warning(
                    f"ALERT: {alert.symbol} at {quote.price} reached {alert.alert_type.value} {alert.price}"
                )
                triggered.append(checked)

        logger.info(f"Checked {len(alerts)} price alerts, {len(triggered)} triggered")
        return triggered
