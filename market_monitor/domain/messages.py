"""Localized message catalogs.

Messages are looked up by dotted keys. Validation messages use the key
``<entity>.<field>.<constraint>``; service messages use ``<entity>.<event>``.
Templates are ``str.format`` strings with named parameters.

The process-wide catalog is chosen once at startup and cannot be switched to
another locale afterwards.
"""
import logging
import threading
from typing import Dict, Optional

from market_monitor.config import app_config

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

_EN: Dict[str, str] = {
    # Statistic validation
    "statistic.date.not_null": "The date of the statistic must be defined.",
    "statistic.instrument_type.not_null": "The instrument type of the statistic must be defined.",
    "statistic.sector_and_ig_defined": "A statistic can either reference a sector or an industry group, but not both.",
    "statistic.number_of_instruments.min": "The number of instruments must be at least {value}.",
    "statistic.number_advance.min": "The number of advancing instruments must be at least {value}.",
    "statistic.number_decline.min": "The number of declining instruments must be at least {value}.",
    "statistic.number_above_sma50.min": "The number of instruments above the SMA(50) must be at least {value}.",
    "statistic.number_at_or_below_sma50.min": "The number of instruments at or below the SMA(50) must be at least {value}.",
    "statistic.number_above_sma200.min": "The number of instruments above the SMA(200) must be at least {value}.",
    "statistic.number_at_or_below_sma200.min": "The number of instruments at or below the SMA(200) must be at least {value}.",
    # Statistic service
    "statistic.error_on_sector_and_ig_requested": "Statistics can be requested either for a sector or an industry group, but not both.",
    "statistic.duplicate": "A statistic of type {instrument_type} already exists for {date}.",
    "statistic.not_found": "The statistic with ID {id} could not be found.",
    "statistic.get_error": "The statistic with ID {id} could not be determined.",
    "statistic.get_statistics_error": "The statistics could not be determined.",
    "statistic.update_success": "The statistics of type {instrument_type} have been updated: {inserted} inserted, {updated} updated, {deleted} deleted.",
    "statistic.update_error": "The statistics of type {instrument_type} could not be updated.",
    # Price alert validation
    "price_alert.id.min": "The ID must be at least {value}.",
    "price_alert.id.not_null": "The ID must be defined.",
    "price_alert.symbol.not_empty": "The symbol must be defined.",
    "price_alert.stock_exchange.not_null": "The stock exchange must be defined.",
    "price_alert.alert_type.not_null": "The alert type must be defined.",
    "price_alert.price.not_null": "The price must be defined.",
    "price_alert.price.finite": "The price must be a finite number.",
    "price_alert.price.decimal_min": "The price must be at least {value}.",
    "price_alert.price.max": "The price must not exceed {value}.",
    "price_alert.price.digits": "The price must not have more than {value} decimal places.",
    # Price alert service
    "price_alert.update_after_triggered": "The price alert has already been triggered and can not be changed anymore.",
    "price_alert.not_found": "The price alert with ID {id} could not be found.",
    "price_alert.get_error": "The price alert with ID {id} could not be determined.",
    "price_alert.get_price_alerts_error": "The price alerts could not be determined.",
    "price_alert.add_success": "The price alert has been added.",
    "price_alert.add_error": "The price alert could not be added.",
    "price_alert.update_success": "The price alert with ID {id} has been updated.",
    "price_alert.update_unchanged": "The price alert with ID {id} has not been changed.",
    "price_alert.update_error": "The price alert with ID {id} could not be updated.",
    "price_alert.delete_success": "The price alert with ID {id} has been deleted.",
    "price_alert.delete_error": "The price alert with ID {id} could not be deleted.",
    # Horizontal line validation
    "horizontal_line.id.min": "The ID must be at least {value}.",
    "horizontal_line.id.not_null": "The ID must be defined.",
    "horizontal_line.symbol.not_empty": "The symbol must be defined.",
    "horizontal_line.stock_exchange.not_null": "The stock exchange must be defined.",
    "horizontal_line.price.not_null": "The price must be defined.",
    "horizontal_line.price.finite": "The price must be a finite number.",
    "horizontal_line.price.decimal_min": "The price must be at least {value}.",
    "horizontal_line.price.digits": "The price must not have more than {value} decimal places.",
    # Horizontal line service
    "horizontal_line.not_found": "The horizontal line with ID {id} could not be found.",
    "horizontal_line.get_error": "The horizontal line with ID {id} could not be determined.",
    "horizontal_line.get_horizontal_lines_error": "The horizontal lines could not be determined.",
    "horizontal_line.add_success": "The horizontal line has been added.",
    "horizontal_line.add_error": "The horizontal line could not be added.",
    "horizontal_line.update_success": "The horizontal line with ID {id} has been updated.",
    "horizontal_line.update_unchanged": "The horizontal line with ID {id} has not been changed.",
    "horizontal_line.update_error": "The horizontal line with ID {id} could not be updated.",
    "horizontal_line.delete_success": "The horizontal line with ID {id} has been deleted.",
    "horizontal_line.delete_error": "The horizontal line with ID {id} could not be deleted.",
    # Quotes
    "stock_quote.get_error": "The quote of {symbol} at {stock_exchange} could not be retrieved.",
}

_DE: Dict[str, str] = {
    "statistic.date.not_null": "Das Datum der Statistik muss angegeben werden.",
    "statistic.instrument_type.not_null": "Der Instrumententyp der Statistik muss angegeben werden.",
    "statistic.sector_and_ig_defined": "Eine Statistik kann entweder einem Sektor oder einer Industriegruppe zugeordnet sein, aber nicht beiden.",
    "statistic.number_of_instruments.min": "Die Anzahl der Instrumente muss mindestens {value} betragen.",
    "statistic.number_advance.min": "Die Anzahl steigender Instrumente muss mindestens {value} betragen.",
    "statistic.number_decline.min": "Die Anzahl fallender Instrumente muss mindestens {value} betragen.",
    "statistic.number_above_sma50.min": "Die Anzahl der Instrumente über dem SMA(50) muss mindestens {value} betragen.",
    "statistic.number_at_or_below_sma50.min": "Die Anzahl der Instrumente auf oder unter dem SMA(50) muss mindestens {value} betragen.",
    "statistic.number_above_sma200.min": "Die Anzahl der Instrumente über dem SMA(200) muss mindestens {value} betragen.",
    "statistic.number_at_or_below_sma200.min": "Die Anzahl der Instrumente auf oder unter dem SMA(200) muss mindestens {value} betragen.",
    "statistic.error_on_sector_and_ig_requested": "Statistiken können entweder für einen Sektor oder eine Industriegruppe abgefragt werden, aber nicht für beide.",
    "statistic.duplicate": "Für den {date} existiert bereits eine Statistik vom Typ {instrument_type}.",
    "statistic.not_found": "Die Statistik mit der ID {id} wurde nicht gefunden.",
    "statistic.get_error": "Die Statistik mit der ID {id} konnte nicht ermittelt werden.",
    "statistic.get_statistics_error": "Die Statistiken konnten nicht ermittelt werden.",
    "statistic.update_success": "Die Statistiken vom Typ {instrument_type} wurden aktualisiert: {inserted} eingefügt, {updated} geändert, {deleted} gelöscht.",
    "statistic.update_error": "Die Statistiken vom Typ {instrument_type} konnten nicht aktualisiert werden.",
    "price_alert.id.min": "Die ID muss mindestens {value} betragen.",
    "price_alert.id.not_null": "Die ID muss angegeben werden.",
    "price_alert.symbol.not_empty": "Das Symbol muss angegeben werden.",
    "price_alert.stock_exchange.not_null": "Die Börse muss angegeben werden.",
    "price_alert.alert_type.not_null": "Der Alarmtyp muss angegeben werden.",
    "price_alert.price.not_null": "Der Preis muss angegeben werden.",
    "price_alert.price.finite": "Der Preis muss eine endliche Zahl sein.",
    "price_alert.price.decimal_min": "Der Preis muss mindestens {value} betragen.",
    "price_alert.price.max": "Der Preis darf {value} nicht überschreiten.",
    "price_alert.price.digits": "Der Preis darf höchstens {value} Nachkommastellen haben.",
    "price_alert.update_after_triggered": "Der Preisalarm wurde bereits ausgelöst und kann nicht mehr geändert werden.",
    "price_alert.not_found": "Der Preisalarm mit der ID {id} wurde nicht gefunden.",
    "price_alert.get_error": "Der Preisalarm mit der ID {id} konnte nicht ermittelt werden.",
    "price_alert.get_price_alerts_error": "Die Preisalarme konnten nicht ermittelt werden.",
    "price_alert.add_success": "Der Preisalarm wurde hinzugefügt.",
    "price_alert.add_error": "Der Preisalarm konnte nicht hinzugefügt werden.",
    "price_alert.update_success": "Der Preisalarm mit der ID {id} wurde aktualisiert.",
    "price_alert.update_unchanged": "Der Preisalarm mit der ID {id} wurde nicht verändert.",
    "price_alert.update_error": "Der Preisalarm mit der ID {id} konnte nicht aktualisiert werden.",
    "price_alert.delete_success": "Der Preisalarm mit der ID {id} wurde gelöscht.",
    "price_alert.delete_error": "Der Preisalarm mit der ID {id} konnte nicht gelöscht werden.",
    "horizontal_line.id.min": "Die ID muss mindestens {value} betragen.",
    "horizontal_line.id.not_null": "Die ID muss angegeben werden.",
    "horizontal_line.symbol.not_empty": "Das Symbol muss angegeben werden.",
    "horizontal_line.stock_exchange.not_null": "Die Börse muss angegeben werden.",
    "horizontal_line.price.not_null": "Der Preis muss angegeben werden.",
    "horizontal_line.price.finite": "Der Preis muss eine endliche Zahl sein.",
    "horizontal_line.price.decimal_min": "Der Preis muss mindestens {value} betragen.",
    "horizontal_line.price.digits": "Der Preis darf höchstens {value} Nachkommastellen haben.",
    "horizontal_line.not_found": "Die horizontale Linie mit der ID {id} wurde nicht gefunden.",
    "horizontal_line.get_error": "Die horizontale Linie mit der ID {id} konnte nicht ermittelt werden.",
    "horizontal_line.get_horizontal_lines_error": "Die horizontalen Linien konnten nicht ermittelt werden.",
    "horizontal_line.add_success": "Die horizontale Linie wurde hinzugefügt.",
    "horizontal_line.add_error": "Die horizontale Linie konnte nicht hinzugefügt werden.",
    "horizontal_line.update_success": "Die horizontale Linie mit der ID {id} wurde aktualisiert.",
    "horizontal_line.update_unchanged": "Die horizontale Linie mit der ID {id} wurde nicht verändert.",
    "horizontal_line.update_error": "Die horizontale Linie mit der ID {id} konnte nicht aktualisiert werden.",
    "horizontal_line.delete_success": "Die horizontale Linie mit der ID {id} wurde gelöscht.",
    "horizontal_line.delete_error": "Die horizontale Linie mit der ID {id} konnte nicht gelöscht werden.",
    "stock_quote.get_error": "Der Kurs von {symbol} an der Börse {stock_exchange} konnte nicht abgerufen werden.",
}

CATALOGS: Dict[str, Dict[str, str]] = {
    "en": _EN,
    "de": _DE,
}


class MessageCatalog:
    """Message templates of a single locale."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        if locale not in CATALOGS:
            raise ValueError(f"Unsupported locale: {locale!r}")
        self._locale = locale
        self._templates = CATALOGS[locale]

    @property
    def locale(self) -> str:
        return self._locale

    def message(self, key: str, **params) -> str:
        """Format the template stored under key."""
        try:
            template = self._templates[key]
        except KeyError:
            raise KeyError(f"No message '{key}' in catalog '{self._locale}'") from None
        return template.format(**params)

    def validation_message(self, entity: str, field: str, constraint: str, **params) -> str:
        """Format the message of a violated field constraint."""
        return self.message(f"{entity}.{field}.{constraint}", **params)


_catalog: Optional[MessageCatalog] = None
_catalog_lock = threading.Lock()


def configure_catalog(locale: str) -> MessageCatalog:
    """Select the process-wide catalog.

    Calling it again with the active locale is a no-op; switching to a
    different locale once a catalog is active raises RuntimeError.
    """
    global _catalog
    with _catalog_lock:
        if _catalog is not None:
            if _catalog.locale != locale:
                raise RuntimeError(
                    f"Message catalog already configured for locale '{_catalog.locale}'"
                )
            return _catalog
        _catalog = MessageCatalog(locale)
        logger.info(f"Message catalog configured for locale '{locale}'")
        return _catalog


def get_catalog() -> MessageCatalog:
    """Get the process-wide catalog, configuring it from AppConfig on first use."""
    if _catalog is None:
        return configure_catalog(app_config.LOCALE)
    return _catalog
