"""Helpers shared by the services that answer front end requests."""
from typing import Callable
import logging

from market_monitor.domain.exceptions import (
    LocalizedError,
    NotFoundError,
    ObjectUnchangedError,
)
from market_monitor.domain.interfaces import EntityRepository
from market_monitor.domain.messages import get_catalog
from market_monitor.domain.results import (
    WebServiceMessage,
    WebServiceMessageType,
    WebServiceResult,
)
from market_monitor.domain.validation import require_not_null

logger = logging.getLogger(__name__)


def message(message_type: WebServiceMessageType, key: str, **params) -> WebServiceMessage:
    """Create a message from the localized catalog."""
    return WebServiceMessage(type=message_type, text=get_catalog().message(key, **params))


def error_message(error: Exception) -> WebServiceMessage:
    return WebServiceMessage(type=WebServiceMessageType.ERROR, text=str(error))


def get_entity(repository: EntityRepository, entity_key: str, entity_id: int) -> WebServiceResult:
    """Look up an entity by ID for the front end."""
    result = WebServiceResult()
    try:
        entity = repository.get(entity_id)
    except Exception as e:
        result.add_message(message(WebServiceMessageType.ERROR, f"{entity_key}.get_error", id=entity_id))
        logger.error(get_catalog().message(f"{entity_key}.get_error", id=entity_id), exc_info=e)
        return result

    if entity is None:
        result.add_message(message(WebServiceMessageType.ERROR, f"{entity_key}.not_found", id=entity_id))
    else:
        result.data = entity
    return result


def add_entity(repository: EntityRepository, entity_key: str, entity) -> WebServiceResult:
    """Validate and insert a new entity; the result data is the new ID."""
    result = WebServiceResult()
    try:
        entity.validate()
    except LocalizedError as validation_error:
        result.add_message(error_message(validation_error))
        return result

    try:
        stored = repository.insert(entity)
    except LocalizedError as e:
        result.add_message(error_message(e))
        return result
    except Exception as e:
        result.add_message(message(WebServiceMessageType.ERROR, f"{entity_key}.add_error"))
        logger.error(get_catalog().message(f"{entity_key}.add_error"), exc_info=e)
        return result

    result.add_message(message(WebServiceMessageType.SUCCESS, f"{entity_key}.add_success"))
    result.data = stored.id
    return result


def update_entity(repository: EntityRepository, entity_key: str, entity) -> WebServiceResult:
    """Validate and update an entity.

    An update without changes is reported as information, not as an error.
    """
    result = WebServiceResult()
    try:
        require_not_null(entity_key, "id", entity.id)
        entity.validate()
    except LocalizedError as validation_error:
        result.add_message(error_message(validation_error))
        return result

    try:
        repository.update(entity)
    except ObjectUnchangedError:
        result.add_message(message(WebServiceMessageType.INFO, f"{entity_key}.update_unchanged", id=entity.id))
        return result
    except NotFoundError:
        result.add_message(message(WebServiceMessageType.ERROR, f"{entity_key}.not_found", id=entity.id))
        return result
    except LocalizedError as e:
        result.add_message(error_message(e))
        return result
    except Exception as e:
        result.add_message(message(WebServiceMessageType.ERROR, f"{entity_key}.update_error", id=entity.id))
        logger.error(get_catalog().message(f"{entity_key}.update_error", id=entity.id), exc_info=e)
        return result

    result.add_message(message(WebServiceMessageType.SUCCESS, f"{entity_key}.update_success", id=entity.id))
    return result


def delete_entity(repository: EntityRepository, entity_key: str, entity_id: int) -> WebServiceResult:
    result = WebServiceResult()
    try:
        entity = repository.get(entity_id)
        if entity is None:
            result.add_message(message(WebServiceMessageType.ERROR, f"{entity_key}.not_found", id=entity_id))
            return result
        repository.delete(entity)
    except NotFoundError:
        result.add_message(message(WebServiceMessageType.ERROR, f"{entity_key}.not_found", id=entity_id))
        return result
    except Exception as e:
        result.add_message(message(WebServiceMessageType.ERROR, f"{entity_key}.delete_error", id=entity_id))
        logger.error(get_catalog().message(f"{entity_key}.delete_error", id=entity_id), exc_info=e)
        return result

    result.add_message(message(WebServiceMessageType.SUCCESS, f"{entity_key}.delete_success", id=entity_id))
    return result


def list_entities(entity_key: str, query: Callable[[], list]) -> WebServiceResult:
    """Run a list query, reporting failures as an error message."""
    result = WebServiceResult()
    key = f"{entity_key}.get_{entity_key}s_error"
    try:
        result.data = query()
    except Exception as e:
        result.add_message(message(WebServiceMessageType.ERROR, key))
        logger.error(get_catalog().message(key), exc_info=e)
    return result
