"""Domain exceptions."""
from market_monitor.domain.messages import get_catalog


class MarketMonitorError(Exception):
    """Base class of all application errors."""


class LocalizedError(MarketMonitorError):
    """Error whose text is looked up in the message catalog."""

    def __init__(self, key: str, **params):
        self.key = key
        self.params = params
        super().__init__(key)

    def __str__(self) -> str:
        return get_catalog().message(self.key, **self.params)


class ValidationError(LocalizedError):
    """An entity attribute violates a constraint."""

    def __init__(self, entity: str, field: str, constraint: str, **params):
        self.entity = entity
        self.field = field
        self.constraint = constraint
        super().__init__(f"{entity}.{field}.{constraint}", **params)


class MutualExclusionError(ValidationError):
    """Two attributes are set that must not be set together."""

    def __init__(self, entity: str, key: str, fields: tuple):
        super().__init__(entity, "+".join(fields), "mutual_exclusion")
        self.key = f"{entity}.{key}"


class DuplicateStatisticError(LocalizedError):
    """A statistic for the same date, instrument type and scope already exists."""

    def __init__(self, instrument_type, date):
        super().__init__("statistic.duplicate", instrument_type=instrument_type, date=date)


class ObjectUnchangedError(MarketMonitorError):
    """An update carries no change compared to the stored entity."""


class NotFoundError(MarketMonitorError):
    """The requested entity does not exist."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


class StorageError(MarketMonitorError):
    """The storage backend failed."""


class RetrievalError(MarketMonitorError):
    """A quote could not be retrieved from the provider."""
