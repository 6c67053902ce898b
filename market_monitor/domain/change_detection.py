"""Change detection applied before an entity update is written."""
from typing import Protocol, TypeVar

from market_monitor.domain.exceptions import ObjectUnchangedError


class ContentComparable(Protocol):
    """An entity that can tell whether another instance carries the same data."""

    def content_equals(self, other) -> bool:
        ...


T = TypeVar("T", bound=ContentComparable)


def is_unchanged(incoming: T, stored: T) -> bool:
    """Check if an update would write exactly what is already stored."""
    if type(incoming) is not type(stored):
        return False
    return incoming.content_equals(stored)


def ensure_changed(incoming: T, stored: T) -> None:
    """Raise ObjectUnchangedError if the update carries no change."""
    if is_unchanged(incoming, stored):
        raise ObjectUnchangedError(
            f"{type(incoming).__name__} with id {getattr(incoming, 'id', None)} is unchanged"
        )
