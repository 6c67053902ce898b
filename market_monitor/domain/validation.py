"""Field constraint checks shared by the entity validators.

Each check raises ValidationError on violation and returns silently otherwise.
"""
from decimal import Decimal
from typing import Any, Optional

from market_monitor.domain.exceptions import MutualExclusionError, ValidationError

# Scale of the Decimal(12, 4) price columns
PRICE_DECIMAL_PLACES = 4


def require_not_null(entity: str, field: str, value: Any) -> None:
    if value is None:
        raise ValidationError(entity, field, "not_null")


def require_not_empty(entity: str, field: str, value: Optional[str]) -> None:
    if value is None or not value.strip():
        raise ValidationError(entity, field, "not_empty")


def require_min(entity: str, field: str, value: Optional[int], minimum: int) -> None:
    """Check an optional integer against an inclusive minimum."""
    if value is not None and value < minimum:
        raise ValidationError(entity, field, "min", value=str(minimum))


def require_price(
    entity: str,
    field: str,
    value: Optional[Decimal],
    minimum: Decimal,
    maximum: Optional[Decimal] = None,
) -> None:
    """Check a monetary amount: defined, finite, within [minimum, maximum].

    Prices are stored with PRICE_DECIMAL_PLACES decimals, so a finer amount
    would not compare equal to its stored value.
    """
    require_not_null(entity, field, value)
    if not value.is_finite():
        raise ValidationError(entity, field, "finite")
    if value < minimum:
        raise ValidationError(entity, field, "decimal_min", value=str(minimum))
    if maximum is not None and value > maximum:
        raise ValidationError(entity, field, "max", value=str(maximum))
    if -value.normalize().as_tuple().exponent > PRICE_DECIMAL_PLACES:
        raise ValidationError(entity, field, "digits", value=str(PRICE_DECIMAL_PLACES))


def require_mutually_exclusive(entity: str, key: str, **values: Any) -> None:
    """At most one of the given attributes may be set."""
    defined = tuple(name for name, value in values.items() if value is not None)
    if len(defined) > 1:
        raise MutualExclusionError(entity, key, defined)
