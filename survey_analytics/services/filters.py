"""
Filter Resolver for the study analytics summary.

Turns the loose key/value filter mapping collected from a query string into
three disjoint groups:

1. Temporal bounds (``from`` / ``to``), expanded to inclusive UTC day bounds.
   This module is the single owner of day-boundary expansion; callers pass
   raw dates (or date-times, of which only the calendar date is used).
2. Respondent-attribute filters, keyed by RESPONDENT_DIMENSIONS. ``age`` is
   coerced to a number; values that are not finite numbers are dropped.
3. Payload filters, any key prefixed ``q_``. The prefix is stripped to get the
   payload key the filter matches against.

Anything else is ignored so unknown query parameters never break a request.

normalize_value() defines what "the same value" means for both filter
matching and breakdown counting; both paths import this one function.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from survey_analytics.core.exceptions import InvalidFilterError
from survey_analytics.models.enums import (
    NUMERIC_DIMENSIONS,
    RESPONDENT_DIMENSIONS,
    RespondentDimension,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

FROM_KEY: str = "from"
TO_KEY: str = "to"

# Query keys with this prefix filter on the response payload
PAYLOAD_FILTER_PREFIX: str = "q_"

_DIMENSIONS_BY_KEY: Dict[str, RespondentDimension] = {
    dimension.value: dimension for dimension in RESPONDENT_DIMENSIONS
}

FilterValue = Union[str, int, float]


# =============================================================================
# Value Normalization
# =============================================================================


# Integers beyond this are not exact once decoded by a JSON client
_MAX_EXACT_INT: int = 2 ** 53

# Decimal point positions written out in full; outside them, exponent notation
_PLAIN_POINT_MIN: int = -6
_PLAIN_POINT_MAX: int = 21


def _format_number(value: Union[int, float]) -> str:
    """
    Shortest round-trip text of a number, in the notation JSON clients print.

    Example:
        >>> _format_number(5.0), _format_number(1e21), _format_number(1e-7), _format_number(1e16)
        ('5', '1e+21', '1e-7', '10000000000000000')
    """
    if isinstance(value, int) and abs(value) <= _MAX_EXACT_INT:
        return str(value)
    try:
        value = float(value)
    except OverflowError:
        value = math.inf if value > 0 else -math.inf
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    shortest = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(digit) for digit in shortest.digits)
    # abs(value) == 0.<digits> * 10 ** point
    point = shortest.exponent + len(digits)

    if len(digits) <= point <= _PLAIN_POINT_MAX:
        return sign + digits + "0" * (point - len(digits))
    if 0 < point <= _PLAIN_POINT_MAX:
        return sign + digits[:point] + "." + digits[point:]
    if _PLAIN_POINT_MIN < point <= 0:
        return sign + "0." + "0" * -point + digits

    exponent = point - 1
    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    return f"{sign}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


def normalize_value(value: Any) -> str:
    """
    Normalize a payload or respondent value to the string used for matching
    and counting.

    Rules:
        - None -> "null"
        - str -> unchanged
        - bool -> "true" / "false"
        - int / float -> shortest round-trip text; integral floats lose the
          ".0", exponent notation only below 1e-6 or from 1e21 up
          ("1e-7", "1e+21")
        - anything else -> compact JSON

    Args:
        value: A decoded JSON value or a respondent column value.

    Returns:
        The normalized string.

    Example:
        >>> normalize_value(True), normalize_value(5.0), normalize_value({"a": [1, 2]})
        ('true', '5', '{"a":[1,2]}')
    """
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


# =============================================================================
# Resolved Filter Types
# =============================================================================


@dataclass(frozen=True)
class PayloadFilter:
    """
    One ``q_`` filter; the supplied key is ``q_`` + question.

    Attributes:
        question: The payload key matched against, e.g. "channel"
        expected: The exact normalized value a response must carry
    """
    question: str
    expected: str


@dataclass(frozen=True)
class ResolvedFilters:
    """
    Filters after classification and coercion.

    Attributes:
        date_from: Inclusive lower bound (start of a UTC day), or None
        date_to: Inclusive upper bound (end of a UTC day), or None
        respondent: Dimension -> coerced value, in supplied order
        payload: Payload filters, in supplied order
        dimensions_echo: Supplied key -> normalized value for every
            respondent and payload filter that is applied
    """
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    respondent: Dict[RespondentDimension, FilterValue] = field(default_factory=dict)
    payload: Tuple[PayloadFilter, ...] = ()
    dimensions_echo: Dict[str, str] = field(default_factory=dict)


# =============================================================================
# Resolution Helpers
# =============================================================================


def _parse_day(key: str, raw: str) -> date:
    try:
        return date.fromisoformat(raw.strip()[:10])
    except ValueError:
        raise InvalidFilterError(key, raw) from None


def day_start(day: date) -> datetime:
    """First instant of ``day`` in UTC."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def day_end(day: date) -> datetime:
    """Last representable instant of ``day`` in UTC."""
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def coerce_numeric(raw: str) -> Optional[Union[int, float]]:
    """
    Coerce a filter string to a number, or None if it is not a finite number.

    Integral values come back as int so they compare cleanly against integer
    columns.
    """
    try:
        number = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


# =============================================================================
# Public API
# =============================================================================


def resolve_filters(raw_filters: Mapping[str, Optional[str]]) -> ResolvedFilters:
    """
    Classify and coerce a raw filter mapping.

    Args:
        raw_filters: Query key -> string value. ``from``/``to`` may be absent,
            None or empty for an open bound.

    Returns:
        ResolvedFilters with only the filters that will actually be applied.

    Raises:
        InvalidFilterError: If ``from`` or ``to`` is present but is not an
            ISO-8601 date. Respondent-dimension values never raise; a value
            that cannot be coerced is dropped.

    Example:
        >>> resolved = resolve_filters({"from": "2024-01-05", "age": "abc", "q_brand": "X"})
        >>> resolved.date_from.isoformat()
        '2024-01-05T00:00:00+00:00'
        >>> resolved.dimensions_echo
        {'q_brand': 'X'}
    """
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    respondent: Dict[RespondentDimension, FilterValue] = {}
    payload = []
    echo: Dict[str, str] = {}

    for key, raw in raw_filters.items():
        # Blank values mean "no filter" for every key
        if raw is None or not raw.strip():
            continue

        if key == FROM_KEY:
            date_from = day_start(_parse_day(key, raw))
            continue
        if key == TO_KEY:
            date_to = day_end(_parse_day(key, raw))
            continue

        dimension = _DIMENSIONS_BY_KEY.get(key)
        if dimension is not None:
            value: Optional[FilterValue] = raw
            if dimension in NUMERIC_DIMENSIONS:
                value = coerce_numeric(raw)
                if value is None:
                    logger.debug(f"Dropping non-numeric {key} filter {raw!r}")
                    continue
            respondent[dimension] = value
            echo[key] = normalize_value(value)
            continue

        if key.startswith(PAYLOAD_FILTER_PREFIX):
            question = key[len(PAYLOAD_FILTER_PREFIX):]
            if not question:
                continue
            payload.append(PayloadFilter(question=question, expected=raw))
            echo[key] = raw
            continue

        logger.debug(f"Ignoring unrecognized filter key {key!r}")

    return ResolvedFilters(
        date_from=date_from,
        date_to=date_to,
        respondent=respondent,
        payload=tuple(payload),
        dimensions_echo=echo,
    )
