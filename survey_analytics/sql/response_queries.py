"""
Response Selection Queries for the analytics summary.

Builds the store-level half of response selection: study scope, inclusive
submission-time bounds (bound as timestamptz, so a timestamp column compares
through the session time zone) and exact equality on joined respondent
attributes. Payload filters are not expressible here (the payload is
schema-less jsonb) and are applied in memory by services/selection.py.

Respondent columns come from RESPONDENT_DIMENSIONS, never from request input,
so interpolating them into the SQL text is safe; every value is a bound
parameter.
"""

from datetime import datetime
from typing import Any, List, Mapping, Optional, Tuple, Union

from survey_analytics.models.enums import (
    NUMERIC_DIMENSIONS,
    RESPONDENT_DIMENSIONS,
    RespondentDimension,
)


# =============================================================================
# CONSTANTS
# =============================================================================

RESPONSE_ALIAS: str = "r"
RESPONDENT_ALIAS: str = "p"


# =============================================================================
# SELECTION QUERY
# =============================================================================

def get_response_selection_query(
    study_id: str,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    respondent_filters: Optional[Mapping[RespondentDimension, Union[str, int, float]]] = None,
) -> Tuple[str, List[Any]]:
    """
    Generate the parameterized response selection query and its arguments.

    Every response row is returned joined with the six respondent attributes,
    ordered by submission time ascending (id breaks exact timestamp ties) so
    the trend series is built deterministically.

    Args:
        study_id: Study whose responses are selected.
        date_from: Inclusive lower bound on submitted_at, or None.
        date_to: Inclusive upper bound on submitted_at, or None.
        respondent_filters: Dimension -> value; each becomes an equality
            predicate on the joined respondent. Numeric dimensions compare as
            numeric so a fractional age simply matches nothing.

    Returns:
        Tuple of (query, args) ready for ``conn.fetch(query, *args)``.

    Example:
        >>> sql, args = get_response_selection_query(
        ...     "study_1", respondent_filters={RespondentDimension.GENDER: "female"}
        ... )
        >>> args
        ['study_1', 'female']
    """
    r, p = RESPONSE_ALIAS, RESPONDENT_ALIAS
    args: List[Any] = [study_id]
    conditions = [f"{r}.study_id = $1"]

    if date_from is not None:
        args.append(date_from)
        conditions.append(f"{r}.submitted_at >= ${len(args)}::timestamptz")

    if date_to is not None:
        args.append(date_to)
        conditions.append(f"{r}.submitted_at <= ${len(args)}::timestamptz")

    for dimension, value in (respondent_filters or {}).items():
        args.append(value)
        cast = "::numeric" if dimension in NUMERIC_DIMENSIONS else ""
        conditions.append(f"{p}.{dimension.value} = ${len(args)}{cast}")

    respondent_columns = ",\n        ".join(
        f"{p}.{dimension.value}" for dimension in RESPONDENT_DIMENSIONS
    )
    where_clause = "\n      AND ".join(conditions)

    query = f"""
    SELECT
        {r}.id,
        {r}.respondent_id,
        {r}.submitted_at,
        {r}.payload,
        {respondent_columns}
    FROM responses {r}
    JOIN respondents {p} ON {p}.id = {r}.respondent_id
    WHERE {where_clause}
    ORDER BY {r}.submitted_at ASC, {r}.id ASC
    """

    return query, args
