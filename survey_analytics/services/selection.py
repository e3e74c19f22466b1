"""
Record Selector for the study analytics summary.

Selection is a conjunction of two predicates evaluated in two passes:

    selected = store_predicate(record) AND payload_predicate(record)

1. Store pass: study scope, inclusive submission-time bounds and respondent
   attribute equality, expressed as SQL (sql/response_queries.py) and
   evaluated by PostgreSQL.
2. In-memory pass: payload filters, which cannot be expressed against a fixed
   schema, evaluated over the rows the store returned.

Both passes are pure filters over the same rows, so the result is the
intersection of every filter whichever pass evaluates it. The in-memory pass
keeps the store's submission-time ordering.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from asyncpg import Connection

from survey_analytics.models.enums import RESPONDENT_DIMENSIONS, RespondentDimension
from survey_analytics.services.filters import PayloadFilter, ResolvedFilters, normalize_value
from survey_analytics.sql.response_queries import get_response_selection_query

logger = logging.getLogger(__name__)


# =============================================================================
# Record Type
# =============================================================================


@dataclass(frozen=True)
class ResponseRecord:
    """
    One response joined with its respondent's attributes.

    Attributes:
        id: Response identifier
        respondent_id: Respondent identifier (distinct-count key)
        submitted_at: Submission timestamp
        payload: Decoded payload; normally a mapping, but anything the store
            holds is carried through and treated as "no answers"
        respondent: Dimension -> stored attribute value
    """
    id: str
    respondent_id: str
    submitted_at: datetime
    payload: Any = None
    respondent: Dict[RespondentDimension, Any] = field(default_factory=dict)


def decode_json(value: Any) -> Any:
    """
    Decode a jsonb column value.

    asyncpg returns json/jsonb as text unless a type codec is registered on
    the connection; already-decoded values pass through unchanged.
    """
    if isinstance(value, (str, bytes, bytearray)):
        return json.loads(value)
    return value


def record_from_row(row: Mapping[str, Any]) -> ResponseRecord:
    """Map a selection query row onto a ResponseRecord."""
    return ResponseRecord(
        id=str(row["id"]),
        respondent_id=str(row["respondent_id"]),
        submitted_at=row["submitted_at"],
        payload=decode_json(row["payload"]),
        respondent={dimension: row[dimension.value] for dimension in RESPONDENT_DIMENSIONS},
    )


# =============================================================================
# Store Pass
# =============================================================================


async def fetch_candidate_responses(
    conn: Connection,
    study_id: str,
    filters: ResolvedFilters,
) -> List[ResponseRecord]:
    """
    Run the store-level selection for a study.

    Args:
        conn: Database connection.
        study_id: Study whose responses are selected.
        filters: Resolved filters; only the time bounds and respondent filters
            are used here.

    Returns:
        Matching responses ordered by submitted_at ascending.

    Raises:
        asyncpg.PostgresError: Store failures propagate unchanged.
    """
    query, args = get_response_selection_query(
        study_id,
        date_from=filters.date_from,
        date_to=filters.date_to,
        respondent_filters=filters.respondent,
    )
    rows = await conn.fetch(query, *args)
    return [record_from_row(row) for row in rows]


# =============================================================================
# In-Memory Pass
# =============================================================================


def payload_matches(payload: Any, payload_filters: Sequence[PayloadFilter]) -> bool:
    """
    Check a payload against every payload filter.

    A payload that is not a mapping, or lacks a filtered key, fails that
    filter. Values are compared after normalize_value(), the same
    normalization used when counting answers.

    Args:
        payload: Decoded response payload.
        payload_filters: Filters to apply; an empty sequence always matches.

    Returns:
        True if every filter matches exactly.
    """
    if not payload_filters:
        return True
    if not isinstance(payload, Mapping):
        return False
    for payload_filter in payload_filters:
        if payload_filter.question not in payload:
            return False
        if normalize_value(payload[payload_filter.question]) != payload_filter.expected:
            return False
    return True


def refine_by_payload(
    records: Iterable[ResponseRecord],
    payload_filters: Sequence[PayloadFilter],
) -> List[ResponseRecord]:
    """Keep records whose payload satisfies every payload filter, in order."""
    return [record for record in records if payload_matches(record.payload, payload_filters)]


# =============================================================================
# Public API
# =============================================================================


async def select_responses(
    conn: Connection,
    study_id: str,
    filters: Optional[ResolvedFilters] = None,
) -> List[ResponseRecord]:
    """
    Select the responses of a study matching every resolved filter.

    Args:
        conn: Database connection.
        study_id: Study whose responses are selected.
        filters: Resolved filters (None means unfiltered).

    Returns:
        The intersection of store-level and payload filters, ordered by
        submitted_at ascending.
    """
    filters = filters or ResolvedFilters()
    candidates = await fetch_candidate_responses(conn, study_id, filters)
    selected = refine_by_payload(candidates, filters.payload)

    logger.debug(
        f"Selected {len(selected)} of {len(candidates)} candidate responses for study={study_id}"
    )
    return selected
