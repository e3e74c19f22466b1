"""
Study analytics summary: assembly and orchestration.

get_study_summary() is the engine's entry point:

    study lookup -> filter resolution -> selection -> aggregation -> assembly

The study is looked up before any filter is interpreted, so an unknown study
always yields StudyNotFoundError and never a partial or empty summary. Each
call works on its own records and returns a fresh frozen StudySummary;
nothing is cached between calls.

Usage:
    summary = await get_study_summary(conn, "study_1", {"gender": "female", "q_brand": "X"})
    summary.metrics.total_responses
"""

import logging
from datetime import datetime
from typing import Mapping, Optional, Sequence

from asyncpg import Connection

from survey_analytics.models.schemas import (
    AppliedFilters,
    StudyDetail,
    StudySummary,
    StudySummaryInfo,
    SummaryTrends,
)
from survey_analytics.services.aggregation import (
    compute_metrics,
    compute_question_stats,
    compute_respondent_breakdowns,
    compute_trend,
)
from survey_analytics.services.filters import ResolvedFilters, resolve_filters
from survey_analytics.services.selection import ResponseRecord, select_responses
from survey_analytics.services.studies import get_study

logger = logging.getLogger(__name__)


def _format_bound(bound: Optional[datetime]) -> Optional[str]:
    return bound.isoformat() if bound is not None else None


def build_applied_filters(filters: ResolvedFilters) -> AppliedFilters:
    """
    Echo the filters that were actually applied.

    Bounds are rendered as ISO-8601 UTC instants after day expansion; dropped
    and ignored keys are absent from ``dimensions``.
    """
    return AppliedFilters(
        from_=_format_bound(filters.date_from),
        to=_format_bound(filters.date_to),
        dimensions=dict(filters.dimensions_echo),
    )


def assemble_summary(
    study: StudyDetail,
    filters: ResolvedFilters,
    records: Sequence[ResponseRecord],
) -> StudySummary:
    """
    Package study fields, metrics, trend, breakdowns and the filter echo.

    Args:
        study: The study being summarized.
        filters: Filters that produced ``records``.
        records: Final selected responses, ordered by submission time.

    Returns:
        An immutable StudySummary.
    """
    return StudySummary(
        study=StudySummaryInfo(
            id=study.id,
            title=study.title,
            status=study.status,
            created_by=study.created_by,
            start_date=study.start_date,
            end_date=study.end_date,
        ),
        metrics=compute_metrics(records),
        trends=SummaryTrends(responses_by_day=compute_trend(records)),
        applied_filters=build_applied_filters(filters),
        respondent_breakdowns=compute_respondent_breakdowns(records),
        question_stats=compute_question_stats(records),
    )


async def get_study_summary(
    conn: Connection,
    study_id: str,
    raw_filters: Optional[Mapping[str, Optional[str]]] = None,
) -> StudySummary:
    """
    Compute the analytics summary for a study and an arbitrary filter set.

    Args:
        conn: Database connection (read-only use).
        study_id: Study identifier.
        raw_filters: Query key -> string value; see services/filters.py for
            how keys are classified.

    Returns:
        StudySummary for the filtered response set.

    Raises:
        StudyNotFoundError: The study id is blank or unknown. Raised before
            any filter is resolved or any response is read.
        InvalidFilterError: ``from`` or ``to`` is not an ISO-8601 date.
        asyncpg.PostgresError: Store failures propagate unchanged; there is
            no retry.
    """
    study = await get_study(conn, study_id)
    filters = resolve_filters(raw_filters or {})
    records = await select_responses(conn, study.id, filters)

    summary = assemble_summary(study, filters, records)
    logger.info(
        f"Summarized study={study.id}: {summary.metrics.total_responses} responses, "
        f"{summary.metrics.unique_respondents} respondents, "
        f"{len(summary.question_stats)} questions, filters={filters.dimensions_echo}"
    )
    return summary
