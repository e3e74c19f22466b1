"""
FastAPI router module for study analytics endpoints.

Key Endpoints:
- GET /analytics/studies/{study_id}/summary: Aggregate summary of a study's
  responses, filterable by date range and any number of dimensions

Query string contract:
- from, to: ISO-8601 dates (date-times are truncated to their calendar day);
  expanded to inclusive UTC day bounds by the engine
- gender, location, income_band, education, employment_status, age:
  respondent attribute equality filters
- q_<key>: equality filter on payload key <key>
- Any other key is accepted and ignored. A key given more than once, or with
  a blank value, is not treated as a filter.

Error mapping:
- Unknown study: 404 (raised as StudyNotFoundError, handled in main.py)
- Malformed from/to: 400 (InvalidFilterError, handled in main.py)
- Store failures: logged and returned as 500
"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from starlette.datastructures import QueryParams

from survey_analytics.core.dependencies import DBSessionDep
from survey_analytics.core.exceptions import SurveyAnalyticsError
from survey_analytics.models.schemas import StudySummary
from survey_analytics.services.filters import FROM_KEY, TO_KEY
from survey_analytics.services.summary import get_study_summary

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helper Functions
# =============================================================================


def collect_dimension_filters(query_params: QueryParams) -> Dict[str, str]:
    """
    Collect candidate dimension filters from the query string.

    Keys other than from/to with exactly one non-blank value are returned in
    the order they appear. Classification (respondent attribute, payload key
    or ignored) is left to the filter resolver.

    Args:
        query_params: The request's query parameters.

    Returns:
        Dict of key -> raw string value.
    """
    grouped: Dict[str, list] = {}
    for key, value in query_params.multi_items():
        if key in (FROM_KEY, TO_KEY):
            continue
        grouped.setdefault(key, []).append(value)

    return {
        key: values[0]
        for key, values in grouped.items()
        if len(values) == 1 and values[0].strip()
    }


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/studies/{study_id}/summary",
    response_model=StudySummary,
    summary="Study analytics summary",
    responses={404: {"description": "Study not found"}, 400: {"description": "Malformed date filter"}},
)
async def get_summary(
    study_id: str,
    request: Request,
    db: DBSessionDep,
    date_from: Optional[str] = Query(None, alias="from", description="Start day (inclusive), YYYY-MM-DD"),
    date_to: Optional[str] = Query(None, alias="to", description="End day (inclusive), YYYY-MM-DD"),
) -> StudySummary:
    """
    Compute the analytics summary for a study.

    Returns response volume, per-day trend, the six respondent breakdowns,
    per-question answer distributions and an echo of the filters applied.

    Raises:
        StudyNotFoundError: Mapped to 404.
        InvalidFilterError: Mapped to 400.
        HTTPException 500: If the store query fails.
    """
    raw_filters: Dict[str, Optional[str]] = {FROM_KEY: date_from, TO_KEY: date_to}
    raw_filters.update(collect_dimension_filters(request.query_params))

    logger.info(f"Computing summary for study={study_id}, filters={raw_filters}")

    try:
        return await get_study_summary(db, study_id, raw_filters)
    except (HTTPException, SurveyAnalyticsError):
        raise
    except Exception as e:
        logger.error(f"Error computing summary for study={study_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
