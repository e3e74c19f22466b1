"""
Backend Services Module

Business logic for study analytics. Every service is stateless: functions take
an asyncpg connection (or plain records) and return fresh values.

Services:
- filters: Filter Resolver and the shared value normalizer
- selection: Record Selector (store pass + in-memory payload pass)
- aggregation: Aggregator (metrics, trend, breakdowns, question stats)
- summary: Summary Assembler and the get_study_summary entry point
- studies: Read-only study lookups and joined response listing

All services are consumed by the API layer (survey_analytics/api/).
"""

# =============================================================================
# Filter Resolver Exports
# =============================================================================

from survey_analytics.services.filters import (
    normalize_value,
    resolve_filters,
    coerce_numeric,
    day_start,
    day_end,
    PayloadFilter,
    ResolvedFilters,
    PAYLOAD_FILTER_PREFIX,
)

# =============================================================================
# Record Selector Exports
# =============================================================================

from survey_analytics.services.selection import (
    ResponseRecord,
    decode_json,
    record_from_row,
    fetch_candidate_responses,
    payload_matches,
    refine_by_payload,
    select_responses,
)

# =============================================================================
# Aggregator Exports
# =============================================================================

from survey_analytics.services.aggregation import (
    count_values,
    compute_metrics,
    compute_trend,
    compute_respondent_breakdowns,
    compute_question_stats,
    utc_day,
)

# =============================================================================
# Study Lookup Exports
# =============================================================================

from survey_analytics.services.studies import (
    get_study,
    list_studies,
    get_study_responses,
    study_from_row,
)

# =============================================================================
# Summary Assembler Exports
# =============================================================================

from survey_analytics.services.summary import (
    assemble_summary,
    build_applied_filters,
    get_study_summary,
)


__all__ = [
    # Filters
    "normalize_value",
    "resolve_filters",
    "coerce_numeric",
    "day_start",
    "day_end",
    "PayloadFilter",
    "ResolvedFilters",
    "PAYLOAD_FILTER_PREFIX",
    # Selection
    "ResponseRecord",
    "decode_json",
    "record_from_row",
    "fetch_candidate_responses",
    "payload_matches",
    "refine_by_payload",
    "select_responses",
    # Aggregation
    "count_values",
    "compute_metrics",
    "compute_trend",
    "compute_respondent_breakdowns",
    "compute_question_stats",
    "utc_day",
    # Studies
    "get_study",
    "list_studies",
    "get_study_responses",
    "study_from_row",
    # Summary
    "assemble_summary",
    "build_applied_filters",
    "get_study_summary",
]
