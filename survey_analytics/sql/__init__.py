"""
SQL Query Module for the Survey Analytics backend.

Provides parameterized SQL queries for:
- Study lookups and joined response listings (study_queries)
- Filtered response selection for the analytics summary (response_queries)

Follows the Repository Pattern for clean separation between business logic
and data access: services build nothing but arguments, this package owns the
SQL text.

Example usage:
    from survey_analytics.sql import get_study_by_id_query, get_response_selection_query

    row = await conn.fetchrow(get_study_by_id_query(), study_id)
    sql, args = get_response_selection_query(study_id, date_from=start)
    rows = await conn.fetch(sql, *args)
"""

# =============================================================================
# STUDY QUERIES
# =============================================================================

from survey_analytics.sql.study_queries import (
    get_study_by_id_query,
    get_list_studies_query,
    get_study_responses_query,
)

# =============================================================================
# RESPONSE SELECTION QUERIES
# =============================================================================

from survey_analytics.sql.response_queries import (
    get_response_selection_query,
    RESPONSE_ALIAS,
    RESPONDENT_ALIAS,
)

__all__ = [
    'get_study_by_id_query',
    'get_list_studies_query',
    'get_study_responses_query',
    'get_response_selection_query',
    'RESPONSE_ALIAS',
    'RESPONDENT_ALIAS',
]
