"""
Package initialization file for backend models.

Exports all Pydantic schemas and enumerations from schemas.py and enums.py,
making them importable from survey_analytics.models directly.

Usage:
    from survey_analytics.models import (
        RESPONDENT_DIMENSIONS,
        StudySummary,
        BreakdownItem,
    )
"""

# =============================================================================
# Enums - Import and re-export all enumerations from enums.py
# =============================================================================

from survey_analytics.models.enums import (
    StudyStatus,
    RespondentDimension,
    RESPONDENT_DIMENSIONS,
    NUMERIC_DIMENSIONS,
)


# =============================================================================
# Schemas - Import and re-export all Pydantic models from schemas.py
# =============================================================================

from survey_analytics.models.schemas import (
    # -------------------------------------------------------------------------
    # Study / Respondent Read Models
    # -------------------------------------------------------------------------
    StudyDetail,
    RespondentProfile,
    StudyResponseRow,
    StudyResponsesExport,

    # -------------------------------------------------------------------------
    # Analytics Summary Models
    # -------------------------------------------------------------------------
    BreakdownItem,
    TrendPoint,
    QuestionStat,
    StudySummaryInfo,
    SummaryMetrics,
    SummaryTrends,
    AppliedFilters,
    RespondentBreakdowns,
    StudySummary,
)


__all__ = [
    # Enums
    "StudyStatus",
    "RespondentDimension",
    "RESPONDENT_DIMENSIONS",
    "NUMERIC_DIMENSIONS",
    # Study / Respondent
    "StudyDetail",
    "RespondentProfile",
    "StudyResponseRow",
    "StudyResponsesExport",
    # Summary
    "BreakdownItem",
    "TrendPoint",
    "QuestionStat",
    "StudySummaryInfo",
    "SummaryMetrics",
    "SummaryTrends",
    "AppliedFilters",
    "RespondentBreakdowns",
    "StudySummary",
]
