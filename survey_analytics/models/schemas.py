"""
Pydantic request/response models for the Survey Analytics backend.

This module provides type-safe serialization for all API contracts:
- Study and respondent read models (rows owned by the collection side)
- The analytics summary and its parts (breakdowns, trend points, question stats)
- The joined response listing for a study

Summary models are frozen: a summary is assembled once per request and never
mutated afterwards.

All models use Pydantic v2 syntax.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from survey_analytics.models.enums import StudyStatus


# =============================================================================
# Study / Respondent Read Models
# =============================================================================


class StudyDetail(BaseModel):
    """
    A research campaign as stored by the collection side.

    target_criteria is opaque to this service and passed through unchanged.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "study_01",
                "title": "Brand perception wave 1",
                "status": "ACTIVE",
                "created_by": "research@example.com",
                "target_criteria": {"age_range": "25-40", "location": ["Seattle, WA"]},
                "start_date": "2026-02-22T00:00:00Z",
                "end_date": "2026-03-22T00:00:00Z",
                "created_at": "2026-02-20T17:04:11Z",
            }
        },
    )

    id: str = Field(..., description="Study identifier")
    title: str = Field(..., description="Human-readable study title")
    status: StudyStatus = Field(..., description="Lifecycle status")
    created_by: str = Field(..., description="Identifier of the study owner")
    target_criteria: Dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form targeting criteria (opaque)"
    )
    start_date: Optional[datetime] = Field(default=None, description="Collection start")
    end_date: Optional[datetime] = Field(default=None, description="Collection end")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")

    @model_validator(mode="after")
    def _check_date_order(self) -> "StudyDetail":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must be earlier than or equal to end_date")
        return self


class RespondentProfile(BaseModel):
    """
    Profiled respondent attributes joined onto a response row.

    Email is stored lower-cased and unique; age is an integer in 13-120 on the
    write path. Everything else is free-text categorical.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    age: int
    gender: str
    location: str
    income_band: str
    education: str
    employment_status: str


class StudyResponseRow(BaseModel):
    """One submitted response joined with its respondent."""
    model_config = ConfigDict(frozen=True)

    response_id: str
    submitted_at: datetime
    payload: Any = Field(
        default=None,
        description="Schema-less question key -> answer mapping, as stored"
    )
    respondent: RespondentProfile


class StudyResponsesExport(BaseModel):
    """All responses for a study, newest first."""
    model_config = ConfigDict(frozen=True)

    study: StudyDetail
    total_responses: int = Field(..., ge=0)
    rows: List[StudyResponseRow]


# =============================================================================
# Analytics Summary Parts
# =============================================================================


class BreakdownItem(BaseModel):
    """One observed categorical value and its occurrence count."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {"value": "female", "count": 12}},
    )

    value: str = Field(..., description="Normalized value")
    count: int = Field(..., ge=1, description="Occurrences within the filtered set")


class TrendPoint(BaseModel):
    """Responses submitted on one UTC calendar day."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {"date": "2024-01-05", "count": 2}},
    )

    date: str = Field(..., description="UTC calendar day, YYYY-MM-DD")
    count: int = Field(..., ge=1)


class QuestionStat(BaseModel):
    """Answer distribution for one payload key."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "question": "q_brand",
                "total_answered": 2,
                "top_values": [{"value": "X", "count": 1}, {"value": "Y", "count": 1}],
            }
        },
    )

    question: str = Field(..., description="Payload key as stored")
    total_answered: int = Field(..., ge=0, description="Responses carrying this key")
    top_values: List[BreakdownItem] = Field(
        ...,
        description="Full distribution, most frequent first"
    )


class StudySummaryInfo(BaseModel):
    """Descriptive study fields echoed at the top of a summary."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    status: StudyStatus
    created_by: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class SummaryMetrics(BaseModel):
    """Headline counts. unique_respondents never exceeds total_responses."""
    model_config = ConfigDict(frozen=True)

    total_responses: int = Field(..., ge=0)
    unique_respondents: int = Field(..., ge=0)


class SummaryTrends(BaseModel):
    model_config = ConfigDict(frozen=True)

    responses_by_day: List[TrendPoint]


class AppliedFilters(BaseModel):
    """
    The filters the engine actually resolved and applied.

    from/to are the expanded inclusive UTC bounds, not the raw query values.
    dimensions is keyed exactly as supplied (gender, age, q_brand, ...) and
    omits anything that was ignored or dropped.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    dimensions: Dict[str, str] = Field(default_factory=dict)


class RespondentBreakdowns(BaseModel):
    """One breakdown per fixed respondent dimension."""
    model_config = ConfigDict(frozen=True)

    gender: List[BreakdownItem]
    location: List[BreakdownItem]
    income_band: List[BreakdownItem]
    education: List[BreakdownItem]
    employment_status: List[BreakdownItem]
    age: List[BreakdownItem]


class StudySummary(BaseModel):
    """
    Fully computed analytics summary for one study and filter set.

    Serialize with ``by_alias=True`` (FastAPI does this for response models)
    so applied_filters carries a ``from`` key.
    """
    model_config = ConfigDict(frozen=True)

    study: StudySummaryInfo
    metrics: SummaryMetrics
    trends: SummaryTrends
    applied_filters: AppliedFilters
    respondent_breakdowns: RespondentBreakdowns
    question_stats: List[QuestionStat]
