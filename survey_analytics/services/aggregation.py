"""
Aggregator for the study analytics summary.

Computes everything the summary reports from the final, filtered response
set:

- total_responses / unique_respondents
- responses_by_day: UTC calendar-day buckets in first-seen order (the input is
  sorted by submission time, so this is ascending); days without responses
  are not zero-filled
- respondent breakdowns for the six RESPONDENT_DIMENSIONS
- question stats for every payload key observed anywhere in the set

Ordering rules:
    Breakdown entries: count descending, then value ascending. The secondary
    key makes equal-count entries independent of the order rows arrived in.
    Question stats: question key ascending (code point order).

Breakdowns are never truncated here; top-N trimming is a presentation
concern. All arithmetic is exact integer counting.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

from survey_analytics.models.enums import RESPONDENT_DIMENSIONS
from survey_analytics.models.schemas import (
    BreakdownItem,
    QuestionStat,
    RespondentBreakdowns,
    SummaryMetrics,
    TrendPoint,
)
from survey_analytics.services.filters import normalize_value
from survey_analytics.services.selection import ResponseRecord


# =============================================================================
# Breakdown Counting
# =============================================================================


def _sorted_breakdown(counts: Mapping[str, int]) -> List[BreakdownItem]:
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [BreakdownItem(value=value, count=count) for value, count in ordered]


def count_values(values: Iterable[Any]) -> List[BreakdownItem]:
    """
    Count normalized values into a breakdown.

    Args:
        values: Raw values; each is passed through normalize_value().

    Returns:
        Full distribution sorted by count descending, then value ascending.

    Example:
        >>> [(i.value, i.count) for i in count_values(["b", "a", "b", 3, 3.0])]
        [('3', 2), ('b', 2), ('a', 1)]
    """
    return _sorted_breakdown(Counter(normalize_value(value) for value in values))


# =============================================================================
# Metrics and Trend
# =============================================================================


def compute_metrics(records: Sequence[ResponseRecord]) -> SummaryMetrics:
    """Total response count and distinct respondent count."""
    return SummaryMetrics(
        total_responses=len(records),
        unique_respondents=len({record.respondent_id for record in records}),
    )


def utc_day(submitted_at: Union[datetime, str]) -> str:
    """
    UTC calendar day (YYYY-MM-DD) of a submission timestamp.

    Naive datetimes are taken to already be UTC. ISO-8601 strings are parsed
    first so offsets other than Z land on the right day.
    """
    if isinstance(submitted_at, str):
        submitted_at = datetime.fromisoformat(submitted_at.replace("Z", "+00:00"))
    if submitted_at.tzinfo is not None:
        submitted_at = submitted_at.astimezone(timezone.utc)
    return submitted_at.date().isoformat()


def compute_trend(records: Iterable[ResponseRecord]) -> List[TrendPoint]:
    """
    Bucket responses by UTC calendar day.

    Args:
        records: Responses ordered by submission time.

    Returns:
        One TrendPoint per day with at least one response, in first-seen order.
    """
    buckets: Dict[str, int] = {}
    for record in records:
        day = utc_day(record.submitted_at)
        buckets[day] = buckets.get(day, 0) + 1
    return [TrendPoint(date=day, count=count) for day, count in buckets.items()]


# =============================================================================
# Breakdowns
# =============================================================================


def compute_respondent_breakdowns(records: Sequence[ResponseRecord]) -> RespondentBreakdowns:
    """
    Break the response set down by every fixed respondent dimension.

    Each dimension's counts sum to len(records), since every response carries
    its respondent's full profile.
    """
    return RespondentBreakdowns(**{
        dimension.value: count_values(record.respondent.get(dimension) for record in records)
        for dimension in RESPONDENT_DIMENSIONS
    })


def compute_question_stats(records: Iterable[ResponseRecord]) -> List[QuestionStat]:
    """
    Discover payload keys and build an answer distribution for each.

    Responses whose payload is not a mapping contribute nothing.

    Returns:
        One QuestionStat per distinct payload key, sorted by key. total_answered
        is the number of responses carrying the key.
    """
    per_question: Dict[str, Counter] = {}
    for record in records:
        if not isinstance(record.payload, Mapping):
            continue
        for question, answer in record.payload.items():
            per_question.setdefault(question, Counter())[normalize_value(answer)] += 1

    stats = []
    for question in sorted(per_question):
        top_values = _sorted_breakdown(per_question[question])
        stats.append(QuestionStat(
            question=question,
            total_answered=sum(item.count for item in top_values),
            top_values=top_values,
        ))
    return stats
