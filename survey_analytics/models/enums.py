"""
Enumeration definitions for the Survey Analytics backend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization
compatibility with Pydantic models, enabling automatic serialization in API
responses.

RESPONDENT_DIMENSIONS is the one place the fixed respondent attributes are
enumerated. The filter resolver, the response selection query and the
aggregator all iterate it, so adding a dimension is a single change here plus
the matching column on the respondents table.
"""

from enum import Enum
from typing import Tuple


class StudyStatus(str, Enum):
    """
    Lifecycle state of a study.

    - DRAFT: Being designed, not yet collecting
    - ACTIVE: Collecting responses
    - PAUSED: Temporarily closed to respondents
    - COMPLETED: Collection finished
    - ARCHIVED: Retained for reporting only
    """
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class RespondentDimension(str, Enum):
    """
    Profiled respondent attributes that can be filtered on and broken down.

    Values are both the query-string keys accepted by the summary endpoint and
    the column names on the respondents table. All are free-text categorical
    strings except AGE, which is an integer column.
    """
    GENDER = "gender"
    LOCATION = "location"
    INCOME_BAND = "income_band"
    EDUCATION = "education"
    EMPLOYMENT_STATUS = "employment_status"
    AGE = "age"


# Breakdown output order follows this tuple
RESPONDENT_DIMENSIONS: Tuple[RespondentDimension, ...] = (
    RespondentDimension.GENDER,
    RespondentDimension.LOCATION,
    RespondentDimension.INCOME_BAND,
    RespondentDimension.EDUCATION,
    RespondentDimension.EMPLOYMENT_STATUS,
    RespondentDimension.AGE,
)

# Dimensions whose filter values must be coerced to a number
NUMERIC_DIMENSIONS: Tuple[RespondentDimension, ...] = (RespondentDimension.AGE,)
