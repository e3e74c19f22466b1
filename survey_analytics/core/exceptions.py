"""
Domain exceptions for the Survey Analytics backend.

Services raise these; main.py maps them onto HTTP responses. Store failures
(asyncpg errors, network errors) are not wrapped here; they propagate
unchanged and surface as internal errors.
"""

from typing import Any, Dict, Optional


class SurveyAnalyticsError(Exception):
    """Base exception for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# LOOKUP ERRORS
# =============================================================================


class StudyNotFoundError(SurveyAnalyticsError):
    """The study id does not resolve to a stored study."""

    status_code = 404

    def __init__(self, study_id: str):
        super().__init__("Study not found", {"study_id": study_id})
        self.study_id = study_id


# =============================================================================
# FILTER ERRORS
# =============================================================================


class InvalidFilterError(SurveyAnalyticsError):
    """A filter value cannot be interpreted at all (malformed date bound)."""

    status_code = 400

    def __init__(self, key: str, value: str):
        super().__init__(
            f"Invalid value for filter '{key}': expected an ISO-8601 date",
            {"key": key, "value": value},
        )
        self.key = key
        self.value = value
