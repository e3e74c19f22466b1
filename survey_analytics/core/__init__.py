"""
Core infrastructure package for the Survey Analytics backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL database connectivity via asyncpg
- FastAPI dependency injection utilities
- Domain exception hierarchy

Re-exports key components so other modules can write:

    from survey_analytics.core import get_settings, DBSessionDep, StudyNotFoundError
"""

# =============================================================================
# Re-exports from survey_analytics.core.config
# =============================================================================
from survey_analytics.core.config import Settings, get_settings

# =============================================================================
# Re-exports from survey_analytics.core.database
# =============================================================================
from survey_analytics.core.database import init_db, close_db, get_db_pool

# =============================================================================
# Re-exports from survey_analytics.core.dependencies
# =============================================================================
from survey_analytics.core.dependencies import (
    get_db_session,
    DBSessionDep,
)

# =============================================================================
# Re-exports from survey_analytics.core.exceptions
# =============================================================================
from survey_analytics.core.exceptions import (
    SurveyAnalyticsError,
    StudyNotFoundError,
    InvalidFilterError,
)

__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Database pool lifecycle (from database.py)
    'init_db',
    'close_db',
    'get_db_pool',
    # FastAPI dependency injection (from dependencies.py)
    'get_db_session',
    'DBSessionDep',
    # Domain errors (from exceptions.py)
    'SurveyAnalyticsError',
    'StudyNotFoundError',
    'InvalidFilterError',
]
