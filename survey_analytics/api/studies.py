"""
FastAPI router module for read-only study endpoints.

Key Endpoints:
- GET /studies: All studies, newest first
- GET /studies/{study_id}: One study (404 when unknown)
- GET /studies/{study_id}/responses: Every response joined with its
  respondent, newest first
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from survey_analytics.core.dependencies import DBSessionDep
from survey_analytics.core.exceptions import SurveyAnalyticsError
from survey_analytics.models.schemas import StudyDetail, StudyResponsesExport
from survey_analytics.services.studies import get_study, get_study_responses, list_studies

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[StudyDetail])
async def list_all_studies(db: DBSessionDep) -> List[StudyDetail]:
    """List all studies, newest first."""
    try:
        return await list_studies(db)
    except Exception as e:
        logger.error(f"Error listing studies: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{study_id}", response_model=StudyDetail)
async def get_study_detail(study_id: str, db: DBSessionDep) -> StudyDetail:
    """Fetch one study by id."""
    try:
        return await get_study(db, study_id)
    except (HTTPException, SurveyAnalyticsError):
        raise
    except Exception as e:
        logger.error(f"Error fetching study={study_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{study_id}/responses", response_model=StudyResponsesExport)
async def get_study_response_rows(study_id: str, db: DBSessionDep) -> StudyResponsesExport:
    """
    List a study's responses joined with respondent profiles.

    Rows are JSON; flattening to CSV is left to the caller.
    """
    try:
        return await get_study_responses(db, study_id)
    except (HTTPException, SurveyAnalyticsError):
        raise
    except Exception as e:
        logger.error(f"Error listing responses for study={study_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
