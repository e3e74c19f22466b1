"""
Read-only study lookups.

Used by the summary assembler (existence check and descriptive fields) and
by the studies router (list, detail and the joined response listing).
"""

import logging
from typing import Any, List, Mapping

from asyncpg import Connection

from survey_analytics.core.exceptions import StudyNotFoundError
from survey_analytics.models.schemas import (
    RespondentProfile,
    StudyDetail,
    StudyResponseRow,
    StudyResponsesExport,
)
from survey_analytics.services.selection import decode_json
from survey_analytics.sql.study_queries import (
    get_list_studies_query,
    get_study_by_id_query,
    get_study_responses_query,
)

logger = logging.getLogger(__name__)


def study_from_row(row: Mapping[str, Any]) -> StudyDetail:
    """Map a studies row onto StudyDetail, decoding target_criteria."""
    return StudyDetail(
        id=str(row["id"]),
        title=row["title"],
        status=row["status"],
        created_by=row["created_by"],
        target_criteria=decode_json(row["target_criteria"]) or {},
        start_date=row["start_date"],
        end_date=row["end_date"],
        created_at=row["created_at"],
    )


async def get_study(conn: Connection, study_id: str) -> StudyDetail:
    """
    Fetch one study.

    Args:
        conn: Database connection.
        study_id: Study identifier. Blank ids never reach the store.

    Returns:
        StudyDetail for the study.

    Raises:
        StudyNotFoundError: If the id is blank or unknown.
        asyncpg.PostgresError: Store failures propagate unchanged.
    """
    if not study_id or not study_id.strip():
        raise StudyNotFoundError(study_id)

    row = await conn.fetchrow(get_study_by_id_query(), study_id)
    if row is None:
        logger.info(f"Study {study_id} not found")
        raise StudyNotFoundError(study_id)

    return study_from_row(row)


async def list_studies(conn: Connection) -> List[StudyDetail]:
    """All studies, newest first."""
    rows = await conn.fetch(get_list_studies_query())
    return [study_from_row(row) for row in rows]


async def get_study_responses(conn: Connection, study_id: str) -> StudyResponsesExport:
    """
    List every response of a study joined with its respondent, newest first.

    Raises:
        StudyNotFoundError: If the study does not exist.
    """
    study = await get_study(conn, study_id)
    rows = await conn.fetch(get_study_responses_query(), study.id)

    response_rows = [
        StudyResponseRow(
            response_id=str(row["response_id"]),
            submitted_at=row["submitted_at"],
            payload=decode_json(row["payload"]),
            respondent=RespondentProfile(
                id=str(row["respondent_id"]),
                email=row["email"],
                age=row["age"],
                gender=row["gender"],
                location=row["location"],
                income_band=row["income_band"],
                education=row["education"],
                employment_status=row["employment_status"],
            ),
        )
        for row in rows
    ]

    return StudyResponsesExport(
        study=study,
        total_responses=len(response_rows),
        rows=response_rows,
    )
