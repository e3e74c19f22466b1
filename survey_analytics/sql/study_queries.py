"""
Study Queries Module for the Survey Analytics backend.

Parameterized PostgreSQL queries for reading studies and their joined
response listings. Parameters use asyncpg's positional $n placeholders.

Tables read:
    studies(id, title, status, created_by, target_criteria jsonb,
            start_date, end_date, created_at)
    respondents(id, email, age, gender, location, income_band, education,
                employment_status)
    responses(id, respondent_id, study_id, submitted_at, payload jsonb)

submitted_at may be timestamp or timestamptz; naive values are UTC and the
pool pins the session time zone to UTC so both compare the same way.
"""


# =============================================================================
# CONSTANTS
# =============================================================================

STUDY_COLUMNS: str = """
        id,
        title,
        status,
        created_by,
        target_criteria,
        start_date,
        end_date,
        created_at
"""


# =============================================================================
# STUDY LOOKUPS
# =============================================================================

def get_study_by_id_query() -> str:
    """
    Generate SQL to fetch one study by id.

    Parameters:
        $1: study id

    Returns:
        Query returning zero or one study row.
    """
    return f"""
    SELECT{STUDY_COLUMNS}
    FROM studies
    WHERE id = $1
    """


def get_list_studies_query() -> str:
    """
    Generate SQL to list all studies, newest first.

    Returns:
        Query returning every study row ordered by created_at DESC.
    """
    return f"""
    SELECT{STUDY_COLUMNS}
    FROM studies
    ORDER BY created_at DESC, id ASC
    """


# =============================================================================
# JOINED RESPONSE LISTING
# =============================================================================

def get_study_responses_query() -> str:
    """
    Generate SQL listing every response of a study joined with its respondent.

    Parameters:
        $1: study id

    Returns:
        Query ordered by submitted_at DESC (newest first).
    """
    return """
    SELECT
        r.id AS response_id,
        r.submitted_at,
        r.payload,
        p.id AS respondent_id,
        p.email,
        p.age,
        p.gender,
        p.location,
        p.income_band,
        p.education,
        p.employment_status
    FROM responses r
    JOIN respondents p ON p.id = r.respondent_id
    WHERE r.study_id = $1
    ORDER BY r.submitted_at DESC, r.id DESC
    """
