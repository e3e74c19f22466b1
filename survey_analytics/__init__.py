"""
Survey Analytics Backend Package.

FastAPI service computing aggregate analytics over verified survey responses
for study owners.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, dependencies and domain errors
    - models: Pydantic schemas and enums
    - services: Filter resolution, selection, aggregation and assembly
    - sql: Parameterized SQL queries
"""

__version__ = "1.0.0"
