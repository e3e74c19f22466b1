'''
Survey Analytics Test Suite

Test Modules:
-------------
- test_filters.py: Filter resolution and value normalization
  - from/to day-boundary expansion and rejection of malformed dates
  - age coercion (dropped, never rejected)
  - q_ prefix handling and ignored keys

- test_selection.py: Record selection
  - Selection query builder (store predicate)
  - Payload refinement (in-memory predicate)
  - Conjunction of both passes

- test_aggregation.py: Metrics, trend, breakdowns and question stats
  - UTC day bucketing
  - Breakdown completeness and deterministic ordering
  - Question key discovery

- test_summary.py: End-to-end summary computation
  - Two-respondent brand study scenario
  - Not-found before any selection work
  - Store failure propagation and filter echo

- test_studies.py: Study lookups and the joined response listing

- test_api.py: HTTP layer through FastAPI's TestClient
  - Query string collection, status code mapping, health endpoint

- test_core.py: Settings, pool lifecycle, the connection dependency and
  domain exceptions

Running Tests:
--------------
    pip install -e ".[test]"
    pytest -v

Configuration:
--------------
See conftest.py for shared fixtures and the fake database connection.
'''
