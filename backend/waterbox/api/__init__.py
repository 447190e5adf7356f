"""API Layer — FastAPI routes, identity dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (or 204 for deactivation)

Design Decisions:
    - Thin routes delegate to services; no lifecycle rule lives in a route
"""
