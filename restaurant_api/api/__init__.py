"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the `{success, ...}` JSON envelope (DELETE: empty 204)
"""
