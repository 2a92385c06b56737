"""API Layer — FastAPI routes, dependencies, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes build a request object, send it through the dispatcher, and map
      the outcome to a status code; no business logic here
"""
