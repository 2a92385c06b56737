"""Restaurants API Package — restaurant and dish records behind a request dispatcher.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
