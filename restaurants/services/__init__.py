"""Services Layer — request handlers, validators and the request dispatcher.

Invariants:
    - Handlers grouped per aggregate (restaurants, dishes, identity)
    - Dispatch uses an explicit type -> handler mapping (no auto-discovery)
"""
