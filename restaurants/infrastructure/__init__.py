"""Infrastructure Layer — database access, repositories, identity and logging.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - Storage exceptions are translated here (StaleDataError -> False,
      FK IntegrityError -> InvalidReferenceError); nothing above sees SQLAlchemy errors

Design Decisions:
    - One module per gateway (restaurants, dishes, users) for locality
"""
