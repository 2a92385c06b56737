"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Validation rules and outcomes are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: repositories are reached
      only through the Protocols in repository_protocols.py
"""
