"""Pydantic Schemas — dispatcher requests and REST API contracts.

Invariants:
    - Schemas parse types at the system boundary; field rules run in the dispatcher

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
