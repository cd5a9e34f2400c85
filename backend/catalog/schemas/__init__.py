"""Pydantic Schemas — validation for values entering the catalog layer.

Invariants:
    - Schemas validate at system boundary (filters, create payloads)
    - Validated schemas are frozen: query builders never mutate them

Design Decisions:
    - Separate from models: schemas are input contracts, models are persistence
"""
