"""Pydantic Schemas: request/response validation at the system boundary.

Invariants:
    - Schemas validate user input and upstream generator payloads
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from core dataclasses: schemas are wire contracts, core types are domain records
"""
