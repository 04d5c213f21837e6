"""Core Layer: pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, schemas/, or infrastructure/
    - Only generator_protocol.py mentions async, as a boundary contract

Design Decisions:
    - Functional core separated from imperative shell (the registry drives IO)
"""
