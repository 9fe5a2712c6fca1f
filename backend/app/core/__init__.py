"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic: clocks and id sources are passed in

Design Decisions:
    - Functional core separated from imperative shell (engines in services/)
"""
