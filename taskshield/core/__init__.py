"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, infrastructure/, models/, or db/
    - Time is read only through an injected Clock, never sampled inline

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
