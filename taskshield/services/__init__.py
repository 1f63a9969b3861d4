"""Services Layer — orchestrates load, authorize, mutate, save, audit.

Invariants:
    - Services never bypass the core mutators (no direct field writes)
    - Every successful mutation is followed by exactly one audit record

Design Decisions:
    - Repositories and clock injected via constructor (ADR: testable without patching)
"""
