"""TaskShield Package — task-tracking domain model with lifecycle and lockout rules.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports (ADR: explicit over implicit)
"""
