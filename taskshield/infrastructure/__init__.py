"""Infrastructure Layer — persistence adapters and cross-cutting concerns.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - All SQLAlchemy failures surface as DatabaseError

Design Decisions:
    - One repository module per aggregate (ADR: locality over generic DAO)
"""
