"""Query Layer — SQLAlchemy statement construction for composite views.

Invariants:
    - Builds statements only; never executes them (no IO, no async)
    - Every filter is pushed down into SQL, nothing is filtered client-side
"""
