"""Services Layer — async operations over one AsyncSession.

Invariants:
    - Services receive their AsyncSession from the caller; they never open one
    - Statements come from queries/, pure shaping from core/
"""
