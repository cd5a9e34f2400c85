"""Core Catalog Package — composite views over teams, platforms, systems, cores and releases.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
