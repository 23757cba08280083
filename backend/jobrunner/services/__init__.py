"""Services Layer — task registry, built-in task handlers and dispatch.

Invariants:
    - Registration uses an explicit table (no auto-discovery)
"""
