"""jobrunner — named-task registry and string-driven dispatcher.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
