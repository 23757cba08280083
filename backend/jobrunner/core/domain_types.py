"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskDescriptor is immutable once built (frozen dataclass)
    - InvocationRequest.raw_args is None when no parenthesized suffix was given
    - All dispatch states encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers for names: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (API returns the terminal state)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskName = NewType("TaskName", str)

TaskHandler = Callable[..., Awaitable[Any]]


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class TaskDescriptor:
    """A registered task: unique name, human description, async handler."""
    name: TaskName
    description: str
    handler: TaskHandler = field(repr=False, compare=False)


@dataclass(frozen=True)
class InvocationRequest:
    """`name` or `name(raw_args)` split out of one invocation string."""
    name: TaskName
    raw_args: str | None = None


# ─── Enums ───────────────────────────────────────────────────────

class DispatchState(str, Enum):
    """Per-call dispatch lifecycle. Only COMPLETED is a success."""
    IDLE = "idle"
    PARSING = "parsing"
    PARSE_FAILED = "parse_failed"
    PARSED = "parsed"
    LOOKUP = "lookup"
    NOT_FOUND = "not_found"
    FOUND = "found"
    INVOKING = "invoking"
    FAULTED = "faulted"
    COMPLETED = "completed"

