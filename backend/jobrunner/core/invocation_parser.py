"""Invocation Parser — turns `name('text', 123, true)` into a structured call.

Invariants:
    - parse_invocation raises InvocationFormatError, never anything else
    - A missing or blank parenthesized suffix means zero arguments
    - decode_arguments raises ArgumentDecodeError, never anything else
    - Normalization order is fixed: quotes first, then unquoted keys
    - format_invocation output re-parses to the same name and arguments

Design Decisions:
    - Two-pass normalization keeps the casual syntax operators type into config
      fields; the trade-off is that a single quote inside a string, or
      `, word:` inside a string, is rewritten too (see DESIGN.md)
    - Pure functions, no logging: the dispatcher decides how failures are reported
    - Surrounding whitespace is stripped before matching, so " noParams" resolves to
      noParams; the name itself is otherwise taken verbatim ("params (1)" names
      "params ")
"""

import re
from typing import Any

from jobrunner.core.domain_types import InvocationRequest, TaskName
from jobrunner.core.errors import InvocationFormatError
from jobrunner.core.literal_codec import format_literal, parse_literal

# name is everything before the first '('; optional suffix must close at the end
_INVOCATION = re.compile(r"([^(]+)(?:\((.*)\))?")
_UNQUOTED_KEY = re.compile(r"([{,]\s*)([a-zA-Z_][a-zA-Z0-9_]*)\s*:")


def parse_invocation(invoke_target: str) -> InvocationRequest:
    """Split an invocation string into task name and raw argument text."""
    match = _INVOCATION.fullmatch(invoke_target.strip())
    if not match:
        raise InvocationFormatError(invoke_target)
    name, raw_args = match.groups()
    return InvocationRequest(name=TaskName(name), raw_args=raw_args)


def normalize_arguments(raw_args: str) -> str:
    """Rewrite casual argument text into strict literal syntax.

    'text' -> "text", {a: 1} -> {"a": 1}
    """
    normalized = raw_args.replace("'", '"')
    return _UNQUOTED_KEY.sub(r'\1"\2":', normalized)


def decode_arguments(raw_args: str | None) -> list[Any]:
    """Decode the text between the outer parentheses into a positional list."""
    if raw_args is None or not raw_args.strip():
        return []
    return parse_literal(f"[{normalize_arguments(raw_args)}]")


def format_invocation(name: str, args: list[Any] | tuple = ()) -> str:
    """Render a call back to invocation text: `name` or `name(a, b)`."""
    if not args:
        return name
    return f"{name}({', '.join(format_literal(a) for a in args)})"
