"""Literal Codec — safe recursive-descent decoder for loosely-typed argument literals.

Invariants:
    - Accepts exactly: strings, numbers, true/false/null/undefined, arrays, mappings
    - Never evaluates code; unknown bare words are decode errors
    - Integral numbers decode to int, everything else numeric to float
    - `undefined` decodes to None (Python has a single absent value)
    - Nesting deeper than MAX_DEPTH is a decode error, not a RecursionError
    - Numbers int() cannot convert are decode errors, not bare ValueErrors
    - format_literal output decodes back to an equal value, even after
      invocation normalization (quote and key rewriting) has been applied

Design Decisions:
    - Hand-written parser over eval/ast.literal_eval: invocation strings may come
      from untrusted config fields, and the accepted grammar is JS-flavoured
      (`undefined`, trailing commas, `.5`) which neither json nor ast accept
    - String tokens delegated to json.loads: one source of truth for escapes
"""

import json
import math
import re
from typing import Any

from jobrunner.core.errors import ArgumentDecodeError

MAX_DEPTH = 64

_WHITESPACE = re.compile(r"\s*")
_STRING = re.compile(r'"(?:[^"\\\n]|\\.)*"')
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_WORD = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

_KEYWORDS: dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
}

# Separators that invocation normalization would mistake for an unquoted key.
_KEY_LOOKALIKE = re.compile(r"[{,](?=\s*[A-Za-z_][A-Za-z0-9_]*\s*:)")


def parse_literal(text: str) -> Any:
    """Decode one literal value spanning the whole of `text`.

    Raises ArgumentDecodeError with the offending position on malformed input.
    """
    parser = _LiteralParser(text)
    value = parser.value(0)
    parser.skip_whitespace()
    if parser.pos != len(text):
        parser.fail("unexpected trailing text")
    return value


class _LiteralParser:
    """Cursor over the source text. One method per grammar production."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def fail(self, reason: str):
        raise ArgumentDecodeError(reason, self.pos)

    def skip_whitespace(self) -> None:
        self.pos = _WHITESPACE.match(self.text, self.pos).end()

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def value(self, depth: int) -> Any:
        if depth > MAX_DEPTH:
            self.fail("nesting too deep")
        self.skip_whitespace()
        ch = self.peek()
        if ch == "[":
            return self.array(depth)
        if ch == "{":
            return self.mapping(depth)
        if ch == '"':
            return self.string()
        if not ch:
            self.fail("unexpected end of input")
        number = _NUMBER.match(self.text, self.pos)
        if number:
            return self.number(number)
        word = _WORD.match(self.text, self.pos)
        if word and word.group() in _KEYWORDS:
            self.pos = word.end()
            return _KEYWORDS[word.group()]
        if word:
            self.fail(f"unknown identifier '{word.group()}'")
        self.fail(f"unexpected character {ch!r}")

    def array(self, depth: int) -> list:
        self.pos += 1
        items: list = []
        while True:
            self.skip_whitespace()
            if self.peek() == "]":
                self.pos += 1
                return items
            items.append(self.value(depth + 1))
            if not self.separator("]"):
                self.pos += 1
                return items

    def mapping(self, depth: int) -> dict:
        self.pos += 1
        result: dict = {}
        while True:
            self.skip_whitespace()
            if self.peek() == "}":
                self.pos += 1
                return result
            if self.peek() != '"':
                self.fail("expected quoted key")
            key = self.string()
            self.skip_whitespace()
            if self.peek() != ":":
                self.fail("expected ':' after key")
            self.pos += 1
            result[key] = self.value(depth + 1)
            if not self.separator("}"):
                self.pos += 1
                return result

    def separator(self, closer: str) -> bool:
        """Consume a ',' and return True, or stop on `closer` and return False."""
        self.skip_whitespace()
        ch = self.peek()
        if ch == ",":
            self.pos += 1
            return True
        if ch == closer:
            return False
        self.fail(f"expected ',' or '{closer}'")

    def string(self) -> str:
        match = _STRING.match(self.text, self.pos)
        if not match:
            self.fail("unterminated string")
        try:
            decoded = json.loads(match.group(), strict=False)
        except ValueError:
            self.fail("invalid string escape")
        self.pos = match.end()
        return decoded

    def number(self, match: re.Match) -> int | float:
        token = match.group()
        try:
            value = float(token) if any(c in token for c in ".eE") else int(token)
        except ValueError:
            # int() refuses very long digit strings
            self.fail("number out of range")
        self.pos = match.end()
        return value


# ─── Serialization ───────────────────────────────────────────────

def format_literal(value: Any) -> str:
    """Render a decoded value back to literal text accepted by parse_literal.

    Raises ValueError for values outside the literal grammar (non-finite floats,
    non-string mapping keys, arbitrary objects).
    """
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Non-finite number has no literal form: {value}")
        return repr(value)
    if isinstance(value, str):
        return _format_string(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_literal(v) for v in value) + "]"
    if isinstance(value, dict):
        parts = []
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValueError(f"Mapping keys must be strings, got {type(key).__name__}")
            parts.append(f"{_format_string(key)}: {format_literal(item)}")
        return "{" + ", ".join(parts) + "}"
    raise ValueError(f"Unsupported literal type: {type(value).__name__}")


def _format_string(value: str) -> str:
    # ' and key-lookalike separators are escaped so normalization leaves them intact
    rendered = json.dumps(value, ensure_ascii=False).replace("'", "\\u0027")
    return _KEY_LOOKALIKE.sub(lambda m: f"\\u{ord(m.group()):04x}", rendered)
