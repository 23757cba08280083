"""Invocation Parser — pure tests for splitting and decoding invocation strings.

Tests cover:
    - `name` and `name()` yield zero arguments
    - `name(args)` splits name and raw argument text
    - Malformed shapes raise InvocationFormatError
    - Normalization: single quotes and unquoted mapping keys
    - Decoded argument types and order
    - format_invocation output re-parses to the same call
"""

import pytest

from jobrunner.core.errors import ArgumentDecodeError, InvocationFormatError
from jobrunner.core.invocation_parser import (
    decode_arguments,
    format_invocation,
    normalize_arguments,
    parse_invocation,
)


# ─── parse_invocation ────────────────────────────────────────────

def test_bare_name_has_no_argument_text():
    request = parse_invocation("noParams")
    assert request.name == "noParams"
    assert request.raw_args is None


def test_empty_parentheses_give_empty_argument_text():
    request = parse_invocation("backupDatabase()")
    assert request.name == "backupDatabase"
    assert request.raw_args == ""


def test_name_and_argument_text_split():
    request = parse_invocation("params('hello', 42, true)")
    assert request.name == "params"
    assert request.raw_args == "'hello', 42, true"


def test_argument_text_keeps_inner_parentheses():
    request = parse_invocation("params('(a)', 1)")
    assert request.raw_args == "'(a)', 1"


def test_surrounding_whitespace_stripped():
    assert parse_invocation("  noParams \n").name == "noParams"


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "badSyntax(((",
    "(1, 2)",
    "params(1",
    "params(1) trailing",
])
def test_malformed_invocation_raises_format_error(text):
    with pytest.raises(InvocationFormatError) as exc_info:
        parse_invocation(text)
    assert exc_info.value.code == "INVALID_INVOCATION"


# ─── normalize_arguments ─────────────────────────────────────────

def test_normalize_replaces_single_quotes():
    assert normalize_arguments("'text', 1") == '"text", 1'


def test_normalize_quotes_unquoted_keys():
    assert normalize_arguments("{a: 1, b_2 : 'x'}") == '{"a": 1, "b_2": "x"}'


def test_normalize_leaves_quoted_keys_alone():
    assert normalize_arguments('{"a": 1}') == '{"a": 1}'


# ─── decode_arguments ────────────────────────────────────────────

def test_none_and_blank_decode_to_empty_list():
    assert decode_arguments(None) == []
    assert decode_arguments("") == []
    assert decode_arguments("   ") == []


def test_decodes_primitive_arguments_in_order():
    args = decode_arguments("'x', 1, false")
    assert args == ["x", 1, False]
    assert isinstance(args[1], int)


def test_single_and_double_quotes_are_equivalent():
    assert decode_arguments("'text'") == decode_arguments('"text"')


def test_decodes_every_supported_type():
    args = decode_arguments(
        "'s', 1.5, -2, true, null, undefined, [1, 'a'], {a: 1, b: 'text'}",
    )
    assert args == [
        "s", 1.5, -2, True, None, None, [1, "a"], {"a": 1, "b": "text"},
    ]
    assert len(args) == 8


def test_decodes_nested_informal_mapping():
    args = decode_arguments("{outer: {inner: [1, {deep: true}]}}")
    assert args == [{"outer": {"inner": [1, {"deep": True}]}}]


def test_undecodable_arguments_raise_decode_error():
    with pytest.raises(ArgumentDecodeError):
        decode_arguments("1, notALiteral")


def test_single_quote_inside_string_breaks_decoding():
    """Normalization rewrites every quote; apostrophes are not supported."""
    with pytest.raises(ArgumentDecodeError):
        decode_arguments('"don\'t"')


# ─── format_invocation ───────────────────────────────────────────

def test_format_without_arguments_is_bare_name():
    assert format_invocation("noParams") == "noParams"
    assert format_invocation("noParams", []) == "noParams"


def test_format_with_arguments():
    assert format_invocation("params", ["x", 1, False]) == 'params("x", 1, false)'


@pytest.mark.parametrize("args", [
    ["plain", 0, -1.25, True, False, None],
    ["it's", "a, b: c", "{k: v}", "(paren)"],
    [[1, 2], {"key": "value", "n": [None]}],
])
def test_format_then_parse_is_idempotent(args):
    text = format_invocation("job", args)
    request = parse_invocation(text)
    decoded = decode_arguments(request.raw_args)
    assert request.name == "job"
    assert decoded == args
    assert format_invocation(request.name, decoded) == text
