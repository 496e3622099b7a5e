# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parsing of per-field tag strings.

A tag string is a space separated list of ``key:"value"`` pairs, for example::

    required:"true" md:"A description with spaces" valid:"between(3,32),oneof(a,b)"

Quoted values may contain spaces and a single value may hold several
comma separated terms, some of which carry parenthesized argument lists.
Both are handled by collapsing the protected separators into a private
sentinel until a fixed point is reached, splitting on what is left and
restoring the sentinels afterwards.
"""

import re

# ###############
# Public Interface
# ###############


def split_tags(tags: str) -> list[str]:
    """Split a tag string into ``key:"value"`` tokens.

    Spaces inside a quoted value do not separate tokens.

    Args:
        tags: The raw tag string of a field.

    Returns:
        The tokens in document order. An empty tag string yields ``[""]``.
    """
    protected = _collapse(_QUOTED_SPACE, tags)
    return [token.replace(_SENTINEL, " ") for token in protected.split(" ")]


def tag_value(key: str, tags: str) -> str:
    """Return the unquoted value of *key* in *tags*, or ``""`` if absent.

    Tokens that do not split into exactly one key and one value on ``:``
    are skipped.
    """
    for token in split_tags(tags):
        parts = token.split(":")
        if len(parts) != 2:
            continue
        if parts[0] == key:
            return parts[1].removesuffix('"').removeprefix('"')
    return ""


def split_tag_values(value: str) -> list[str]:
    """Split a tag value on commas that are not inside a ``(...)`` group.

    ``"between(3,32),oneof(1,2)"`` yields ``["between(3,32)", "oneof(1,2)"]``.
    """
    protected = _collapse(_PAREN_COMMA, value)
    return [term.replace(_SENTINEL, ",") for term in protected.split(",")]


def has_tag_arg(name: str, value: str) -> bool:
    """Return True if *value* holds the bare term *name* or a term ``name(...)``."""
    prefix = f"{name}("
    return any(term == name or term.startswith(prefix) for term in split_tag_values(value))


def tag_args(name: str, value: str) -> str:
    """Return the argument text of the term ``name(...)`` in *value*.

    The text between ``name(`` and the final ``)`` of the term is returned
    verbatim. Returns ``""`` if no such term exists.
    """
    prefix = f"{name}("
    for term in split_tag_values(value):
        if term.startswith(prefix):
            return term.removesuffix(")").removeprefix(prefix)
    return ""


# ################
# Implementation
# ################

# A private-use code point never written by model authors.
_SENTINEL = "\ue000"

# A space inside a quoted tag value.
_QUOTED_SPACE = re.compile(r'(:"[^"]*) ([^"]*")')

# A comma inside a parenthesized argument list.
_PAREN_COMMA = re.compile(r"(\([^)]*),([^)]*\))")


def _collapse(pattern: re.Pattern[str], text: str) -> str:
    """Replace the separator matched by *pattern* with the sentinel until nothing changes.

    A single substitution pass only rewrites one separator per protected
    region, so the pass is repeated to a fixed point.
    """
    result = pattern.sub(rf"\1{_SENTINEL}\2", text)
    while True:
        collapsed = pattern.sub(rf"\1{_SENTINEL}\2", result)
        if collapsed == result:
            return result
        result = collapsed
