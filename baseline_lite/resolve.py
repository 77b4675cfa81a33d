"""Lookup-on-demand for a raw token and the line it sits on."""

from __future__ import annotations

import re

from .model import CompatIndex, IndexEntry
from .scanners.css import DECLARATION_RE, split_value

_WORD_RE = re.compile(r"[@:]*[\w-]+(?:\.[\w-]+)*")


def token_at(line: str, column: int) -> str | None:
    """Return the hover word covering ``column``, if any.

    A column just past the end of a word still selects that word.
    """
    touching = None
    for match in _WORD_RE.finditer(line):
        if match.start() > column:
            break
        if column < match.end():
            return match.group(0)
        if column == match.end():
            touching = match.group(0)
    return touching


def resolve_token_with_key(
    index: CompatIndex, token: str, line: str = ""
) -> tuple[str, IndexEntry] | None:
    """Resolve a token to ``(key, entry)``.

    Order: direct markup key, ``prop::token`` when ``line`` is a declaration
    whose value contains the token, ``:x``/``::x``/``@x`` variants, then the
    script index with the token as written.
    """
    word = token.strip()
    if not word:
        return None
    key = word.lower()

    entry = index.markup.get(key)
    if entry is not None:
        return key, entry

    declaration = DECLARATION_RE.match(line) if line else None
    if declaration is not None:
        prop = declaration.group(1).lower()
        if any(value.lower() == key for value in split_value(declaration.group(2))):
            value_key = f"{prop}::{key}"
            entry = index.markup.get(value_key)
            if entry is not None:
                return value_key, entry

    bare = key.lstrip(":@")
    if bare:
        for variant in (f":{bare}", f"::{bare}", f"@{bare}"):
            entry = index.markup.get(variant)
            if entry is not None:
                return variant, entry

    entry = index.script.get(word)
    if entry is not None:
        return word, entry
    return None


def resolve_token(index: CompatIndex, token: str, line: str = "") -> IndexEntry | None:
    resolved = resolve_token_with_key(index, token, line)
    return resolved[1] if resolved else None
