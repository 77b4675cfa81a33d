from __future__ import annotations

import pytest

from baseline_lite.model import CompatIndex
from baseline_lite.resolve import resolve_token, resolve_token_with_key, token_at


@pytest.mark.parametrize(
    ("token", "line", "expected_key"),
    [
        ("gap", "", "gap"),
        ("GAP", "", "gap"),
        ("::backdrop", "", "::backdrop"),
        ("has", "", ":has"),
        ("backdrop", "", ":backdrop"),
        ("container", "", "@container"),
        ("@Container", "", "@container"),
        ("balance", "  text-wrap: balance;", "text-wrap::balance"),
        ("Balance", "text-wrap: pretty, balance", "text-wrap::balance"),
        ("popover", "", "popover"),
        ("navigator.clipboard", "", "navigator.clipboard"),
        ("Clipboard.readText", "", "Clipboard.readText"),
        ("PressureObserver", "", "PressureObserver"),
    ],
)
def test_resolution_order(
    index: CompatIndex, token: str, line: str, expected_key: str
) -> None:
    resolved = resolve_token_with_key(index, token, line)

    assert resolved is not None
    key, entry = resolved
    assert key == expected_key
    assert entry is (index.markup.get(key) or index.script[key])


@pytest.mark.parametrize(
    ("token", "line"),
    [
        ("", ""),
        ("   ", ""),
        ("balance", ""),
        ("balance", "text-wrap: pretty;"),
        ("balance", "a { text-wrap: balance; }"),
        ("pressureobserver", ""),
        ("unknown-thing", "gap: unknown-thing;"),
    ],
)
def test_unresolved_tokens(index: CompatIndex, token: str, line: str) -> None:
    assert resolve_token(index, token, line) is None


def test_direct_key_beats_declaration_value(make_index) -> None:
    custom = make_index(markup={"balance": "low", "text-wrap::balance": False})

    resolved = resolve_token_with_key(custom, "balance", "text-wrap: balance;")

    assert resolved is not None
    assert resolved[0] == "balance"


def test_resolve_token_returns_entry(index: CompatIndex) -> None:
    assert resolve_token(index, "gap") is index.markup["gap"]


@pytest.mark.parametrize(
    ("line", "column", "expected"),
    [
        ("  text-wrap: balance;", 2, "text-wrap"),
        ("  text-wrap: balance;", 14, "balance"),
        ("  text-wrap: balance;", 11, "text-wrap"),
        ("  text-wrap: balance;", 0, None),
        ("dialog::backdrop {", 9, "::backdrop"),
        ("dialog::backdrop {", 16, "::backdrop"),
        ("dialog::backdrop {", 17, None),
        ("@container card (width > 1px) {", 3, "@container"),
        ("await navigator.clipboard.readText();", 12, "navigator.clipboard.readText"),
        ("", 0, None),
    ],
)
def test_token_at(line: str, column: int, expected: str | None) -> None:
    assert token_at(line, column) == expected
