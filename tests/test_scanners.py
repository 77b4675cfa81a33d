from __future__ import annotations

from typing import Any

import pytest

from baseline_lite import index as index_module
from baseline_lite.constants import SCRIPT_GLOBAL_ROOTS
from baseline_lite.index import build_index, rebuild_index
from baseline_lite.model import BaselineStatus, CompatIndex
from baseline_lite.resolve import resolve_token
from baseline_lite.scanners import detect_language, scan

MIXED_SOURCES = {
    "css": "a { gap: 1px; color: red; }\nb:hover, c::backdrop {}",
    "html": '<dialog open><search><input type="color"></search></dialog>',
    "javascript": "new ResizeObserver(cb);\nnavigator.clipboard.writeText('x');",
}


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("styles/site.CSS", "css"),
        ("index.htm", "html"),
        ("app.mjs", "javascript"),
        ("view.jsx", "javascriptreact"),
        ("main.ts", "typescript"),
        ("page.tsx", "typescriptreact"),
        ("README.md", None),
        ("Makefile", None),
    ],
)
def test_detect_language(path: str, expected: str | None) -> None:
    assert detect_language(path) == expected


def test_unsupported_language_yields_nothing(index: CompatIndex) -> None:
    assert scan("a { gap: 1px; }", "scss", index) == []
    assert scan("a { gap: 1px; }", "", index) == []


def test_scan_uses_published_index_by_default(
    monkeypatch: pytest.MonkeyPatch, features: dict[str, Any]
) -> None:
    monkeypatch.setattr(index_module, "_CURRENT_INDEX", CompatIndex())
    assert scan("a { gap: 1px; }", "css") == []

    rebuild_index(features)

    assert [f.key for f in scan("a { gap: 1px; }", "css")] == ["gap"]


@pytest.mark.parametrize("language", sorted(MIXED_SOURCES))
def test_widely_available_never_reported(index: CompatIndex, language: str) -> None:
    findings = scan(MIXED_SOURCES[language], language, index)

    assert findings
    assert all(f.status is not BaselineStatus.WIDELY_AVAILABLE for f in findings)
    widely = {
        key
        for table in (index.markup, index.script)
        for key, entry in table.items()
        if entry.is_widely_available
    }
    assert not {f.key for f in findings} & widely


@pytest.fixture
def limited_index(features: dict[str, Any]) -> CompatIndex:
    for entry in features.values():
        if isinstance(entry, dict) and isinstance(entry.get("status"), dict):
            if entry["status"].get("baseline") in ("high", "low"):
                entry["status"]["baseline"] = False
    return build_index(features)


def _markup_sources(key: str) -> list[tuple[str, str]]:
    if key.startswith("@"):
        return [("css", f"{key} x {{}}")]
    if key.startswith(":"):
        return [("css", f"a{key} {{}}")]
    if "@" in key:
        tag, attr = key.split("@", 1)
        if "::" in attr:
            attr, value = attr.split("::", 1)
            return [("html", f'<{tag} {attr}="{value}">')]
        return [("html", f"<{tag} {attr}>")]
    if "::" in key:
        prop, value = key.split("::", 1)
        return [("css", f"a {{ {prop}: {value}; }}")]
    return [("css", f"a {{ {key}: x; }}"), ("html", f"<{key}>"), ("html", f"<div {key}>")]


def test_every_markup_key_is_locatable(limited_index: CompatIndex) -> None:
    for key in limited_index.markup:
        found = {
            finding.key
            for language, source in _markup_sources(key)
            for finding in scan(source, language, limited_index)
        }
        assert key in found, key


def test_every_script_key_is_reachable(limited_index: CompatIndex) -> None:
    for key, entry in limited_index.script.items():
        root, _, rest = key.partition(".")
        runtime_root = root[:1].lower() + root[1:]
        if not rest:
            findings = scan(f"new {key}();", "javascript", limited_index)
            assert [f.key for f in findings] == [key]
        elif runtime_root in SCRIPT_GLOBAL_ROOTS:
            findings = scan(f"{runtime_root}.{rest};", "javascript", limited_index)
            assert [f.key for f in findings] == [f"{runtime_root}.{rest}"]
            assert limited_index.script[f"{runtime_root}.{rest}"] is entry
        else:
            assert resolve_token(limited_index, key) is entry
