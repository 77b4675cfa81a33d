"""Source scanners, selected by document language."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from pathlib import Path

from ..constants import LANGUAGE_BY_SUFFIX
from ..index import current_index
from ..model import CompatIndex, Finding
from .css import scan_css
from .html import scan_html
from .js import scan_script

Scanner = Callable[[str, CompatIndex], list[Finding]]

_SCANNERS: dict[str, Scanner] = {
    "css": scan_css,
    "html": scan_html,
    "javascript": partial(scan_script, language="javascript"),
    "javascriptreact": partial(scan_script, language="javascriptreact"),
    "typescript": partial(scan_script, language="typescript"),
    "typescriptreact": partial(scan_script, language="typescriptreact"),
}


def detect_language(path: str | Path) -> str | None:
    """Guess the language kind from a file extension."""
    return LANGUAGE_BY_SUFFIX.get(Path(path).suffix.lower())


def scan(text: str, language: str, index: CompatIndex | None = None) -> list[Finding]:
    """Scan a document; unsupported languages produce no findings."""
    scanner = _SCANNERS.get(language)
    if scanner is None:
        return []
    return scanner(text, index if index is not None else current_index())


__all__ = ["detect_language", "scan", "scan_css", "scan_html", "scan_script"]
