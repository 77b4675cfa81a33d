"""HTML helpers built around justhtml, used for dataset descriptions."""

from __future__ import annotations

from typing import Any

from justhtml import JustHTML

from .text import normalize_whitespace

Node = Any


def parse_document(html: str) -> JustHTML:
    """Parse HTML without sanitization to preserve all structural tags."""
    return JustHTML(html, sanitize=False)


def text(node: Node | None) -> str:
    """Extract normalized text from a node."""
    if node is None:
        return ""
    try:
        if hasattr(node, "to_text"):
            return normalize_whitespace(node.to_text())
        if hasattr(node, "data") and isinstance(node.data, str):
            return normalize_whitespace(node.data)
    except Exception:
        return ""
    return ""


def html_to_text(html: str | None) -> str:
    """Render an HTML fragment as a single line of plain text."""
    if not html or not html.strip():
        return ""
    doc = parse_document(html)
    return text(doc) or text(getattr(doc, "root", None))
