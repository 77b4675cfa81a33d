"""Lookup-key derivation from browser-compat-data keys.

Two disjoint key-spaces are produced:

* markup (CSS + HTML), always lowercase:
  ``prop``, ``prop::value``, ``:pseudo``, ``::pseudo``, ``@rule``,
  ``tag``, ``tag@attr``, ``tag@attr::value`` and bare global attributes;
* script (Web APIs), case preserved: ``navigator.clipboard`` (runtime style),
  ``Navigator.clipboard`` (interface style) and bare constructor names such as
  ``ResizeObserver``.
"""

from __future__ import annotations

import re

from .constants import (
    MDN_API_URL_TEMPLATE,
    MDN_CSS_PAGE_MARKER,
    MDN_CSS_URL_TEMPLATE,
    MDN_HTML_ELEMENT_URL_TEMPLATE,
    MDN_HTML_GLOBAL_ATTRIBUTE_URL_TEMPLATE,
)
from .model import IndexEntry

_CSS_PAGE_SLUG_RE = re.compile(r"^-?[a-z][a-z0-9-]*$")


def _split(compat_key: str) -> list[str]:
    parts = compat_key.strip().split(".")
    if any(not part for part in parts):
        return []
    return parts


def is_script_key(compat_key: str) -> bool:
    return compat_key.startswith("api.")


def derive_markup_keys(compat_key: str) -> list[str]:
    """Map a ``css.*`` or ``html.*`` compat key to markup lookup keys."""
    parts = [part.lower() for part in _split(compat_key)]
    if len(parts) < 3:
        return []

    root, category, name, rest = parts[0], parts[1], parts[2], parts[3:]
    if root == "css":
        if category == "properties":
            if not rest:
                return [name]
            if len(rest) == 1:
                return [f"{name}::{rest[0]}"]
            return []
        if rest:
            return []
        if category == "selectors":
            # Upstream does not tell pseudo-classes from pseudo-elements.
            return [f":{name}", f"::{name}"]
        if category == "at-rules":
            return [f"@{name}"]
        return []

    if root == "html":
        if category == "elements":
            if not rest:
                return [name]
            if len(rest) == 1:
                return [f"{name}@{rest[0]}"]
            if len(rest) == 2:
                return [f"{name}@{rest[0]}::{rest[1]}"]
            return []
        if category == "global_attributes" and not rest:
            return [name]
    return []


def derive_page_key(compat_key: str, entry: IndexEntry) -> str | None:
    """Bare property key taken from a single-segment MDN ``Web/CSS/<slug>`` URL."""
    if not compat_key.startswith("css.") or not entry.mdn_url:
        return None
    _head, marker, tail = entry.mdn_url.partition(MDN_CSS_PAGE_MARKER)
    if not marker:
        return None
    slug = tail.split("#", 1)[0].split("?", 1)[0].strip().lower()
    if "/" in slug or not _CSS_PAGE_SLUG_RE.fullmatch(slug):
        return None
    return slug


def derive_script_keys(compat_key: str) -> list[str]:
    """Map an ``api.*`` compat key to script lookup keys."""
    parts = _split(compat_key)
    if len(parts) < 2 or parts[0] != "api":
        return []

    path = parts[1:]
    interface = path[0]
    if len(path) == 1:
        return [interface]

    runtime_root = interface[:1].lower() + interface[1:]
    return [
        ".".join([runtime_root, *path[1:]]),
        ".".join(path),
    ]


def heuristic_mdn_url(compat_key: str) -> str | None:
    """Guess the MDN reference page for a compat key."""
    parts = _split(compat_key)
    if len(parts) < 2:
        return None

    root = parts[0]
    if root == "api":
        return MDN_API_URL_TEMPLATE.format(path="/".join(parts[1:3]))
    if len(parts) < 3:
        return None

    category, name = parts[1], parts[2]
    if root == "css":
        if category == "properties":
            return MDN_CSS_URL_TEMPLATE.format(name=name)
        if category == "selectors":
            return MDN_CSS_URL_TEMPLATE.format(name=f":{name}")
        if category == "at-rules":
            return MDN_CSS_URL_TEMPLATE.format(name=f"@{name}")
    if root == "html":
        if category == "elements":
            return MDN_HTML_ELEMENT_URL_TEMPLATE.format(name=name)
        if category == "global_attributes":
            return MDN_HTML_GLOBAL_ATTRIBUTE_URL_TEMPLATE.format(name=name)
    return None
