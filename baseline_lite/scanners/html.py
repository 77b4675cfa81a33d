"""Tag-based HTML scanner."""

from __future__ import annotations

from collections.abc import Mapping
import re

from ..constants import NOISY_HTML_ATTRIBUTES
from ..model import CompatIndex, Finding, IndexEntry, SourceRange
from ..util.text import LineIndex, blank_out
from ._base import make_finding

_COMMENT_RE = re.compile(r"<!--.*?(?:-->|\Z)", re.DOTALL)
_TAG_RE = re.compile(r"<([a-zA-Z][a-zA-Z0-9-]*)(?=[\s/>])([^<>]*)>")
_FOREIGN_RE = re.compile(r"<(/?)(?:svg|math)(?=[\s/>])([^<>]*)>", re.IGNORECASE)
_ATTRIBUTE_RE = re.compile(
    r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)


def _mask_comments(text: str) -> str:
    return _COMMENT_RE.sub(lambda match: blank_out(match.group()), text)


def _foreign_ranges(text: str) -> list[tuple[int, int]]:
    """Offsets of the content inside top-level <svg> and <math> elements."""
    ranges: list[tuple[int, int]] = []
    depth = 0
    start = 0
    for match in _FOREIGN_RE.finditer(text):
        if match.group(1):
            if depth:
                depth -= 1
                if not depth:
                    ranges.append((start, match.start()))
        elif not match.group(2).rstrip().endswith("/"):
            if not depth:
                start = match.end()
            depth += 1
    if depth:
        ranges.append((start, len(text)))
    return ranges


def _resolve_attribute(
    markup: Mapping[str, IndexEntry],
    tag: str,
    attr: str,
    value: str | None,
) -> tuple[str, IndexEntry, bool] | None:
    """First existing key wins: value key, element attribute, global attribute."""
    lookup = markup.get
    if value:
        key = f"{tag}@{attr}::{value}"
        entry = lookup(key)
        if entry is not None:
            return key, entry, True
    key = f"{tag}@{attr}"
    entry = lookup(key)
    if entry is not None:
        return key, entry, False
    if attr not in NOISY_HTML_ATTRIBUTES:
        entry = lookup(attr)
        if entry is not None:
            return attr, entry, False
    return None


def scan_html(text: str, index: CompatIndex) -> list[Finding]:
    """Scan HTML source text for flagged elements and attributes."""
    masked = _mask_comments(text)
    foreign = _foreign_ranges(masked)
    lines = LineIndex(text)
    findings: list[Finding] = []

    def _span(start: int, end: int) -> SourceRange:
        return SourceRange(lines.position(start), lines.position(end))

    for tag_match in _TAG_RE.finditer(masked):
        # SVG and MathML names overlap bare CSS property keys such as ``mask``.
        if any(start <= tag_match.start() < end for start, end in foreign):
            continue
        tag_name = tag_match.group(1)
        tag = tag_name.lower()
        finding = make_finding(
            index.markup.get(tag),
            tag,
            _span(tag_match.start(1), tag_match.end(1)),
            f"<{tag_name}>",
        )
        if finding:
            findings.append(finding)

        chunk_start = tag_match.start(2)
        for attr_match in _ATTRIBUTE_RE.finditer(tag_match.group(2)):
            attr_name = attr_match.group(1)
            attr = attr_name.lower()
            value_group = next(
                (group for group in (2, 3, 4) if attr_match.group(group) is not None), None
            )
            raw_value = attr_match.group(value_group) if value_group is not None else None
            value = raw_value.strip().lower() if raw_value else None

            resolved = _resolve_attribute(index.markup, tag, attr, value)
            if resolved is None:
                continue
            key, entry, on_value = resolved
            if on_value and value_group is not None:
                span = _span(
                    chunk_start + attr_match.start(value_group),
                    chunk_start + attr_match.end(value_group),
                )
                fallback = f'{attr_name}="{raw_value}"'
            else:
                span = _span(chunk_start + attr_match.start(1), chunk_start + attr_match.end(1))
                fallback = attr_name
            finding = make_finding(entry, key, span, fallback)
            if finding:
                findings.append(finding)
    return findings
