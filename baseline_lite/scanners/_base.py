"""Helpers shared by the source scanners."""

from __future__ import annotations

from ..model import Finding, IndexEntry, SourceRange


def make_finding(
    entry: IndexEntry | None,
    key: str,
    source_range: SourceRange,
    fallback_label: str,
) -> Finding | None:
    """Build a finding, or None when the construct is unknown or widely available."""
    if entry is None or entry.is_widely_available:
        return None
    return Finding(
        range=source_range,
        status=entry.baseline,
        label=entry.feature_name or fallback_label,
        key=key,
    )
