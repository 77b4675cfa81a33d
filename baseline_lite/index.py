"""Compatibility index builder and the process-wide published snapshot."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import dataclasses
import logging
from typing import Any

from .constants import MDN_CSS_URL_TEMPLATE
from .dataset import iter_feature_records
from .keys import derive_markup_keys, derive_page_key, derive_script_keys, is_script_key
from .model import BaselineStatus, CompatIndex, IndexEntry
from .util.text import debug_log

LOGGER = logging.getLogger(__name__)

_CURRENT_INDEX: CompatIndex = CompatIndex()


def _apply_core_properties(
    markup: dict[str, IndexEntry],
    core_properties: Iterable[str],
) -> None:
    for raw_name in core_properties:
        name = raw_name.strip().lower()
        if not name:
            continue
        existing = markup.get(name)
        if existing is not None and existing.is_widely_available:
            continue
        url = MDN_CSS_URL_TEMPLATE.format(name=name)
        if existing is None:
            markup[name] = IndexEntry(
                feature_id=name,
                feature_name=name,
                baseline=BaselineStatus.WIDELY_AVAILABLE,
                mdn_url=url,
            )
        else:
            markup[name] = dataclasses.replace(
                existing, baseline=BaselineStatus.WIDELY_AVAILABLE, mdn_url=url
            )
        LOGGER.debug("Pinned core property %r to widely available", name)


def build_index(
    features: Mapping[str, Any],
    compat_data: Mapping[str, Any] | None = None,
    core_properties: Iterable[str] = (),
) -> CompatIndex:
    """Compile the feature dataset into markup and script lookup tables.

    The later compat key wins when two keys derive the same lookup key. The
    CSS page-slug fallback only fills keys nothing else has claimed. Core
    properties are pinned to widely available after the dataset pass.
    """
    markup: dict[str, IndexEntry] = {}
    script: dict[str, IndexEntry] = {}
    page_keys: dict[str, IndexEntry] = {}
    records = 0

    for record in iter_feature_records(features, compat_data):
        records += 1
        entry = IndexEntry.from_record(record)
        for compat_key in record.compat_keys:
            if is_script_key(compat_key):
                for key in derive_script_keys(compat_key):
                    script[key] = entry
                continue
            for key in derive_markup_keys(compat_key):
                markup[key] = entry
            page_key = derive_page_key(compat_key, entry)
            if page_key is not None:
                page_keys.setdefault(page_key, entry)

    for key, entry in page_keys.items():
        markup.setdefault(key, entry)

    _apply_core_properties(markup, core_properties)

    debug_log(
        "Indexed %d features into %d markup and %d script keys",
        records,
        len(markup),
        len(script),
    )
    return CompatIndex.from_tables(markup, script)


def publish_index(index: CompatIndex) -> CompatIndex:
    """Atomically replace the process-wide index snapshot."""
    global _CURRENT_INDEX
    _CURRENT_INDEX = index
    return index


def current_index() -> CompatIndex:
    return _CURRENT_INDEX


def rebuild_index(
    features: Mapping[str, Any],
    compat_data: Mapping[str, Any] | None = None,
    core_properties: Iterable[str] = (),
) -> CompatIndex:
    """Build a fresh index and publish it once complete."""
    return publish_index(build_index(features, compat_data, core_properties))
