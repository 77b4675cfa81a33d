"""web-features dataset adapter.

Upstream records come in several shapes: real features, ``moved``/``split``
redirect markers, and older releases that carry ``baseline`` at the top level
instead of under ``status``. Everything is narrowed to :class:`FeatureRecord`
here so the index builder never sees the raw payload.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
import json
import logging
from pathlib import Path
from typing import Any, cast

from .constants import MDN_BASE_URL
from .exceptions import DatasetError
from .http import fetch_json
from .keys import heuristic_mdn_url
from .model import BaselineStatus, FeatureRecord
from .util.html import html_to_text
from .util.text import debug_log

LOGGER = logging.getLogger(__name__)

_MISSING = object()


def load_json_source(source: str | Path) -> Any:
    """Load JSON from a local path or an http(s) URL."""
    source_text = str(source)
    if source_text.startswith(("http://", "https://")):
        return fetch_json(source_text)

    path = Path(source_text).expanduser()
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetError(source_text, exc.strerror or exc.__class__.__name__) from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DatasetError(source_text, f"invalid JSON ({exc.msg})") from exc


def features_from_payload(payload: object, source: str = "<features>") -> dict[str, Any]:
    """Accept either a full web-features ``data.json`` or its ``features`` map."""
    if not isinstance(payload, dict):
        raise DatasetError(source, "expected a JSON object")
    features = payload.get("features", payload)
    if not isinstance(features, dict):
        raise DatasetError(source, "'features' is not an object")
    return cast(dict[str, Any], features)


def compat_from_payload(payload: object, source: str = "<compat>") -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise DatasetError(source, "expected a JSON object")
    return cast(dict[str, Any], payload)


def _raw_baseline(entry: Mapping[str, Any]) -> object:
    status = entry.get("status")
    if isinstance(status, dict) and "baseline" in status:
        return status["baseline"]
    return entry.get("baseline", _MISSING)


def _status_field(entry: Mapping[str, Any], name: str) -> str | None:
    status = entry.get("status")
    value = status.get(name) if isinstance(status, dict) else None
    if value is None:
        value = entry.get(name)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _is_feature(entry: object) -> bool:
    if not isinstance(entry, dict):
        return False
    kind = entry.get("kind", "feature")
    return kind == "feature"


def _compat_keys(entry: Mapping[str, Any]) -> tuple[str, ...]:
    raw = entry.get("compat_features")
    if not isinstance(raw, list):
        return ()
    return tuple(item.strip() for item in raw if isinstance(item, str) and item.strip())


def _description(entry: Mapping[str, Any]) -> str | None:
    raw_html = entry.get("description_html")
    rendered = ""
    if isinstance(raw_html, str):
        try:
            rendered = html_to_text(raw_html)
        except Exception:
            LOGGER.debug("Unable to render description_html", exc_info=True)
    if rendered:
        return rendered
    plain = entry.get("description")
    if isinstance(plain, str) and plain.strip():
        return plain.strip()
    return None


def compat_mdn_url(compat_data: Mapping[str, Any] | None, compat_key: str) -> str | None:
    """Read ``__compat.mdn_url`` for a dotted key from browser-compat-data."""
    if not compat_data:
        return None
    node: object = compat_data
    for part in compat_key.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    if not isinstance(node, dict):
        return None
    compat = node.get("__compat")
    if not isinstance(compat, dict):
        return None
    url = compat.get("mdn_url")
    if isinstance(url, str) and url.strip():
        return url.strip()
    return None


def _explicit_url(entry: Mapping[str, Any]) -> str | None:
    for name in ("mdn_url", "mdnUrl"):
        value = entry.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _slug_url(entry: Mapping[str, Any]) -> str | None:
    slug = entry.get("mdn_slug")
    if not isinstance(slug, str) or not slug.strip():
        return None
    return f"{MDN_BASE_URL}/{slug.strip().strip('/')}"


def resolve_mdn_url(
    entry: Mapping[str, Any],
    compat_keys: Iterable[str],
    compat_data: Mapping[str, Any] | None = None,
) -> str | None:
    """Explicit URL, then slug, then a URL guessed from the compat-key path."""
    keys = list(compat_keys)
    url = _explicit_url(entry)
    if url:
        return url
    for compat_key in keys:
        url = compat_mdn_url(compat_data, compat_key)
        if url:
            return url
    url = _slug_url(entry)
    if url:
        return url
    for compat_key in keys:
        url = heuristic_mdn_url(compat_key)
        if url:
            return url
    return None


def to_feature_record(
    feature_id: str,
    entry: object,
    compat_data: Mapping[str, Any] | None = None,
) -> FeatureRecord | None:
    """Narrow one upstream record; None when it is not an indexable feature."""
    if not isinstance(feature_id, str) or not feature_id.strip():
        return None
    if not _is_feature(entry):
        return None
    entry_map = cast(dict[str, Any], entry)

    raw_status = _raw_baseline(entry_map)
    if raw_status is _MISSING:
        return None
    status = BaselineStatus.from_raw(raw_status)
    if status is None:
        return None

    name = entry_map.get("name")
    feature_name = name.strip() if isinstance(name, str) and name.strip() else feature_id
    compat_keys = _compat_keys(entry_map)

    return FeatureRecord(
        feature_id=feature_id,
        feature_name=feature_name,
        status=status,
        mdn_url=resolve_mdn_url(entry_map, compat_keys, compat_data),
        description=_description(entry_map),
        compat_keys=compat_keys,
        low_date=_status_field(entry_map, "baseline_low_date"),
        high_date=_status_field(entry_map, "baseline_high_date"),
    )


def iter_feature_records(
    features: Mapping[str, Any],
    compat_data: Mapping[str, Any] | None = None,
) -> Iterator[FeatureRecord]:
    """Yield indexable features in dataset order, skipping everything else."""
    skipped = 0
    for feature_id, entry in features.items():
        record = to_feature_record(feature_id, entry, compat_data)
        if record is None:
            skipped += 1
            LOGGER.debug("Skipping dataset record %r", feature_id)
            continue
        yield record
    debug_log("Dataset adapter skipped %d records", skipped)
