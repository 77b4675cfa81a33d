from __future__ import annotations

from collections.abc import Callable
import copy
from typing import Any

import pytest

from baseline_lite.index import build_index
from baseline_lite.model import BaselineStatus, CompatIndex, IndexEntry

SAMPLE_FEATURES: dict[str, Any] = {
    "gap": {
        "kind": "feature",
        "name": "Gap",
        "description": "The `gap` property sets gutters between rows and columns.",
        "status": {"baseline": "low", "baseline_low_date": "2021-04-26"},
        "compat_features": ["css.properties.gap"],
    },
    "color": {
        "kind": "feature",
        "name": "Color",
        "status": {"baseline": "high", "baseline_high_date": "2018-01-29"},
        "compat_features": ["css.properties.color"],
    },
    "has": {
        "kind": "feature",
        "name": ":has()",
        "status": {"baseline": "low"},
        "compat_features": ["css.selectors.has"],
    },
    "hover": {
        "kind": "feature",
        "name": ":hover",
        "status": {"baseline": "high"},
        "compat_features": ["css.selectors.hover"],
    },
    "backdrop": {
        "kind": "feature",
        "name": "::backdrop",
        "status": {"baseline": False},
        "compat_features": ["css.selectors.backdrop"],
    },
    "container-queries": {
        "kind": "feature",
        "name": "Container queries",
        "status": {"baseline": "low"},
        "compat_features": ["css.at-rules.container"],
    },
    "text-wrap-balance": {
        "name": "text-wrap: balance",
        "baseline": False,
        "compat_features": ["css.properties.text-wrap.balance"],
    },
    "input-color": {
        "kind": "feature",
        "name": "Color input",
        "status": {"baseline": False},
        "compat_features": ["html.elements.input.type.color"],
    },
    "popover": {
        "kind": "feature",
        "name": "Popover",
        "status": {"baseline": False},
        "compat_features": [
            "html.global_attributes.popover",
            "html.elements.button.popovertarget",
        ],
    },
    "dialog": {
        "kind": "feature",
        "name": "<dialog>",
        "status": {"baseline": "high"},
        "compat_features": ["html.elements.dialog"],
    },
    "search": {
        "kind": "feature",
        "name": "<search>",
        "status": {"baseline": "low"},
        "compat_features": ["html.elements.search"],
    },
    "async-clipboard": {
        "kind": "feature",
        "name": "Async clipboard",
        "status": {"baseline": False},
        "compat_features": ["api.Clipboard.readText", "api.Navigator.clipboard"],
    },
    "view-transitions": {
        "kind": "feature",
        "name": "View transitions",
        "status": {"baseline": "low"},
        "compat_features": ["api.Document.startViewTransition", "css.at-rules.view-transition"],
    },
    "resize-observer": {
        "kind": "feature",
        "name": "Resize observer",
        "status": {"baseline": "high"},
        "compat_features": ["api.ResizeObserver"],
    },
    "compute-pressure": {
        "kind": "feature",
        "name": "Compute pressure",
        "status": {"baseline": False},
        "compat_features": ["api.PressureObserver"],
    },
    "moved-gap": {"kind": "moved", "redirect_target": "gap"},
    "split-layout": {"kind": "split", "redirect_targets": ["gap", "has"]},
    "broken": {"kind": "feature", "name": "Broken", "compat_features": ["css.properties.zoom"]},
    "bad-status": {
        "kind": "feature",
        "status": {"baseline": "medium"},
        "compat_features": ["css.properties.zoom"],
    },
}


@pytest.fixture
def features() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_FEATURES)


@pytest.fixture
def index(features: dict[str, Any]) -> CompatIndex:
    return build_index(features)


IndexFactory = Callable[..., CompatIndex]


@pytest.fixture
def make_index() -> IndexFactory:
    """Hand-built index: ``make_index(markup={"gap": "low"}, script={...})``."""

    def _entry(key: str, raw: object) -> IndexEntry:
        status = raw if isinstance(raw, BaselineStatus) else BaselineStatus.from_raw(raw)
        assert status is not None
        return IndexEntry(feature_id=key, feature_name=key, baseline=status)

    def _factory(
        markup: dict[str, object] | None = None,
        script: dict[str, object] | None = None,
    ) -> CompatIndex:
        return CompatIndex.from_tables(
            {key: _entry(key, raw) for key, raw in (markup or {}).items()},
            {key: _entry(key, raw) for key, raw in (script or {}).items()},
        )

    return _factory
