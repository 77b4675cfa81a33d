from __future__ import annotations

import pytest

from baseline_lite.constants import WEB_FEATURES_URL
from baseline_lite.dataset import features_from_payload, iter_feature_records, load_json_source
from baseline_lite.http import use_shared_client
from baseline_lite.index import build_index
from baseline_lite.model import BaselineStatus
from baseline_lite.scanners import scan


@pytest.mark.canary
def test_published_web_features_dataset_is_indexable_live() -> None:
    """
    Canary test: download the published web-features dataset and build an index from it.

    This is intentionally a single, live-network test to detect upstream shape changes.
    """
    with use_shared_client():
        payload = load_json_source(WEB_FEATURES_URL)

    features = features_from_payload(payload, WEB_FEATURES_URL)
    assert len(features) > 500, "Dataset unexpectedly small."

    records = list(iter_feature_records(features))
    assert len(records) > 500, "Most records no longer narrow to FeatureRecord."
    assert {record.status for record in records} == set(BaselineStatus)
    assert any(record.compat_keys for record in records)

    index = build_index(features, core_properties=["color"])
    for key in ("gap", "display", "@container", ":has", "dialog"):
        assert key in index.markup, f"Missing markup key {key!r}."
    assert index.markup["color"].baseline is BaselineStatus.WIDELY_AVAILABLE
    assert any("." in key for key in index.script)
    assert any(key[:1].isupper() and "." not in key for key in index.script)

    assert scan("a { color: red; }", "css", index) == []
