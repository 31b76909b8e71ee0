from __future__ import annotations

import pytest

from webwise.cache import NonBaselineCache
from webwise.classify import classify_by_id
from webwise.dataset import FeatureDataset
from webwise.scanner import scan_document


@pytest.mark.canary
def test_web_features_catalog_shape_is_usable_live() -> None:
    """
    Canary test: download the real web-features catalog and verify every field we read is present.

    This is intentionally a single, live-network test to detect upstream data format changes.
    """
    dataset = FeatureDataset.from_url()
    assert len(dataset) > 500

    flexbox = dataset.lookup("flexbox")
    assert flexbox is not None
    assert flexbox.name
    assert flexbox.description
    assert flexbox.baseline_status == "high"
    assert flexbox.browser_support, "status.support no longer maps browsers to versions."

    assert classify_by_id(dataset, "flexbox").support_level == "high"
    assert dataset.lookup("has") is not None

    cache = NonBaselineCache.for_dataset(dataset)
    cache.warm()
    assert cache.source == "dataset"
    assert len(cache) > 0
    assert isinstance(scan_document("a:has(b) {}", "css", cache), list)
