from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from webwise.cache import NonBaselineCache
from webwise.dataset import FeatureDataset

SAMPLE_PATH = Path(__file__).parent / "data" / "web-features-sample.json"


def make_features() -> dict[str, Any]:
    return {
        "flexbox": {
            "name": "Flexbox",
            "description": "One-dimensional layout.",
            "status": {"baseline": "high", "support": {"chrome": "29", "firefox": "28"}},
        },
        "has": {
            "name": ":has()",
            "description": "Relational pseudo-class.",
            "status": {"baseline": "low", "support": {"chrome": "105"}},
        },
        "grid": {
            "name": "Grid",
            "description": "",
            "status": {"baseline": True},
        },
        "container-queries": {
            "name": "Container queries",
            "description": "Size container queries.",
            "status": {"baseline": False, "support": {"chrome": "105"}},
        },
        "anchor-positioning": {
            "name": "Anchor positioning",
            "description": "Position relative to an anchor.",
            "status": {"baseline": False},
        },
        "nesting": {
            "name": "Nesting",
            "description": "CSS nesting.",
            "status": {"baseline": False},
        },
        "popover": {
            "name": "Popover",
            "description": "The popover attribute.",
            "status": {"baseline": "low"},
        },
        "no-status": {"name": "No status", "description": "Entry without a status block."},
    }


@pytest.fixture
def sample_path() -> Path:
    return SAMPLE_PATH


@pytest.fixture
def dataset() -> FeatureDataset:
    return FeatureDataset.from_mapping(make_features())


@pytest.fixture
def warm_cache(dataset: FeatureDataset) -> NonBaselineCache:
    cache = NonBaselineCache.for_dataset(dataset)
    cache.warm()
    return cache
