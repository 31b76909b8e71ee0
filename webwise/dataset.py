"""Read-only view over the web-features catalog."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import json
import logging
from pathlib import Path
from typing import Any

from .constants import DATASET_URL, DEFAULT_TIMEOUT_SECONDS, REDIRECT_KINDS
from .exceptions import DatasetError
from .http import fetch_dataset_payload
from .model import FeatureRecord

LOGGER = logging.getLogger(__name__)


def _as_spec(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(item for item in value if isinstance(item, str))
    return ()


def _is_redirect(entry: Mapping[str, Any]) -> bool:
    return entry.get("kind") in REDIRECT_KINDS


class FeatureDataset:
    """Feature id to metadata lookup; never mutated after construction."""

    def __init__(self, features: Mapping[str, Any]) -> None:
        self._features = dict(features)

    @classmethod
    def from_mapping(cls, features: Mapping[str, Any]) -> FeatureDataset:
        return cls(features)

    @classmethod
    def from_payload(cls, payload: Any, *, origin: str = "payload") -> FeatureDataset:
        """Build from a full ``data.json`` object or a bare id-to-entry mapping."""
        if not isinstance(payload, Mapping):
            raise DatasetError(origin, cause="top-level value is not an object")
        features = payload.get("features", payload)
        if not isinstance(features, Mapping):
            raise DatasetError(origin, cause="'features' is not an object")
        return cls(features)

    @classmethod
    def from_path(cls, path: str | Path) -> FeatureDataset:
        file_path = Path(path)
        try:
            payload = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise DatasetError(str(file_path), cause=exc.__class__.__name__) from exc
        except UnicodeDecodeError as exc:
            raise DatasetError(str(file_path), cause="not UTF-8") from exc
        except json.JSONDecodeError as exc:
            raise DatasetError(str(file_path), cause="invalid JSON") from exc
        return cls.from_payload(payload, origin=str(file_path))

    @classmethod
    def from_url(
        cls, url: str = DATASET_URL, timeout: float = DEFAULT_TIMEOUT_SECONDS
    ) -> FeatureDataset:
        dataset = cls.from_payload(fetch_dataset_payload(url, timeout=timeout), origin=url)
        LOGGER.info("Loaded %d web features from %s", len(dataset), url)
        return dataset

    def raw(self, feature_id: str) -> Mapping[str, Any] | None:
        """Return the untouched catalog entry."""
        entry = self._features.get(feature_id)
        return entry if isinstance(entry, Mapping) else None

    def lookup(self, feature_id: str) -> FeatureRecord | None:
        entry = self.raw(feature_id)
        if entry is None or _is_redirect(entry):
            return None

        status = entry.get("status")
        if not isinstance(status, Mapping):
            status = {}
        support = status.get("support")
        name = entry.get("name")
        description = entry.get("description")
        group = entry.get("group")
        return FeatureRecord(
            id=feature_id,
            name=name if isinstance(name, str) else "",
            description=description if isinstance(description, str) else "",
            baseline_status=status.get("baseline"),
            browser_support=support if isinstance(support, Mapping) else None,
            spec=_as_spec(entry.get("spec")),
            group=group if isinstance(group, str) else None,
        )

    def ids(self) -> list[str]:
        return [
            feature_id
            for feature_id, entry in self._features.items()
            if not (isinstance(entry, Mapping) and _is_redirect(entry))
        ]

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())

    def __len__(self) -> int:
        return len(self.ids())

    def __contains__(self, feature_id: object) -> bool:
        return isinstance(feature_id, str) and self.lookup(feature_id) is not None
