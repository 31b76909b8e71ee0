"""Baseline classification over the feature dataset."""

from __future__ import annotations

import logging

from .constants import (
    CSS_SAMPLE_KEYWORDS,
    NOT_FOUND_DESCRIPTION,
    STATUS_HIGH,
    STATUS_LOW,
    STATUS_UNKNOWN,
)
from .dataset import FeatureDataset
from .model import ClassificationResult, FeatureRecord, FeatureSummary, SupportLevel
from .patterns import infer_feature_id

LOGGER = logging.getLogger(__name__)


def status_label_for(raw_baseline: object) -> str:
    """Normalize the catalog's baseline flag to ``high``, ``low`` or ``unknown``.

    Older catalogs used a plain ``true`` for widely available features.
    """
    if raw_baseline is True:
        return STATUS_HIGH
    if raw_baseline in (STATUS_HIGH, STATUS_LOW):
        return str(raw_baseline)
    return STATUS_UNKNOWN


def support_level_for(status_label: str) -> SupportLevel:
    if status_label == STATUS_HIGH:
        return "high"
    if status_label == STATUS_LOW:
        return "medium"
    return "low"


def is_baseline_status(raw_baseline: object) -> bool:
    return status_label_for(raw_baseline) != STATUS_UNKNOWN


def _not_found(feature_id: str) -> ClassificationResult:
    return ClassificationResult(
        feature_id=feature_id,
        is_baseline=False,
        status_label=STATUS_UNKNOWN,
        support_level=support_level_for(STATUS_UNKNOWN),
        description=NOT_FOUND_DESCRIPTION,
    )


def _from_record(record: FeatureRecord) -> ClassificationResult:
    status_label = status_label_for(record.baseline_status)
    return ClassificationResult(
        feature_id=record.id,
        is_baseline=status_label != STATUS_UNKNOWN,
        status_label=status_label,
        support_level=support_level_for(status_label),
        description=record.description or record.name or record.id,
        name=record.name or record.id,
        browser_support=record.browser_support,
    )


def classify_by_id(dataset: FeatureDataset, feature_id: str) -> ClassificationResult:
    """Classify a catalog id; ids missing from the catalog come back as unknown."""
    record = dataset.lookup(feature_id)
    if record is None:
        return _not_found(feature_id)
    return _from_record(record)


def classify_free_text(dataset: FeatureDataset, text: str) -> ClassificationResult:
    """Classify a selection or typed name by first mapping it to a feature id."""
    return classify_by_id(dataset, infer_feature_id(text))


def bulk_classify_all(dataset: FeatureDataset) -> list[ClassificationResult]:
    """Classify every catalog entry, skipping entries that are not records."""
    results: list[ClassificationResult] = []
    skipped = 0
    for feature_id in dataset.ids():
        if dataset.raw(feature_id) is None:
            skipped += 1
            LOGGER.warning("Skipping malformed web-features entry %r", feature_id)
            continue
        try:
            results.append(classify_by_id(dataset, feature_id))
        except (AttributeError, TypeError, ValueError) as exc:
            skipped += 1
            LOGGER.warning("Skipping web-features entry %r: %s", feature_id, exc)
    LOGGER.debug("Classified %d features (%d skipped)", len(results), skipped)
    return results


def list_features(dataset: FeatureDataset) -> list[FeatureSummary]:
    """Summarize every catalog entry, in the bulk listing shape."""
    summaries: list[FeatureSummary] = []
    for feature_id in dataset.ids():
        record = dataset.lookup(feature_id)
        if record is None:
            LOGGER.warning("Skipping malformed web-features entry %r", feature_id)
            continue
        summaries.append(
            FeatureSummary(
                id=feature_id,
                name=record.name or feature_id,
                is_baseline=is_baseline_status(record.baseline_status),
                description=record.description,
            )
        )
    return summaries


def css_feature_ids(dataset: FeatureDataset, limit: int = 10) -> list[str]:
    """Return a small sample of CSS-looking ids for manual checks."""
    matches = [
        feature_id
        for feature_id in dataset.ids()
        if any(keyword in feature_id for keyword in CSS_SAMPLE_KEYWORDS)
    ]
    return matches[:limit]
