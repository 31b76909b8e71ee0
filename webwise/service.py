"""Request/response boundary for classification and advice."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from .advice import AdviceClient, fallback_suggestion
from .classify import classify_by_id, css_feature_ids, list_features
from .config import Settings
from .dataset import FeatureDataset
from .exceptions import InvalidInputError
from .model import AdviceSuggestion, ClassificationResult

LOGGER = logging.getLogger(__name__)


def load_dataset(settings: Settings) -> FeatureDataset:
    """Load the catalog from the configured file, else download it."""
    if settings.dataset_path:
        return FeatureDataset.from_path(settings.dataset_path)
    return FeatureDataset.from_url(settings.dataset_url, timeout=settings.timeout)


def advice_client(settings: Settings) -> AdviceClient:
    return AdviceClient(settings.gemini_api_key, model=settings.ai_model, timeout=settings.timeout)


def format_advice(feature_id: str, suggestion: AdviceSuggestion) -> str:
    lines = [f"AI Analysis for {feature_id}:", suggestion.explanation, "", "Alternatives:"]
    lines.extend(f"- {alternative}" for alternative in suggestion.alternatives)
    lines.extend(["", f"Timeline: {suggestion.timeline}"])
    return "\n".join(lines)


class BaselineService:
    def __init__(self, dataset: FeatureDataset, advice: AdviceClient | None = None) -> None:
        self.dataset = dataset
        self.advice = advice

    def classify(self, feature_id: str) -> ClassificationResult:
        return classify_by_id(self.dataset, feature_id)

    def suggest(self, result: ClassificationResult) -> AdviceSuggestion | None:
        if self.advice is None:
            return None
        return self.advice.suggest(
            result.feature_id, result.is_baseline, result.status_label, result.description
        )

    def check_feature(self, request: Mapping[str, Any]) -> dict[str, Any]:
        """Handle a ``{"feature": ...}`` request.

        Raises:
            InvalidInputError: when the feature name is missing or blank.
        """
        feature = request.get("feature")
        if not isinstance(feature, str) or not feature.strip():
            raise InvalidInputError("Feature name is required")

        result = self.classify(feature.strip())
        LOGGER.debug("Classified %s as %s", result.feature_id, result.status_label)
        response = result.to_dict()
        suggestion = self.suggest(result)
        if suggestion is not None:
            response["aiSuggestion"] = suggestion.to_dict()
        return response

    def all_features(self) -> dict[str, Any]:
        return {"features": [summary.to_dict() for summary in list_features(self.dataset)]}

    def css_features(self) -> dict[str, Any]:
        return {"features": css_feature_ids(self.dataset)}

    def debug_feature(self, feature_id: str) -> dict[str, Any]:
        entry = self.dataset.raw(feature_id)
        if entry is None:
            return {"error": "Feature not found"}
        return {
            "featureName": feature_id,
            "rawFeature": {
                "name": entry.get("name"),
                "description": entry.get("description"),
                "status": entry.get("status"),
                "spec": entry.get("spec"),
            },
        }

    def alternatives(self, feature_id: str) -> tuple[str, str]:
        """Return the top suggestion and the full advice text for a quick fix."""
        if not feature_id.strip():
            raise InvalidInputError("Feature name is required")
        result = self.classify(feature_id.strip())
        suggestion = self.suggest(result) or fallback_suggestion(
            result.feature_id, result.is_baseline
        )
        return suggestion.alternatives[0], format_advice(result.feature_id, suggestion)
