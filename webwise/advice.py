"""AI migration advice with a deterministic fallback."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from .constants import DEFAULT_AI_MODEL, DEFAULT_TIMEOUT_SECONDS
from .exceptions import AdviceError, WebwiseError
from .http import generate_content
from .model import AdviceSuggestion

LOGGER = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\n?")

PROMPT_TEMPLATE = """You're a web development expert. Analyze this web platform feature:

Feature: {feature}
Baseline Status: {baseline_label} ({status})
Description: {description}

Provide ONLY a JSON response in this exact format:
{{
  "explanation": "Brief explanation of why this is/isn't baseline and what it means for developers",
  "alternatives": ["alternative1", "alternative2", "alternative3"],
  "timeline": "When this feature will be safe to use everywhere"
}}

Keep responses concise and practical for developers. Focus on actionable advice."""


def build_prompt(feature_id: str, is_baseline: bool, status: str, description: str) -> str:
    return PROMPT_TEMPLATE.format(
        feature=feature_id,
        baseline_label="Baseline Safe" if is_baseline else "Not Baseline",
        status=status,
        description=description,
    )


def fallback_suggestion(feature_id: str, is_baseline: bool) -> AdviceSuggestion:
    if is_baseline:
        return AdviceSuggestion(
            explanation=f"{feature_id} is widely supported and safe to use in production.",
            alternatives=("No alternatives needed - this feature is baseline safe!",),
            timeline="Ready to use now",
            is_fallback=True,
        )
    return AdviceSuggestion(
        explanation=(
            f"{feature_id} is not yet baseline. "
            "Consider alternatives for broader browser compatibility."
        ),
        alternatives=(
            "Check MDN documentation for alternatives",
            "Consider progressive enhancement approach",
            "Use feature detection before implementing",
        ),
        timeline="Timeline varies - monitor web-features updates",
        is_fallback=True,
    )


def parse_suggestion(raw: str) -> AdviceSuggestion:
    """Parse model output, tolerating Markdown code fences around the JSON."""
    cleaned = _FENCE_RE.sub("", raw).strip()
    try:
        payload: Any = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise AdviceError("AI response is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise AdviceError("AI response is not a JSON object")

    explanation = payload.get("explanation")
    alternatives = payload.get("alternatives")
    timeline = payload.get("timeline")
    if not isinstance(explanation, str) or not isinstance(timeline, str):
        raise AdviceError("AI response is missing explanation or timeline")
    if not isinstance(alternatives, list):
        raise AdviceError("AI response alternatives is not a list")
    cleaned_alternatives = tuple(
        item.strip() for item in alternatives if isinstance(item, str) and item.strip()
    )
    if not cleaned_alternatives:
        raise AdviceError("AI response has no alternatives")
    return AdviceSuggestion(
        explanation=explanation.strip(),
        alternatives=cleaned_alternatives,
        timeline=timeline.strip(),
    )


class AdviceClient:
    """Fetches advice from Gemini; never raises to the caller."""

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = DEFAULT_AI_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    def suggest(
        self, feature_id: str, is_baseline: bool, status: str, description: str
    ) -> AdviceSuggestion:
        if not self.api_key:
            LOGGER.info("No GEMINI_API_KEY configured, using fallback advice for %s", feature_id)
            return fallback_suggestion(feature_id, is_baseline)

        prompt = build_prompt(feature_id, is_baseline, status, description)
        LOGGER.debug("Requesting AI advice for %s", feature_id)
        try:
            raw = generate_content(
                prompt, api_key=self.api_key, model=self.model, timeout=self.timeout
            )
            suggestion = parse_suggestion(raw)
        except WebwiseError as exc:
            LOGGER.warning("AI advice failed for %s, using fallback: %s", feature_id, exc)
            return fallback_suggestion(feature_id, is_baseline)
        LOGGER.debug("Parsed AI advice for %s: %s", feature_id, suggestion)
        return suggestion
