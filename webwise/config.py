"""Environment-driven settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os

from .constants import DATASET_URL, DEFAULT_AI_MODEL, DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class Settings:
    dataset_url: str = DATASET_URL
    dataset_path: str | None = None
    gemini_api_key: str | None = None
    ai_model: str = DEFAULT_AI_MODEL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    debug: bool = False


def _parse_timeout(value: str | None) -> float:
    if not value:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(value)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return timeout if timeout > 0 else DEFAULT_TIMEOUT_SECONDS


def _non_empty(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        dataset_url=_non_empty(env.get("WEBWISE_DATASET_URL")) or DATASET_URL,
        dataset_path=_non_empty(env.get("WEBWISE_DATASET_PATH")),
        gemini_api_key=_non_empty(env.get("GEMINI_API_KEY")),
        ai_model=_non_empty(env.get("WEBWISE_AI_MODEL")) or DEFAULT_AI_MODEL,
        timeout=_parse_timeout(env.get("WEBWISE_TIMEOUT")),
        debug=env.get("WEBWISE_DEBUG", "").strip() == "1",
    )
