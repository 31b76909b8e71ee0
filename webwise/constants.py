"""Constants used across webwise."""

from __future__ import annotations

from typing import Final

DATASET_URL: Final[str] = "https://unpkg.com/web-features/data.json"
GEMINI_API_URL_TEMPLATE: Final[str] = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
DEFAULT_AI_MODEL: Final[str] = "gemini-2.5-flash"

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0

STATUS_HIGH: Final[str] = "high"
STATUS_LOW: Final[str] = "low"
STATUS_UNKNOWN: Final[str] = "unknown"

NOT_FOUND_DESCRIPTION: Final[str] = "Feature not found in web-features database"

# Catalog entries of these kinds are redirects to other ids, not features.
REDIRECT_KINDS: Final[frozenset[str]] = frozenset({"moved", "split"})

# Used when the bulk classification pass cannot reach the dataset.
FALLBACK_NON_BASELINE_IDS: Final[tuple[str, ...]] = (
    "has",
    "container-queries",
    "scroll-driven-animations",
    "anchor-positioning",
    "starting-style",
    "cascade-layers",
)

SCANNABLE_LANGUAGES: Final[frozenset[str]] = frozenset(
    {
        "css",
        "scss",
        "less",
        "javascript",
        "javascriptreact",
        "typescript",
        "typescriptreact",
        "html",
        "vue",
        "svelte",
    }
)

LANGUAGE_BY_SUFFIX: Final[dict[str, str]] = {
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".mts": "typescript",
    ".tsx": "typescriptreact",
    ".html": "html",
    ".htm": "html",
    ".vue": "vue",
    ".svelte": "svelte",
}

DIAGNOSTIC_CODE: Final[str] = "webwise-non-baseline"
DIAGNOSTIC_SOURCE: Final[str] = "WebWise"
DIAGNOSTIC_MESSAGE_TEMPLATE: Final[str] = (
    "{feature_id} is not baseline yet. Use Quick Fix for alternatives."
)

CSS_SAMPLE_KEYWORDS: Final[tuple[str, ...]] = ("css", "grid", "flex")

BASELINE_ICON: Final[str] = "✅"
NON_BASELINE_ICON: Final[str] = "⚠️"
