"""Data models for classification, patterns and diagnostics."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import re
from typing import Any, Literal

SupportLevel = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class FeatureRecord:
    id: str
    name: str
    description: str
    baseline_status: str | bool | None
    browser_support: Mapping[str, Any] | None
    spec: tuple[str, ...] = ()
    group: str | None = None


@dataclass(frozen=True)
class ClassificationResult:
    feature_id: str
    is_baseline: bool
    status_label: str
    support_level: SupportLevel
    description: str
    name: str = ""
    browser_support: Mapping[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the shape returned by the classification endpoint."""
        return {
            "feature": self.feature_id,
            "isBaseline": self.is_baseline,
            "status": self.status_label,
            "description": self.description,
            "supportLevel": self.support_level,
            "browserSupport": dict(self.browser_support) if self.browser_support else None,
        }


@dataclass(frozen=True)
class FeatureSummary:
    id: str
    name: str
    is_baseline: bool
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "isBaseline": self.is_baseline,
            "description": self.description,
        }


@dataclass(frozen=True)
class PatternEntry:
    pattern: str
    feature_id: str
    match_length: int


@dataclass(frozen=True)
class PhraseRule:
    phrase: str
    feature_id: str


@dataclass(frozen=True)
class TextScanRule:
    regex: re.Pattern[str]
    implies: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class Diagnostic:
    line: int
    column_start: int
    column_end: int
    feature_id: str
    message: str
    severity: Literal["warning"] = "warning"
    code: str = ""
    source: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "line": self.line,
            "columnStart": self.column_start,
            "columnEnd": self.column_end,
            "message": self.message,
            "severity": self.severity,
            "code": self.code,
            "source": self.source,
        }


@dataclass(frozen=True)
class AdviceSuggestion:
    explanation: str
    alternatives: tuple[str, ...]
    timeline: str
    is_fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "explanation": self.explanation,
            "alternatives": list(self.alternatives),
            "timeline": self.timeline,
        }


@dataclass(frozen=True)
class CacheSnapshot:
    feature_ids: frozenset[str] = field(default_factory=frozenset)
    ready: bool = False
    source: Literal["dataset", "fallback"] | None = None
    generation: int = 0
