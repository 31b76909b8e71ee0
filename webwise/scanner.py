"""Document scanning and per-document diagnostic tracking."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path

from .cache import NonBaselineCache
from .constants import (
    DIAGNOSTIC_CODE,
    DIAGNOSTIC_MESSAGE_TEMPLATE,
    DIAGNOSTIC_SOURCE,
    LANGUAGE_BY_SUFFIX,
    SCANNABLE_LANGUAGES,
)
from .model import Diagnostic, PatternEntry
from .patterns import SYNTAX_PATTERNS, patterns_for_line

LOGGER = logging.getLogger(__name__)


def language_for_path(path: str | Path) -> str | None:
    """Guess the language kind from a file suffix."""
    return LANGUAGE_BY_SUFFIX.get(Path(path).suffix.lower())


def _diagnostic(line_index: int, line: str, entry: PatternEntry) -> Diagnostic:
    start = line.index(entry.pattern)
    return Diagnostic(
        line=line_index,
        column_start=start,
        column_end=start + entry.match_length,
        feature_id=entry.feature_id,
        message=DIAGNOSTIC_MESSAGE_TEMPLATE.format(feature_id=entry.feature_id),
        code=DIAGNOSTIC_CODE,
        source=DIAGNOSTIC_SOURCE,
    )


def scan_document(
    text: str,
    language_kind: str,
    cache: NonBaselineCache,
    table: Iterable[PatternEntry] = SYNTAX_PATTERNS,
) -> list[Diagnostic]:
    """Return a warning for every non-baseline pattern occurrence in ``text``.

    Only the first occurrence of each pattern per line is reported, but
    different patterns on the same line each get their own diagnostic. A
    pattern match only counts when its feature is in the non-baseline cache.
    Nothing is reported until the cache is ready.
    """
    if language_kind not in SCANNABLE_LANGUAGES:
        return []

    snapshot = cache.snapshot()
    if not snapshot.ready:
        return []

    entries = tuple(table)
    diagnostics: list[Diagnostic] = []
    for line_index, line in enumerate(text.split("\n")):
        for entry in patterns_for_line(line, entries):
            if entry.feature_id in snapshot.feature_ids:
                diagnostics.append(_diagnostic(line_index, line, entry))
    return diagnostics


def quick_fix_features(line: str, cache: NonBaselineCache) -> list[str]:
    """Feature ids that deserve a "show alternatives" action on ``line``."""
    snapshot = cache.snapshot()
    return [
        entry.feature_id
        for entry in patterns_for_line(line)
        if entry.feature_id in snapshot.feature_ids
    ]


class DiagnosticsEngine:
    """Keeps the current diagnostic set of every open document.

    Every event triggers a full rescan of the document and replaces its
    previous diagnostics wholesale.
    """

    def __init__(self, cache: NonBaselineCache) -> None:
        self.cache = cache
        self._documents: dict[str, tuple[str, str]] = {}
        self._diagnostics: dict[str, tuple[Diagnostic, ...]] = {}

    def _update(self, uri: str, text: str, language_kind: str) -> tuple[Diagnostic, ...]:
        self._documents[uri] = (text, language_kind)
        diagnostics = tuple(scan_document(text, language_kind, self.cache))
        self._diagnostics[uri] = diagnostics
        return diagnostics

    def did_open(self, uri: str, text: str, language_kind: str) -> tuple[Diagnostic, ...]:
        return self._update(uri, text, language_kind)

    def did_change(self, uri: str, text: str, language_kind: str) -> tuple[Diagnostic, ...]:
        return self._update(uri, text, language_kind)

    def did_focus(self, uri: str) -> tuple[Diagnostic, ...]:
        document = self._documents.get(uri)
        if document is None:
            return ()
        text, language_kind = document
        return self._update(uri, text, language_kind)

    def did_close(self, uri: str) -> None:
        self._documents.pop(uri, None)
        self._diagnostics.pop(uri, None)

    def diagnostics(self, uri: str) -> tuple[Diagnostic, ...]:
        return self._diagnostics.get(uri, ())

    def rescan_all(self) -> dict[str, tuple[Diagnostic, ...]]:
        """Rescan every open document, e.g. after the cache was refreshed."""
        for uri, (text, language_kind) in list(self._documents.items()):
            self._update(uri, text, language_kind)
        LOGGER.debug("Rescanned %d documents", len(self._documents))
        return dict(self._diagnostics)

    def refresh(self) -> dict[str, tuple[Diagnostic, ...]]:
        self.cache.refresh()
        return self.rescan_all()
