"""Syntax pattern tables mapping source text to web-features ids.

Three hand-curated tables live here:

* ``SYNTAX_PATTERNS``: literal fragments checked by substring containment on
  every line of a document. Used for positional diagnostics.
* ``PHRASE_RULES``: phrase-level heuristics for a single free-text query
  (a selection or a typed name).
* ``TEXT_SCAN_RULES``: coarser regexes for summarizing which features appear
  anywhere in a file.

All tables are ordered and iterated front to back; the first entry wins
where a caller only wants one answer. New entries need no code changes.
"""

from __future__ import annotations

from collections.abc import Iterable
import re

from .model import PatternEntry, PhraseRule, TextScanRule


def _entry(pattern: str, feature_id: str) -> PatternEntry:
    return PatternEntry(pattern=pattern, feature_id=feature_id, match_length=len(pattern))


SYNTAX_PATTERNS: tuple[PatternEntry, ...] = (
    # Selectors
    _entry(":has(", "has"),
    _entry(":is(", "is"),
    _entry(":where(", "where"),
    # Container queries
    _entry("container-type", "container-queries"),
    _entry("container-name", "container-queries"),
    _entry("@container", "container-queries"),
    # Scroll-driven animations
    _entry("view-timeline", "scroll-driven-animations"),
    _entry("scroll-timeline", "scroll-driven-animations"),
    _entry("animation-timeline", "scroll-driven-animations"),
    # Anchor positioning
    _entry("anchor(", "anchor-positioning"),
    _entry("anchor-name", "anchor-positioning"),
    _entry("@layer", "cascade-layers"),
    _entry("&", "nesting"),
    _entry("@starting-style", "starting-style"),
    _entry("subgrid", "subgrid"),
    # Color functions
    _entry("color-mix(", "color-mix"),
    _entry("color(", "color-function"),
    # Logical properties
    _entry("inset-block", "logical-properties"),
    _entry("inset-inline", "logical-properties"),
    # HTML / JS
    _entry("<dialog", "dialog"),
    _entry("popover", "popover"),
)

PHRASE_RULES: tuple[PhraseRule, ...] = tuple(
    PhraseRule(phrase=phrase, feature_id=feature_id)
    for phrase, feature_id in (
        ("display: flex", "flexbox"),
        ("display: grid", "grid"),
        ("display:flex", "flexbox"),
        ("display:grid", "grid"),
        ("container-type", "container-queries"),
        ("container-query", "container-queries"),
        (":has(", "has"),
        (":has ", "has"),
        ("view-timeline", "scroll-driven-animations"),
        ("aspect-ratio", "aspect-ratio"),
        ("serviceworker", "service-worker"),
        ("service worker", "service-worker"),
        ("<dialog", "dialog"),
        ("dialog", "dialog"),
        ("fetch(", "fetch"),
        ("@container", "container-queries"),
    )
)

TEXT_SCAN_RULES: tuple[TextScanRule, ...] = (
    TextScanRule(
        re.compile(r"display:\s*(?:flex|grid|inline-flex)"),
        (("flex", "flexbox"), ("grid", "grid")),
    ),
    TextScanRule(re.compile(r"container-type:"), (("container-type", "container-queries"),)),
    TextScanRule(re.compile(r":has\("), ((":has", "has"),)),
    TextScanRule(re.compile(r"view-timeline:"), (("view-timeline", "scroll-driven-animations"),)),
    TextScanRule(re.compile(r"@container"), (("@container", "container-queries"),)),
    TextScanRule(re.compile(r"aspect-ratio:"), (("aspect-ratio", "aspect-ratio"),)),
    TextScanRule(re.compile(r"serviceWorker"), (("serviceWorker", "service-worker"),)),
    TextScanRule(re.compile(r"fetch\("), (("fetch", "fetch"),)),
    TextScanRule(re.compile(r"querySelector.*:has"), ((":has", "has"),)),
    TextScanRule(re.compile(r"<dialog"), (("dialog", "dialog"),)),
)


def infer_feature_id(text: str, rules: Iterable[PhraseRule] = PHRASE_RULES) -> str:
    """Map free text to a feature id.

    The text is lowercased and trimmed, then checked against each rule's phrase
    in declaration order. The first contained phrase wins, even if a later
    phrase is longer or more specific. Without a hit the trimmed input is
    returned unchanged.
    """
    trimmed = text.strip()
    normalized = trimmed.lower()
    for rule in rules:
        if rule.phrase in normalized:
            return rule.feature_id
    return trimmed


def patterns_for_line(
    line: str, table: Iterable[PatternEntry] = SYNTAX_PATTERNS
) -> list[PatternEntry]:
    """Return every table entry whose literal occurs in ``line``, in table order."""
    return [entry for entry in table if entry.pattern in line]


def extract_features(text: str, rules: Iterable[TextScanRule] = TEXT_SCAN_RULES) -> list[str]:
    """List the feature ids mentioned anywhere in ``text``, first-seen order."""
    seen: dict[str, None] = {}
    for rule in rules:
        for match in rule.regex.finditer(text):
            matched = match.group(0)
            for keyword, feature_id in rule.implies:
                if keyword in matched:
                    seen.setdefault(feature_id, None)
    return list(seen)
