from __future__ import annotations

import pytest

from webwise.cache import NonBaselineCache
from webwise.dataset import FeatureDataset
from webwise.model import FeatureSummary
from webwise.scanner import DiagnosticsEngine, language_for_path, quick_fix_features, scan_document


def _cache_with(*feature_ids: str) -> NonBaselineCache:
    cache = NonBaselineCache(
        lambda: [
            FeatureSummary(id=feature_id, name=feature_id, is_baseline=False, description="")
            for feature_id in feature_ids
        ]
    )
    cache.warm()
    return cache


def test_has_selector_produces_one_diagnostic() -> None:
    diagnostics = scan_document("a:has(b) { color: red }", "css", _cache_with("has"))

    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.line == 0
    assert (diagnostic.column_start, diagnostic.column_end) == (1, 6)
    assert diagnostic.feature_id == "has"
    assert diagnostic.severity == "warning"
    assert diagnostic.message == "has is not baseline yet. Use Quick Fix for alternatives."
    assert diagnostic.to_dict() == {
        "line": 0,
        "columnStart": 1,
        "columnEnd": 6,
        "message": "has is not baseline yet. Use Quick Fix for alternatives.",
        "severity": "warning",
        "code": "webwise-non-baseline",
        "source": "WebWise",
    }


def test_baseline_feature_match_is_not_reported() -> None:
    assert scan_document("a:has(b) { color: red }", "css", _cache_with("nesting")) == []


def test_not_ready_cache_reports_nothing(dataset: FeatureDataset) -> None:
    cache = NonBaselineCache.for_dataset(dataset)

    assert scan_document(".a { container-type: size }", "css", cache) == []


@pytest.mark.parametrize("language_kind", ["python", "markdown", "plaintext"])
def test_unsupported_languages_are_skipped(
    language_kind: str, warm_cache: NonBaselineCache
) -> None:
    assert scan_document(".a { container-type: size }", language_kind, warm_cache) == []


def test_multiple_patterns_on_one_line_are_independent() -> None:
    cache = _cache_with("container-queries")
    line = ".a { container-type: size; container-name: card }"

    diagnostics = scan_document(line, "scss", cache)

    assert [(d.column_start, d.column_end) for d in diagnostics] == [(5, 19), (27, 41)]
    assert {d.feature_id for d in diagnostics} == {"container-queries"}


def test_only_first_occurrence_per_pattern_per_line() -> None:
    diagnostics = scan_document("a:has(b), c:has(d) {}", "css", _cache_with("has"))

    assert len(diagnostics) == 1
    assert diagnostics[0].column_start == 1


def test_lines_are_numbered_from_zero() -> None:
    text = ".a {}\n.b { anchor-name: --x }\n\n.c { top: anchor(--x top) }"

    diagnostics = scan_document(text, "css", _cache_with("anchor-positioning"))

    assert [(d.line, d.column_start, d.column_end) for d in diagnostics] == [
        (1, 5, 16),
        (3, 10, 17),
    ]


def test_script_and_markup_languages(warm_cache: NonBaselineCache) -> None:
    html = '<div class="a">\n  <style>.a { &:hover { color: red } }</style>\n</div>'

    diagnostics = scan_document(html, "html", warm_cache)

    assert [(d.line, d.feature_id) for d in diagnostics] == [(1, "nesting")]


def test_quick_fix_features() -> None:
    cache = _cache_with("has", "container-queries")

    assert quick_fix_features("@container x { a:has(b) {} }", cache) == ["has", "container-queries"]
    assert quick_fix_features(".a { color: red }", cache) == []


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("styles.css", "css"),
        ("App.TSX", "typescriptreact"),
        ("index.html", "html"),
        ("main.mjs", "javascript"),
        ("README.md", None),
    ],
)
def test_language_for_path(path: str, expected: str | None) -> None:
    assert language_for_path(path) == expected


def test_engine_replaces_diagnostics_on_every_event() -> None:
    engine = DiagnosticsEngine(_cache_with("has", "popover"))

    opened = engine.did_open("file:///a.css", "a:has(b) {}", "css")
    assert [d.feature_id for d in opened] == ["has"]

    changed = engine.did_change("file:///a.css", ".a {}\n.b {}", "css")
    assert changed == ()
    assert engine.diagnostics("file:///a.css") == ()

    engine.did_change("file:///a.css", "<div popover>", "css")
    assert [d.feature_id for d in engine.did_focus("file:///a.css")] == ["popover"]

    assert engine.did_focus("file:///unknown.css") == ()
    engine.did_close("file:///a.css")
    assert engine.diagnostics("file:///a.css") == ()


def test_engine_rescans_after_refresh() -> None:
    rounds = [
        [FeatureSummary(id="has", name="has", is_baseline=False, description="")],
        [FeatureSummary(id="has", name="has", is_baseline=True, description="")],
    ]
    cache = NonBaselineCache(lambda: rounds.pop(0))
    cache.warm()
    engine = DiagnosticsEngine(cache)
    engine.did_open("file:///a.css", "a:has(b) {}", "css")
    engine.did_open("file:///b.js", "el.matches(':has(img)')", "javascript")

    assert len(engine.diagnostics("file:///b.js")) == 1

    result = engine.refresh()

    assert result == {"file:///a.css": (), "file:///b.js": ()}
