from __future__ import annotations

from rich.console import Console, RenderableType
import pytest

from webwise.model import AdviceSuggestion, ClassificationResult, Diagnostic, FeatureSummary
from webwise.render import (
    _support_line,
    render_analysis,
    render_check,
    render_diagnostics,
    render_feature_list,
)
from webwise.ui import select as ui_select
from webwise.ui.select import _SelectFeatureApp
from webwise.util import text as text_utils


class _FakeInOut:
    def __init__(self, is_tty: bool) -> None:
        self._is_tty = is_tty

    def isatty(self) -> bool:
        return self._is_tty


def _render(renderable: RenderableType) -> str:
    console = Console(record=True, width=120)
    console.print(renderable)
    return console.export_text()


def _result(feature_id: str, is_baseline: bool, **kwargs: object) -> ClassificationResult:
    return ClassificationResult(
        feature_id=feature_id,
        is_baseline=is_baseline,
        status_label="low" if is_baseline else "unknown",
        support_level="medium" if is_baseline else "low",
        description=f"{feature_id} description",
        **kwargs,  # type: ignore[arg-type]
    )


def test_text_utils() -> None:
    assert text_utils.normalize_whitespace(" a\n  b ") == "a b"
    assert text_utils.ellipsize("abc", 0) == ""
    assert text_utils.ellipsize("abc", 1) == "…"
    assert text_utils.ellipsize("abc", 10) == "abc"
    assert text_utils.ellipsize("abcdef", 4) == "abc…"


def test_render_check_with_advice() -> None:
    result = _result("has", True, browser_support={"chrome": "105", "safari": "15.4"})
    suggestion = AdviceSuggestion("Newly available.", ("Use a class", "Use JS"), "Now")

    rendered = _render(render_check(result, suggestion))

    assert "HAS: ✅ SAFE TO USE" in rendered
    assert "Support level: medium" in rendered
    assert "Supported since: chrome 105, safari 15.4" in rendered
    assert "AI Suggestions" in rendered
    assert "2. Use JS" in rendered
    assert "Timeline: Now" in rendered


def test_render_check_without_advice_or_support() -> None:
    result = _result("nesting", False)

    rendered = _render(render_check(result))

    assert "NESTING:" in rendered
    assert "NEEDS ATTENTION" in rendered
    assert "Status: unknown" in rendered
    assert "Alternatives" not in rendered
    assert _support_line(result) is None


def test_render_fallback_advice_title() -> None:
    suggestion = AdviceSuggestion("x", ("a",), "t", is_fallback=True)

    rendered = _render(render_check(_result("x", False), suggestion))

    assert "Suggestions" in rendered
    assert "AI Suggestions" not in rendered


def test_render_diagnostics_uses_one_based_positions() -> None:
    diagnostic = Diagnostic(
        line=0,
        column_start=1,
        column_end=6,
        feature_id="has",
        message="has is not baseline yet. Use Quick Fix for alternatives.",
    )

    rendered = _render(render_diagnostics("a.css", [diagnostic]))

    assert "a.css: 1 warning(s)" in rendered
    assert "2-6" in rendered
    assert "has is not baseline yet." in rendered
    assert "No non-baseline syntax found in a.css" in _render(render_diagnostics("a.css", []))


def test_render_analysis_counts() -> None:
    rows = [
        (_result("flexbox", True), None),
        (_result("has", False), AdviceSuggestion("Consider fallbacks.", ("x",), "t")),
    ]

    rendered = _render(render_analysis("a.css", rows))

    assert "Features analyzed: 2" in rendered
    assert "1 ✅ baseline" in rendered
    assert "need attention" in rendered
    assert "has: Not Baseline" in rendered
    assert "Consider fallbacks." in rendered


def test_render_feature_list() -> None:
    summaries = [
        FeatureSummary("has", ":has()", True, ""),
        FeatureSummary("anchor-positioning", "Anchor positioning " * 10, False, ""),
    ]

    rendered = _render(render_feature_list(summaries, width=80))

    assert "2 web features" in rendered
    assert "anchor-positioning" in rendered
    assert "…" in rendered


def test_select_feature_non_tty_and_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    results = [_result("has", False), _result("nesting", False)]

    assert ui_select.select_feature([]) is None

    monkeypatch.setattr(ui_select.sys, "stdin", _FakeInOut(is_tty=False))
    monkeypatch.setattr(ui_select.sys, "stdout", _FakeInOut(is_tty=False))
    assert ui_select.select_feature(results) is None


def test_select_feature_tty_runs_textual(monkeypatch: pytest.MonkeyPatch) -> None:
    results = [_result("has", False), _result("nesting", False)]
    seen: list[list[str]] = []

    def _fake_run(options: list[ClassificationResult]) -> str | None:
        seen.append([option.feature_id for option in options])
        return "nesting"

    monkeypatch.setattr(ui_select.sys, "stdin", _FakeInOut(is_tty=True))
    monkeypatch.setattr(ui_select.sys, "stdout", _FakeInOut(is_tty=True))
    monkeypatch.setattr(ui_select, "run_textual_select", _fake_run)

    assert ui_select.select_feature(results) == "nesting"
    assert seen == [["has", "nesting"]]


def test_textual_app_class_loads_and_binds() -> None:
    app = _SelectFeatureApp([_result("has", False)])

    assert app.selection is None
    assert {binding.key for binding in _SelectFeatureApp.BINDINGS} == {"enter", "q", "escape"}
