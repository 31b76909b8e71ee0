"""Rich renderers for CLI output."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .constants import BASELINE_ICON, NON_BASELINE_ICON
from .model import AdviceSuggestion, ClassificationResult, Diagnostic, FeatureSummary
from .util.text import ellipsize


def _verdict(is_baseline: bool) -> str:
    return f"{BASELINE_ICON} SAFE TO USE" if is_baseline else f"{NON_BASELINE_ICON} NEEDS ATTENTION"


def _support_line(result: ClassificationResult) -> str | None:
    if not result.browser_support:
        return None
    parts = [f"{browser} {version}" for browser, version in result.browser_support.items()]
    return "Supported since: " + ", ".join(parts)


def _advice_lines(suggestion: AdviceSuggestion) -> list[Text]:
    title = "AI Suggestions" if not suggestion.is_fallback else "Suggestions"
    lines = [Text(""), Text(title, style="bold"), Text(f"Explanation: {suggestion.explanation}")]
    lines.append(Text("Alternatives:"))
    lines.extend(
        Text(f"  {index}. {alternative}")
        for index, alternative in enumerate(suggestion.alternatives, start=1)
    )
    lines.append(Text(f"Timeline: {suggestion.timeline}"))
    return lines


def render_check(
    result: ClassificationResult,
    suggestion: AdviceSuggestion | None = None,
) -> Group:
    """Render one classification result, plus advice when available."""
    style = "green" if result.is_baseline else "yellow"
    lines: list[Text] = [
        Text(f"{result.feature_id.upper()}: {_verdict(result.is_baseline)}", style=f"bold {style}"),
        Text(f"Baseline: {result.is_baseline}"),
        Text(f"Status: {result.status_label}"),
        Text(f"Support level: {result.support_level}"),
    ]
    if result.description:
        lines.append(Text(f"Description: {result.description}"))
    support_line = _support_line(result)
    if support_line:
        lines.append(Text(support_line, style="dim"))
    if suggestion is not None:
        lines.extend(_advice_lines(suggestion))

    return Group(Panel(Group(*lines), border_style=style, title=f"/{result.feature_id}"))


def render_diagnostics(label: str, diagnostics: Sequence[Diagnostic]) -> Table | Text:
    """Render diagnostics with 1-based positions."""
    if not diagnostics:
        return Text(f"{BASELINE_ICON} No non-baseline syntax found in {label}", style="green")

    table = Table(title=f"{label}: {len(diagnostics)} warning(s)", title_justify="left")
    table.add_column("Line", justify="right", no_wrap=True)
    table.add_column("Col", justify="right", no_wrap=True)
    table.add_column("Feature", style="yellow", no_wrap=True)
    table.add_column("Message")
    for diagnostic in diagnostics:
        table.add_row(
            str(diagnostic.line + 1),
            f"{diagnostic.column_start + 1}-{diagnostic.column_end}",
            diagnostic.feature_id,
            diagnostic.message,
        )
    return table


def render_analysis(
    label: str,
    results: Sequence[tuple[ClassificationResult, AdviceSuggestion | None]],
) -> Group:
    """Render the whole-file feature summary."""
    baseline_count = sum(1 for result, _ in results if result.is_baseline)
    attention_count = len(results) - baseline_count

    lines: list[Text] = [
        Text(f"File: {label}"),
        Text(f"Features analyzed: {len(results)}"),
        Text(
            f"Analysis complete: {baseline_count} {BASELINE_ICON} baseline, "
            f"{attention_count} {NON_BASELINE_ICON} need attention",
            style="bold",
        ),
        Text(""),
    ]
    for result, suggestion in results:
        icon = BASELINE_ICON if result.is_baseline else NON_BASELINE_ICON
        verdict = "Baseline Safe" if result.is_baseline else "Not Baseline"
        lines.append(Text(f"{icon} {result.feature_id}: {verdict}"))
        if suggestion is not None:
            lines.append(Text(f"   {suggestion.explanation}", style="dim"))

    return Group(Panel(Group(*lines), border_style="blue", title="File analysis"))


def render_feature_list(summaries: Sequence[FeatureSummary], width: int = 100) -> Table:
    table = Table(title=f"{len(summaries)} web features", title_justify="left")
    table.add_column("", width=2)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name")
    for summary in summaries:
        icon = BASELINE_ICON if summary.is_baseline else NON_BASELINE_ICON
        table.add_row(icon, summary.id, ellipsize(summary.name, max(width - 40, 20)))
    return table
