"""Console script for webwise."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
import json
import logging
from pathlib import Path
from typing import TypeVar

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__ as _version
from .cache import NonBaselineCache
from .classify import classify_free_text, css_feature_ids, list_features
from .config import Settings, load_settings
from .dataset import FeatureDataset
from .exceptions import InvalidInputError, WebwiseError
from .http import use_shared_client
from .model import AdviceSuggestion, ClassificationResult
from .patterns import extract_features
from .render import render_analysis, render_check, render_diagnostics, render_feature_list
from .scanner import language_for_path, scan_document
from .service import BaselineService, advice_client, load_dataset
from .ui.select import select_feature
from .util.text import normalize_whitespace

T = TypeVar("T")

_Row = tuple[ClassificationResult, AdviceSuggestion | None]

_FILE_ARGUMENT = click.Path(exists=True, dir_okay=False, path_type=Path)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _run(settings: Settings, action: Callable[[], T]) -> T:
    """Run ``action`` with a shared HTTP client, turning expected errors into CLI errors."""
    try:
        with use_shared_client(settings.timeout):
            return action()
    except WebwiseError as exc:
        raise click.ClickException(str(exc)) from exc


def _service(settings: Settings, dataset: FeatureDataset, *, ai: bool) -> BaselineService:
    return BaselineService(dataset, advice_client(settings) if ai else None)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"Unable to read {path}: {exc}") from exc


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(_version, "-v", "--version")
@click.option(
    "--dataset",
    "dataset_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Local web-features data.json instead of downloading it.",
)
@click.option("--debug", is_flag=True, default=False, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, dataset_path: str | None, debug: bool) -> None:
    """
    Check whether web platform features are Baseline

    \b
    Example usages:
      webwise check display: flex
      webwise scan styles.css
      webwise analyze app.js --no-ai
      webwise alternatives container-queries
    """
    settings = load_settings()
    if dataset_path:
        settings = replace(settings, dataset_path=dataset_path)
    _configure_logging(debug or settings.debug)
    ctx.obj = settings


@main.command()
@click.argument("feature", metavar="<feature>", nargs=-1, required=True, type=click.STRING)
@click.option("--no-ai", is_flag=True, default=False, help="Skip AI advice.")
@click.pass_obj
def check(settings: Settings, feature: tuple[str, ...], no_ai: bool) -> None:
    """Classify a feature name or a code snippet."""
    console = Console()
    text = normalize_whitespace(" ".join(feature))

    def _check() -> tuple[ClassificationResult, AdviceSuggestion | None]:
        if not text:
            raise InvalidInputError("Feature name is required")
        service = _service(settings, load_dataset(settings), ai=not no_ai)
        result = classify_free_text(service.dataset, text)
        if result.feature_id != text:
            console.print(
                f"Detected: [bold]{escape(result.feature_id)}[/bold] (from \"{escape(text)}\")"
            )
        return result, service.suggest(result)

    result, suggestion = _run(settings, _check)
    console.print(render_check(result, suggestion))


@main.command()
@click.argument("path", metavar="<file>", type=_FILE_ARGUMENT)
@click.option("--language", default=None, help="Language kind, e.g. css or javascript.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print diagnostics as JSON.")
@click.option("--strict", is_flag=True, default=False, help="Exit 1 when warnings are found.")
@click.pass_obj
def scan(settings: Settings, path: Path, language: str | None, as_json: bool, strict: bool) -> None:
    """Report non-baseline syntax in a file, line by line."""
    console = Console()
    language_kind = language or language_for_path(path)
    if language_kind is None:
        raise click.ClickException(f"Cannot tell the language of {path}; pass --language")
    text = _read_text(path)

    cache = NonBaselineCache.from_loader(lambda: load_dataset(settings))
    _run(settings, cache.warm)
    if cache.source == "fallback":
        console.print("Baseline data unavailable, using the built-in list.", style="yellow")

    diagnostics = scan_document(text, language_kind, cache)
    if as_json:
        click.echo(json.dumps([diagnostic.to_dict() for diagnostic in diagnostics], indent=2))
    else:
        console.print(render_diagnostics(str(path), diagnostics))
    if strict and diagnostics:
        raise SystemExit(1)


@main.command()
@click.argument("path", metavar="<file>", type=_FILE_ARGUMENT)
@click.option("--no-ai", is_flag=True, default=False, help="Skip AI advice.")
@click.pass_obj
def analyze(settings: Settings, path: Path, no_ai: bool) -> None:
    """Summarize which web features a file uses and whether they are Baseline."""
    console = Console()
    feature_ids = extract_features(_read_text(path))
    if not feature_ids:
        console.print("No web features detected in this file")
        return

    console.print(f"Analyzing {len(feature_ids)} features...")

    def _analyze() -> tuple[BaselineService, list[_Row]]:
        service = _service(settings, load_dataset(settings), ai=not no_ai)
        rows: list[_Row] = []
        for feature_id in feature_ids:
            result = service.classify(feature_id)
            rows.append((result, service.suggest(result)))
        return service, rows

    service, rows = _run(settings, _analyze)
    console.print(render_analysis(str(path), rows))

    selected = select_feature([result for result, _ in rows if not result.is_baseline])
    if selected is not None:
        _, full_text = _run(settings, lambda: service.alternatives(selected))
        console.print(full_text, markup=False)


@main.command()
@click.option("--css", "css_only", is_flag=True, default=False, help="Only a sample of CSS ids.")
@click.pass_obj
def features(settings: Settings, css_only: bool) -> None:
    """List features in the web-features catalog."""
    console = Console()
    dataset = _run(settings, lambda: load_dataset(settings))
    if css_only:
        for feature_id in css_feature_ids(dataset):
            console.print(feature_id)
        return
    console.print(render_feature_list(list_features(dataset), width=console.size.width))


@main.command()
@click.argument("feature_id", metavar="<feature-id>", type=click.STRING)
@click.pass_obj
def alternatives(settings: Settings, feature_id: str) -> None:
    """Show migration alternatives for a feature."""
    console = Console()

    def _alternatives() -> tuple[str, str]:
        service = _service(settings, load_dataset(settings), ai=True)
        return service.alternatives(feature_id)

    top, full_text = _run(settings, _alternatives)
    console.print(f"💡 {top}", style="bold", markup=False)
    console.print(full_text, markup=False)


@main.command()
@click.pass_obj
def refresh(settings: Settings) -> None:
    """Rebuild the non-baseline feature list and report its size."""
    console = Console()
    cache = NonBaselineCache.from_loader(lambda: load_dataset(settings))
    _run(settings, cache.refresh)
    console.print(
        f"Baseline data refreshed: {len(cache)} non-baseline features ({cache.source})"
    )
