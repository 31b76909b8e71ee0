"""Textual picker for choosing a detected feature to get alternatives for."""

from __future__ import annotations

from collections.abc import Sequence
import sys
from typing import ClassVar

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from ..model import ClassificationResult
from ..util.text import ellipsize


class _SelectFeatureApp(App[None]):
    CSS = """
    Screen {
        layout: vertical;
        align: center middle;
    }

    #title {
        margin-bottom: 1;
        text-style: bold;
    }

    #options {
        height: 1fr;
        border: round #d7af00;
    }

    #hint {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("enter", "confirm", show=False),
        Binding("q", "cancel", show=False),
        Binding("escape", "cancel", show=False),
    ]

    def __init__(self, results: Sequence[ClassificationResult]) -> None:
        super().__init__()
        self._results = list(results)
        self.selection: str | None = None

    def compose(self) -> ComposeResult:
        yield Static("Show alternatives for", id="title")
        yield OptionList(
            *[
                Option(
                    Text.assemble(
                        (result.feature_id, "bold"), " ", (ellipsize(result.description, 60), "dim")
                    ),
                    id=result.feature_id,
                )
                for result in self._results
            ],
            id="options",
        )
        yield Static("Use ↑/↓ to move, Enter to select, q/Esc to skip.", id="hint")

    def on_mount(self) -> None:
        self.query_one(OptionList).focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.selection = self._results[event.option_index].feature_id
        self.exit()

    def action_confirm(self) -> None:
        options = self.query_one(OptionList)
        if options.highlighted is None:
            return
        self.selection = self._results[options.highlighted].feature_id
        self.exit()

    def action_cancel(self) -> None:
        self.selection = None
        self.exit()


def run_textual_select(results: Sequence[ClassificationResult]) -> str | None:
    app = _SelectFeatureApp(results)
    app.run()
    return app.selection


def select_feature(results: Sequence[ClassificationResult]) -> str | None:
    """Let the user pick one feature; returns None when skipped or not interactive."""
    options = list(results)
    if not options:
        return None
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        return None
    return run_textual_select(options)
