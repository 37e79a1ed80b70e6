"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Tables/panels can be reused across commands.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adapters.csv_exporter import CSV_HEADER, question_to_row
from core.domain.models import Question
from core.services.export_pipeline import ExportResult


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Lives here so that `main` and `doctor` can both use it without importing
    each other. Disabled with `--no-banner` for pipelines.
    """

    title = Text("stackexport", style="bold cyan")
    subtitle = Text("Stack Exchange questions → CSV", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_questions_table(questions: Iterable[Question], *, limit: int | None = None) -> Table:
    """Preview of the rows exactly as they are written to the CSV."""

    table = Table(title="Questions")
    styles = ["white", "magenta", "cyan", "green", "white", "white", "dim"]
    for name, style in zip(CSV_HEADER, styles):
        table.add_column(name, style=style, no_wrap=name != "Title")

    for index, question in enumerate(questions):
        if limit is not None and index >= limit:
            break
        table.add_row(*question_to_row(question))
    return table


def build_summary_panel(result: ExportResult) -> Panel:
    body = Text()
    body.append(f"Site: {result.site}\n")
    body.append(f"Rows written: {result.rows_written}\n")
    body.append(f"Output: {result.output_path}")
    quota = result.response.quota_remaining
    if quota is not None:
        body.append(f"\nAPI quota remaining: {quota}/{result.response.quota_max}", style="dim")
    if result.warnings:
        body.append(f"\nWarnings: {len(result.warnings)}", style="yellow")
    return Panel(body, title=Text("Export", style="bold green"), border_style="green")
