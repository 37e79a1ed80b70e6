"""CSV export of fetched questions.

Why the stdlib `csv` module:
- Quoting of titles with commas/quotes is handled for us.
- The column set is fixed and small; no dataframe is needed.
"""

from __future__ import annotations

import csv
import html
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from core.domain.models import Question
from core.errors import ExportError

CSV_HEADER = [
    "Title",
    "Link",
    "Tags",
    "Answered",
    "Answer Count",
    "View Count",
    "Creation Date",
]


def format_rfc3339(value: datetime) -> str:
    """RFC 3339 timestamp in UTC, e.g. `2020-01-02T03:04:05Z`."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def question_to_row(question: Question) -> list[str]:
    return [
        html.unescape(question.title),
        question.link,
        "/".join(question.tags),
        "true" if question.is_answered else "false",
        str(question.answer_count),
        str(question.view_count),
        format_rfc3339(question.creation_date),
    ]


def export_questions_csv(*, questions: Iterable[Question], output_path: Path) -> Path:
    """Write the header plus one row per question, in the given order."""

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(CSV_HEADER)
            for question in questions:
                writer.writerow(question_to_row(question))
    except OSError as exc:
        raise ExportError(f"cannot write {output_path}: {exc.strerror or exc}") from exc
    return output_path
