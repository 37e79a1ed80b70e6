"""JSON export of the full API response.

Why JSON:
- Keeps every field the API returned (owner, score, quota), not just the CSV columns.
- Interoperates with other tools and pipelines.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import QuestionsResponse
from core.errors import ExportError


def export_questions_json(*, response: QuestionsResponse, output_path: Path) -> Path:
    """Export `QuestionsResponse` as UTF-8 JSON with a stable layout."""

    payload = response.model_dump(mode="json")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise ExportError(f"cannot write {output_path}: {exc.strerror or exc}") from exc
    return output_path
