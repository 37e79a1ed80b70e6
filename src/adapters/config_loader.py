"""Input file loading.

The input is a small JSON document, e.g.:

    {"output": "questions.csv", "from": "2020-01-01", "to": "2020-12-31",
     "questions": ["11227809", "231767"]}
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from core.domain.models import ExportConfig
from core.errors import ConfigError


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def load_export_config(path: Path) -> ExportConfig:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config ({exc.strerror or exc})", path=path) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON at line {exc.lineno}: {exc.msg}", path=path) from exc

    if not isinstance(data, dict):
        raise ConfigError("top-level JSON value must be an object", path=path)

    try:
        return ExportConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(_describe(exc), path=path) from exc
