"""Export orchestration.

The CLI delegates the whole flow to `run_export`: load the input file,
make the single API call, write the output. Side-effects on the terminal
(banner, tables) stay in the CLI; this module only reports through hooks
and the returned `ExportResult`, which keeps it reusable from tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from adapters.config_loader import load_export_config
from adapters.csv_exporter import export_questions_csv
from adapters.json_exporter import export_questions_json
from core.config import AppSettings
from core.domain.models import ExportConfig, QuestionsResponse
from core.interfaces.question_source import QuestionSource

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Supported output encodings."""

    CSV = "csv"
    JSON = "json"


@dataclass
class ExportRequest:
    """Parameters that control one export run."""

    input_path: Path | None = None
    config: ExportConfig | None = None
    output_override: Path | None = None
    site_override: str | None = None
    output_format: OutputFormat = OutputFormat.CSV


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    config_loaded: Callable[[ExportConfig], None] | None = None
    fetched: Callable[[QuestionsResponse], None] | None = None
    warning: Callable[[str], None] | None = None


@dataclass
class ExportResult:
    """Output of a pipeline invocation."""

    config: ExportConfig
    site: str
    response: QuestionsResponse
    output_path: Path
    rows_written: int
    warnings: list[str] = field(default_factory=list)


def resolve_config(request: ExportRequest) -> ExportConfig:
    if request.config is not None:
        return request.config
    if request.input_path is None:
        raise ValueError("ExportRequest needs either `config` or `input_path`")
    return load_export_config(request.input_path)


async def run_export(
    request: ExportRequest,
    *,
    source: QuestionSource,
    settings: AppSettings | None = None,
    hooks: PipelineHooks | None = None,
) -> ExportResult:
    """Load config -> fetch questions (one call) -> write the output file."""

    settings = settings or AppSettings()
    hooks = hooks or PipelineHooks()
    warnings: list[str] = []

    def _warn(message: str) -> None:
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)
        else:
            logger.warning(message)

    config = resolve_config(request)
    if hooks.config_loaded:
        hooks.config_loaded(config)

    site = request.site_override or config.site or settings.default_site
    output_path = request.output_override or config.output
    logger.info(
        "Exporting %d question id(s) from %s (from=%s, to=%s)",
        len(config.question_ids),
        site,
        config.from_date,
        config.to_date,
    )

    response = await source.fetch_questions(
        config.question_ids,
        site=site,
        from_ts=config.from_timestamp,
        to_ts=config.to_timestamp,
    )
    if hooks.fetched:
        hooks.fetched(response)

    if response.has_more:
        _warn("More results are available than one request returns; output is truncated.")
    missing = set(config.question_ids) - {str(q.question_id) for q in response.items}
    if missing:
        _warn(
            f"{len(missing)} requested id(s) not returned (deleted, filtered by date, or on another site): "
            + ", ".join(sorted(missing, key=int))
        )

    if request.output_format is OutputFormat.JSON:
        export_questions_json(response=response, output_path=output_path)
    else:
        export_questions_csv(questions=response.items, output_path=output_path)

    return ExportResult(
        config=config,
        site=site,
        response=response,
        output_path=output_path,
        rows_written=len(response.items),
        warnings=warnings,
    )
