"""Tests for the end-to-end export flow."""

import asyncio
import csv
import json
from pathlib import Path
from typing import Sequence

import pytest

from adapters.stackexchange import StackExchangeClient
from core.domain.models import ExportConfig, QuestionsResponse
from core.errors import ConfigError, StackExchangeApiError
from core.services.export_pipeline import ExportRequest, OutputFormat, PipelineHooks, run_export
from tests.payloads import ERROR_PAYLOAD, make_transport, sample_payload


class FakeSource:
    """In-memory question source that records its calls."""

    def __init__(self, payload: dict) -> None:
        self._response = QuestionsResponse.model_validate(payload)
        self.calls: list[dict] = []

    async def fetch_questions(
        self,
        ids: Sequence[str],
        *,
        site: str,
        from_ts: int | None = None,
        to_ts: int | None = None,
    ) -> QuestionsResponse:
        self.calls.append({"ids": list(ids), "site": site, "from_ts": from_ts, "to_ts": to_ts})
        return self._response


def test_exports_csv_from_input_file(tmp_path: Path, write_config, settings) -> None:
    out = tmp_path / "out.csv"
    path = write_config(
        {"output": str(out), "from": "2020-01-01", "to": "2021-01-01", "questions": ["11227809", "927358"]}
    )
    source = FakeSource(sample_payload())

    result = asyncio.run(run_export(ExportRequest(input_path=path), source=source, settings=settings))

    assert source.calls == [
        {
            "ids": ["11227809", "927358"],
            "site": "stackoverflow",
            "from_ts": 1577836800,
            "to_ts": 1609459200,
        }
    ]
    assert result.output_path == out
    assert result.rows_written == 2
    assert result.warnings == []
    with out.open(encoding="utf-8", newline="") as fh:
        assert len(list(csv.reader(fh))) == 3


def test_overrides_take_precedence(tmp_path: Path, settings) -> None:
    config = ExportConfig.model_validate(
        {"output": str(tmp_path / "ignored.csv"), "questions": ["1"], "site": "superuser"}
    )
    override = tmp_path / "override.csv"
    source = FakeSource({"items": []})

    result = asyncio.run(
        run_export(
            ExportRequest(config=config, output_override=override, site_override="askubuntu"),
            source=source,
            settings=settings,
        )
    )

    assert source.calls[0]["site"] == "askubuntu"
    assert source.calls[0]["from_ts"] is None
    assert result.output_path == override
    assert override.exists()
    assert not (tmp_path / "ignored.csv").exists()


def test_config_site_beats_default(tmp_path: Path, settings) -> None:
    config = ExportConfig.model_validate(
        {"output": str(tmp_path / "o.csv"), "questions": ["1"], "site": "superuser"}
    )
    source = FakeSource({"items": []})

    result = asyncio.run(run_export(ExportRequest(config=config), source=source, settings=settings))

    assert result.site == "superuser"


def test_json_format_dumps_full_response(tmp_path: Path, settings) -> None:
    out = tmp_path / "out.json"
    config = ExportConfig.model_validate({"output": str(out), "questions": ["11227809", "927358"]})

    asyncio.run(
        run_export(
            ExportRequest(config=config, output_format=OutputFormat.JSON),
            source=FakeSource(sample_payload()),
            settings=settings,
        )
    )

    data = json.loads(out.read_text(encoding="utf-8"))
    assert [item["question_id"] for item in data["items"]] == [11227809, 927358]
    assert data["items"][0]["owner"]["display_name"] == "alice"
    assert data["quota_remaining"] == 299


def test_warns_on_truncation_and_missing_ids(tmp_path: Path, settings) -> None:
    config = ExportConfig.model_validate(
        {"output": str(tmp_path / "o.csv"), "questions": ["11227809", "927358", "5", "40"]}
    )
    seen: list[str] = []

    result = asyncio.run(
        run_export(
            ExportRequest(config=config),
            source=FakeSource(sample_payload(has_more=True)),
            settings=settings,
            hooks=PipelineHooks(warning=seen.append),
        )
    )

    assert len(result.warnings) == 2
    assert seen == result.warnings
    assert "truncated" in result.warnings[0]
    assert result.warnings[1].endswith(": 5, 40")


def test_hooks_observe_progress(tmp_path: Path, settings) -> None:
    config = ExportConfig.model_validate({"output": str(tmp_path / "o.csv"), "questions": ["1"]})
    loaded: list[ExportConfig] = []
    fetched: list[QuestionsResponse] = []

    asyncio.run(
        run_export(
            ExportRequest(config=config),
            source=FakeSource({"items": []}),
            settings=settings,
            hooks=PipelineHooks(config_loaded=loaded.append, fetched=fetched.append),
        )
    )

    assert loaded == [config]
    assert len(fetched) == 1


def test_config_error_aborts_before_any_request(tmp_path: Path, settings) -> None:
    source = FakeSource({"items": []})

    with pytest.raises(ConfigError):
        asyncio.run(
            run_export(ExportRequest(input_path=tmp_path / "missing.json"), source=source, settings=settings)
        )

    assert source.calls == []


def test_api_error_leaves_no_output(tmp_path: Path, settings) -> None:
    out = tmp_path / "o.csv"
    config = ExportConfig.model_validate({"output": str(out), "questions": ["1"]})
    client = StackExchangeClient(settings, transport=make_transport(ERROR_PAYLOAD, status_code=400))

    with pytest.raises(StackExchangeApiError):
        asyncio.run(run_export(ExportRequest(config=config), source=client, settings=settings))

    assert not out.exists()
