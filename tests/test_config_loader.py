"""Tests for reading the input file."""

from pathlib import Path

import pytest

from adapters.config_loader import load_export_config
from core.errors import ConfigError


def test_loads_valid_file(write_config) -> None:
    path = write_config({"output": "q.csv", "to": "2020-05-01", "questions": ["5", 6], "site": "superuser"})

    config = load_export_config(path)

    assert config.question_ids == ["5", "6"]
    assert config.site == "superuser"
    assert config.to_timestamp is not None


def test_unknown_keys_are_ignored(write_config) -> None:
    path = write_config({"output": "q.csv", "questions": ["5"], "comment": "hello"})

    assert load_export_config(path).question_ids == ["5"]


def test_missing_file_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "nope.json"

    with pytest.raises(ConfigError) as info:
        load_export_config(path)

    assert info.value.path == path
    assert "nope.json" in str(info.value)


def test_malformed_json_raises_config_error(write_config) -> None:
    path = write_config('{"output": "q.csv", ')

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_export_config(path)


def test_non_object_raises_config_error(write_config) -> None:
    path = write_config(["1", "2"])

    with pytest.raises(ConfigError, match="object"):
        load_export_config(path)


def test_validation_errors_name_the_field(write_config) -> None:
    path = write_config({"output": "q.csv", "questions": ["x"]})

    with pytest.raises(ConfigError, match="questions"):
        load_export_config(path)
