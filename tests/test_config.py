"""Tests for settings loading."""

from pathlib import Path

import pytest

from core.config import AppSettings, get_user_config_dir, get_user_env_file, load_settings
from core.errors import ConfigError


def test_defaults(settings) -> None:
    assert settings.api_base_url == "https://api.stackexchange.com/2.3"
    assert settings.default_site == "stackoverflow"
    assert settings.http_timeout_seconds > 0
    assert settings.log_level == "WARNING"


def test_env_prefix(monkeypatch) -> None:
    monkeypatch.setenv("STACKEXPORT_DEFAULT_SITE", "serverfault")
    monkeypatch.setenv("STACKEXPORT_HTTP_TIMEOUT_SECONDS", "3.5")

    settings = AppSettings(_env_file=None)

    assert settings.default_site == "serverfault"
    assert settings.http_timeout_seconds == 3.5


def test_log_level_is_case_insensitive(monkeypatch) -> None:
    monkeypatch.setenv("STACKEXPORT_LOG_LEVEL", " info ")

    assert AppSettings(_env_file=None).log_level == "INFO"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("STACKEXPORT_LOG_LEVEL", "loud"),
        ("STACKEXPORT_HTTP_TIMEOUT_SECONDS", "0"),
        ("STACKEXPORT_HTTP_TIMEOUT_SECONDS", "soon"),
    ],
)
def test_load_settings_reports_bad_env_as_config_error(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError, match=name):
        load_settings(_env_file=None)


def test_user_config_dir_honours_xdg(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert get_user_config_dir() == tmp_path / "stackexport"
    assert get_user_env_file() == tmp_path / "stackexport" / ".env"


def test_env_file_is_read(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("# local\nSTACKEXPORT_DEFAULT_SITE=math\n", encoding="utf-8")

    assert AppSettings(_env_file=env_path).default_site == "math"
