from __future__ import annotations

from pathlib import Path

import pytest

from core.config import DEFAULT_LOG_DIR, load_settings
from core.domain.operation import Operation
from core.errors import ConfigurationError


def _set_required(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("BASE_URL", "https://api.example.test/api/")
    monkeypatch.setenv("API_CODE", "code123")
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "out"))


def test_loads_required_values(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _set_required(monkeypatch, tmp_path)

    settings = load_settings(env_file=None)

    assert settings.base_url == "https://api.example.test/api/"
    assert settings.api_code == "code123"
    assert settings.output_dir == tmp_path / "out"
    assert settings.test_mode is False
    assert settings.log_dir == DEFAULT_LOG_DIR
    assert settings.sanitize_apostrophes is False


def test_reports_every_missing_variable() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(env_file=None)

    assert excinfo.value.missing_variables == ["BASE_URL", "API_CODE", "OUTPUT_DIR"]
    assert "BASE_URL, API_CODE, OUTPUT_DIR" in str(excinfo.value)


def test_empty_value_counts_as_missing(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _set_required(monkeypatch, tmp_path)
    monkeypatch.setenv("API_CODE", "")

    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(env_file=None)

    assert excinfo.value.missing_variables == ["API_CODE"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("TRUE", True), (" true ", True), ("false", False), ("1", False), ("yes", False), ("", False)],
)
def test_test_mode_only_accepts_true(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, raw: str, expected: bool
) -> None:
    _set_required(monkeypatch, tmp_path)
    monkeypatch.setenv("TEST_MODE", raw)

    assert load_settings(env_file=None).test_mode is expected


def test_reads_dotenv_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "BASE_URL=https://dotenv.example.test/\nAPI_CODE=fromfile\nOUTPUT_DIR=out\nTEST_MODE=true\n",
        encoding="utf-8",
    )

    settings = load_settings(env_file=env_file)

    assert settings.base_url == "https://dotenv.example.test/"
    assert settings.test_mode is True


def test_endpoint_url_uses_test_mode(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _set_required(monkeypatch, tmp_path)
    monkeypatch.setenv("TEST_MODE", "true")
    settings = load_settings(env_file=None)

    assert settings.endpoint_url(Operation.CALCULATE_ONLY) == (
        "https://api.example.test/api/STCCalcV3_TEST?code=code123"
    )
    assert settings.endpoint_url(Operation.CANCEL_TRANSACTION) == (
        "https://api.example.test/api/CancelTransaction"
    )
