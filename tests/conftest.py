from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

ENV_VARS = ("BASE_URL", "API_CODE", "OUTPUT_DIR", "TEST_MODE", "LOG_DIR", "SANITIZE_APOSTROPHES")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., AppSettings]:
    def _make(**overrides: Any) -> AppSettings:
        values: dict[str, Any] = {
            "base_url": "https://api.example.test/api/",
            "api_code": "secret-code",
            "output_dir": tmp_path / "out",
            "log_dir": tmp_path / "logs",
        }
        values.update(overrides)
        return AppSettings(_env_file=None, **values)

    return _make


@pytest.fixture
def write_input(tmp_path: Path) -> Callable[..., Path]:
    def _write(payload: Any, name: str = "input.json", *, raw: str | None = None) -> Path:
        folder = tmp_path / "incoming"
        folder.mkdir(exist_ok=True)
        path = folder / name
        path.write_text(raw if raw is not None else json.dumps(payload), encoding="utf-8")
        return path

    return _write


class RecordingTransport(httpx.MockTransport):
    """MockTransport que guarda cada petición recibida."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def json_transport() -> Callable[..., RecordingTransport]:
    def _build(status_code: int = 200, body: Any = None, *, text: str | None = None) -> RecordingTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            if body is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=body)

        return RecordingTransport(handler)

    return _build


@pytest.fixture
def transport_for() -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordingTransport]:
    return RecordingTransport
