"""Tests for the webhook2stdout command (webhook2stdout.cli)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import uvicorn
from click.testing import CliRunner
from fastapi import FastAPI

from webhook2stdout import __version__
from webhook2stdout.cli import main


@pytest.fixture
def served(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Capture uvicorn.run calls instead of binding a port."""
    calls: list[dict[str, Any]] = []

    def fake_run(app: FastAPI, **kwargs: Any) -> None:
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(uvicorn, "run", fake_run)
    return calls


class TestMain:
    def test_missing_config_serves_defaults(
        self, tmp_path: Path, served: list[dict[str, Any]]
    ) -> None:
        result = CliRunner().invoke(main, ["--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 0, result.output
        (call,) = served
        assert isinstance(call["app"], FastAPI)
        assert call["host"] == "0.0.0.0"
        assert call["port"] == 8080
        assert call["log_config"] is None
        assert call["server_header"] is False

    def test_config_file(self, tmp_path: Path, served: list[dict[str, Any]]) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("host: 127.0.0.1\nport: 9001\nlog_json: false\n")
        result = CliRunner().invoke(main, ["--config", str(path)])
        assert result.exit_code == 0, result.output
        assert served[0]["host"] == "127.0.0.1"
        assert served[0]["port"] == 9001

    def test_unloadable_config(self, tmp_path: Path, served: list[dict[str, Any]]) -> None:
        path = tmp_path / "config.ini"
        path.write_text("[server]\n")
        result = CliRunner().invoke(main, ["--config", str(path)])
        assert result.exit_code == 1
        assert "failed to load config: unsupported config extension" in result.output
        assert served == []

    def test_invalid_config(self, tmp_path: Path, served: list[dict[str, Any]]) -> None:
        path = tmp_path / "config.json"
        path.write_text('{"port": 0}')
        result = CliRunner().invoke(main, ["--config", str(path)])
        assert result.exit_code == 1
        assert "invalid config: port must be in range 1-65535" in result.output
        assert served == []

    def test_bad_mapping(self, tmp_path: Path, served: list[dict[str, Any]]) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("mappings:\n  - from: body\n    to: b\n    root: true\n")
        result = CliRunner().invoke(main, ["--config", str(path)])
        assert result.exit_code == 1
        assert "cannot set both to and root" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
