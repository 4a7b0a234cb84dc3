"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from pawnbridge.config import AppSettings, ConfigError, load_settings
from pawnbridge.core.enums import Side


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "pawnbridge.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadSettings:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        settings = load_settings(environ={})
        assert settings == AppSettings()
        assert settings.search_depth == 10
        assert settings.engine_request_delay_ms == 250
        assert settings.ready_retry_ms == 100
        assert settings.human_side == Side.WHITE

    def test_reads_tables(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
            [engine]
            path = "/opt/stockfish"
            args = ["--threads", "2"]
            depth = 14
            reply_timeout_ms = 0

            [game]
            human_side = "black"

            [ui]
            use_figurine_notation = true
            random_theme = false
            unknown_key = 1
            """,
        )
        settings = load_settings(path, environ={})
        assert settings.engine_path == "/opt/stockfish"
        assert settings.engine_args == ["--threads", "2"]
        assert settings.search_depth == 14
        assert settings.engine_reply_timeout_ms == 0
        assert settings.human_side == Side.BLACK
        assert settings.use_figurine_notation is True
        assert settings.random_theme is False

    def test_config_env_points_at_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[engine]\ndepth = 3\n")
        settings = load_settings(environ={"PAWNBRIDGE_CONFIG": str(path)})
        assert settings.search_depth == 3

    def test_environment_overrides_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '[engine]\npath = "a"\ndepth = 3\n')
        settings = load_settings(
            path,
            environ={
                "PAWNBRIDGE_ENGINE": "b",
                "PAWNBRIDGE_DEPTH": "7",
                "PAWNBRIDGE_LOG_LEVEL": "DEBUG",
            },
        )
        assert settings.engine_path == "b"
        assert settings.search_depth == 7
        assert settings.log_level == "DEBUG"

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.toml", environ={})

    def test_broken_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[engine\n")
        with pytest.raises(ConfigError, match="Cannot read"):
            load_settings(path, environ={})

    @pytest.mark.parametrize(
        "text",
        [
            '[engine]\ndepth = "deep"\n',
            "[engine]\ndepth = -1\n",
            "[engine]\ndepth = true\n",
            "[engine]\nargs = [1, 2]\n",
            '[game]\nhuman_side = "green"\n',
            '[ui]\nrandom_theme = "maybe"\n',
            "engine = 5\n",
        ],
    )
    def test_bad_values(self, tmp_path: Path, text: str) -> None:
        path = _write(tmp_path, text)
        with pytest.raises(ConfigError):
            load_settings(path, environ={})

    def test_bad_environment_value(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigError):
            load_settings(environ={"PAWNBRIDGE_DEPTH": "ten"})

    def test_config_error_is_a_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)
