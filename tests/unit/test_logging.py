"""Tests for structured logging setup."""

from __future__ import annotations

import json

import pytest

from chartcore.utils.logging import bind_run_context, get_logger, setup_logging


def _json_lines(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


class TestSetupLogging:
    def test_returns_none(self) -> None:
        assert setup_logging(level="INFO", log_format="json") is None

    def test_rejects_unknown_format(self) -> None:
        with pytest.raises(ValueError, match="log_format"):
            setup_logging(log_format="xml")


class TestJsonFormat:
    def test_entry_is_valid_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", log_format="json")
        get_logger("test_json").info("candles_loaded", count=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        (entry,) = _json_lines(captured.err)
        assert entry["event"] == "candles_loaded"
        assert entry["count"] == 3
        assert entry["level"] == "info"
        assert entry["logger"] == "test_json"
        assert "timestamp" in entry

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", log_format="json")
        get_logger("test_level").debug("noisy")
        assert capsys.readouterr().err == ""

    def test_debug_level_shows_engine_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        from chartcore.engine.resampler import resample

        setup_logging(level="DEBUG", log_format="json")
        resample([], "5m")
        events = [e["event"] for e in _json_lines(capsys.readouterr().err)]
        assert "candles_resampled" in events


class TestRunContext:
    def test_context_is_attached(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", log_format="json")
        run_id = bind_run_context("resample")
        get_logger("test_ctx").info("step")

        (entry,) = _json_lines(capsys.readouterr().err)
        assert entry["command"] == "resample"
        assert entry["run_id"] == run_id

    def test_new_context_replaces_old(self) -> None:
        first = bind_run_context("a")
        second = bind_run_context("b")
        assert first != second
        assert len(second) == 12


class TestConsoleFormat:
    def test_console_output_contains_event(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", log_format="console")
        get_logger("test_console").info("hello_console")
        assert "hello_console" in capsys.readouterr().err
