import io
import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
import structlog

from utils.logger import get_logger, init_logger


def _write_cfg(tmp_path: Path, logging_cfg: dict) -> Path:
    p = tmp_path / "config.json"
    p.write_text(json.dumps({"logging": logging_cfg}))
    return p


def _console_handler():
    handlers = [
        h for h in logging.getLogger().handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    assert len(handlers) <= 1
    return handlers[0] if handlers else None


def _file_handler():
    return next((h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)), None)


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    monkeypatch.delenv("LOG_CONSOLE_RENDERER", raising=False)
    monkeypatch.setattr("utils.logger._supports_colour", lambda: False)
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)


class TestConsoleRenderer:
    @pytest.mark.parametrize(
        "renderer, expected",
        [("json", structlog.processors.JSONRenderer), ("pretty", structlog.dev.ConsoleRenderer)],
    )
    def test_config_selects_renderer(self, tmp_path, renderer, expected):
        init_logger(_write_cfg(tmp_path, {"console": {"renderer": renderer}}))

        formatter = _console_handler().formatter
        assert isinstance(formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(formatter.processors[-1], expected)

    def test_defaults_to_pretty_at_info(self, tmp_path):
        init_logger(_write_cfg(tmp_path, {}))

        assert logging.getLogger().level == logging.INFO
        assert isinstance(_console_handler().formatter.processors[-1], structlog.dev.ConsoleRenderer)

    def test_env_override_wins_over_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_CONSOLE_RENDERER", "JSON")

        init_logger(_write_cfg(tmp_path, {"console": {"renderer": "pretty"}}))

        assert isinstance(_console_handler().formatter.processors[-1], structlog.processors.JSONRenderer)

    def test_invalid_renderer_in_config(self, tmp_path):
        with pytest.raises(ValueError, match=r"Invalid console logging renderer option: 'xml'\. Allowed: json, pretty"):
            init_logger(_write_cfg(tmp_path, {"console": {"renderer": "xml"}}))

    def test_invalid_renderer_in_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_CONSOLE_RENDERER", "plain")

        with pytest.raises(ValueError, match="'plain'"):
            init_logger(_write_cfg(tmp_path, {"console": {"renderer": "json"}}))

    def test_disabled_console_adds_no_stream_handler(self, tmp_path):
        init_logger(_write_cfg(tmp_path, {"console": {"enabled": False}}))

        assert _console_handler() is None

    def test_console_level(self, tmp_path):
        init_logger(_write_cfg(tmp_path, {"level": "DEBUG", "console": {"level": "warning"}}))

        assert logging.getLogger().level == logging.DEBUG
        assert _console_handler().level == logging.WARNING

    def test_json_console_emits_tool_events(self, tmp_path, monkeypatch):
        stdout = io.StringIO()
        monkeypatch.setattr("sys.stdout", stdout)

        init_logger(_write_cfg(tmp_path, {"console": {"renderer": "json"}}))
        get_logger("tools.adapters.console").info("tool_execute", tool="create-record", service="airtable", param_count=3)

        line = json.loads(stdout.getvalue().strip().splitlines()[-1])
        assert line["event"] == "tool_execute"
        assert line["tool"] == "create-record"
        assert line["service"] == "airtable"
        assert line["param_count"] == 3
        assert line["level"] == "info"
        assert line["logger"] == "tools.adapters.console"
        assert "timestamp" in line


class TestHandlers:
    def test_reinit_replaces_and_closes_previous_handlers(self, tmp_path):
        cfg = _write_cfg(tmp_path, {"file": {"enabled": True, "path": str(tmp_path / "agent.log")}})

        init_logger(cfg)
        first_file = _file_handler()
        init_logger(cfg)

        assert len(logging.getLogger().handlers) == 2
        assert _file_handler() is not first_file
        assert first_file.stream is None

    def test_file_handler_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        init_logger(_write_cfg(tmp_path, {"console": {"enabled": False}, "file": {"enabled": True}}))

        handler = _file_handler()
        assert isinstance(handler, RotatingFileHandler)
        assert Path(handler.baseFilename) == tmp_path / "logs" / "app.log"
        assert handler.level == logging.DEBUG
        assert handler.maxBytes == 10_000_000
        assert handler.backupCount == 5

    def test_plain_file_handler_when_rotation_disabled(self, tmp_path):
        path = tmp_path / "nested" / "plain.log"

        init_logger(_write_cfg(tmp_path, {
            "console": {"enabled": False},
            "file": {"enabled": True, "path": str(path), "rotation": {"enabled": False}},
        }))

        handler = _file_handler()
        assert type(handler) is logging.FileHandler
        assert Path(handler.baseFilename) == path
        assert path.parent.is_dir()

    def test_file_lines_are_json(self, tmp_path):
        path = tmp_path / "agent.log"
        init_logger(_write_cfg(tmp_path, {
            "console": {"enabled": False},
            "file": {"enabled": True, "path": str(path), "rotation": {"max_bytes": 2048, "backup_count": 1}},
        }))

        get_logger("tools.airtable.file").warning("predefined_parameters_not_overridable", tool="list-records", keys=["base_id"])
        _file_handler().flush()

        line = json.loads(path.read_text().strip().splitlines()[-1])
        assert line["event"] == "predefined_parameters_not_overridable"
        assert line["keys"] == ["base_id"]
        assert line["level"] == "warning"


class TestConfigFile:
    def test_library_levels(self, tmp_path):
        init_logger(_write_cfg(tmp_path, {
            "console": {"enabled": False},
            "libraries": {"httpx": "WARNING", "LiteLLM": "error", "httpcore": "bogus"},
        }))

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("LiteLLM").level == logging.ERROR
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Logging config file not found"):
            init_logger(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{ not: valid }")

        with pytest.raises(ValueError, match="Invalid JSON in logging config"):
            init_logger(bad)
