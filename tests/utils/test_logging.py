# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the structured JSON logger.

We verify:
  - output is valid JSON
  - all mandatory fields are present (ts, level, module, msg)
  - log levels filter correctly
  - extra context fields get merged into the JSON
"""

import json
import logging
from pathlib import Path

import pytest

from nupack.logging.logger import get_logger


@pytest.fixture(autouse=True)
def _reset_loggers() -> None:
    """Clear handlers between tests so the handler-stacking guard doesn't leak state."""
    yield  # type: ignore[misc]
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("nupack.test"):
            logging.getLogger(name).handlers.clear()


class TestJsonOutput:
    def test_mandatory_fields_are_present(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("nupack.test.fields", log_level="INFO")
        logger.info("test message")
        captured = capsys.readouterr()

        parsed = json.loads(captured.out.strip())
        assert "ts" in parsed
        assert parsed["level"] == "INFO"
        assert parsed["module"] == "nupack.test.fields"
        assert parsed["msg"] == "test message"

    def test_extra_fields_are_included(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("nupack.test.extra", log_level="DEBUG")
        logger.info("wrote lib", extra={"rid": "linux-x64", "size": 4096})
        captured = capsys.readouterr()

        parsed = json.loads(captured.out.strip())
        assert parsed["rid"] == "linux-x64"
        assert parsed["size"] == 4096

    def test_exception_info_is_serialized(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("nupack.test.exc", log_level="INFO")
        try:
            raise RuntimeError("kaboom")
        except RuntimeError:
            logger.error("failed", exc_info=True)
        captured = capsys.readouterr()

        parsed = json.loads(captured.out.strip())
        assert "kaboom" in parsed["exc"]


class TestLogLevelFiltering:
    def test_debug_messages_hidden_at_info_level(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_logger("nupack.test.level_filter", log_level="INFO")
        logger.debug("this should not appear")
        assert capsys.readouterr().out.strip() == ""

    def test_second_call_updates_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        get_logger("nupack.test.relevel", log_level="INFO")
        logger = get_logger("nupack.test.relevel", log_level="DEBUG")
        logger.debug("now visible")
        assert "now visible" in capsys.readouterr().out


class TestFileOutput:
    def test_logs_are_written_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "nupack.log"
        logger = get_logger("nupack.test.file_output", log_level="INFO", log_file=log_file)
        logger.info("file log test")

        parsed = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert parsed["msg"] == "file log test"


class TestInvalidLogLevel:
    def test_invalid_level_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            get_logger("nupack.test.invalid", log_level="INVALID")
