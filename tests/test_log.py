"""Tests for eventwire.realtime.log — the logging capability."""

import logging
import re

import pytest

from eventwire.realtime.log import (
    NOTICE,
    MemoryLogger,
    NullLogger,
    StdlibLogger,
    StreamLogger,
)


class TestNullLogger:
    def test_accepts_everything(self) -> None:
        logger = NullLogger()
        logger.debug("x")
        logger.notice("y")
        assert isinstance(logger, StreamLogger)


class TestStdlibLogger:
    def test_default_logger_name(self) -> None:
        assert StdlibLogger().logger.name == "eventwire.stream"

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="test.stream")
        logger = StdlibLogger(logging.getLogger("test.stream"))
        logger.debug("rendered")
        logger.notice("stopped")
        assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
            (logging.DEBUG, "rendered"),
            (NOTICE, "stopped"),
        ]

    def test_notice_level_name(self) -> None:
        assert logging.getLevelName(NOTICE) == "NOTICE"
        assert logging.INFO < NOTICE < logging.WARNING


class TestMemoryLogger:
    def test_format(self) -> None:
        logger = MemoryLogger()
        logger.notice("Shutdown")
        (line,) = logger.flush_messages()
        assert re.fullmatch(r"\[notice\] \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}: Shutdown", line)

    def test_flush_empties_buffer(self) -> None:
        logger = MemoryLogger()
        logger.debug("a")
        assert logger.has_messages
        assert len(logger.flush_messages()) == 1
        assert not logger.has_messages
        assert logger.flush_messages() == []

    def test_keeps_most_recent_lines(self) -> None:
        logger = MemoryLogger(max_buffer_size=2)
        for n in range(5):
            logger.debug(str(n))
        assert [line.rsplit(": ", 1)[1] for line in logger.flush_messages()] == ["3", "4"]

    def test_action_level_threshold(self) -> None:
        logger = MemoryLogger(action_level="notice")
        logger.debug("hidden")
        logger.info("hidden")
        logger.notice("shown")
        logger.error("shown")
        assert len(logger.flush_messages()) == 2

    @pytest.mark.parametrize("size", [0, -1])
    def test_no_buffer(self, size: int) -> None:
        logger = MemoryLogger(max_buffer_size=size)
        logger.error("dropped")
        assert not logger.has_buffer
        assert not logger.has_messages

    def test_invalid_level(self) -> None:
        logger = MemoryLogger()
        with pytest.raises(ValueError, match="Valid log levels"):
            logger.log("loud", "x")
        with pytest.raises(ValueError):
            MemoryLogger(action_level="verbose")

    def test_action_level_can_change(self) -> None:
        logger = MemoryLogger()
        logger.action_level = "error"
        logger.warning("hidden")
        assert not logger.has_messages
