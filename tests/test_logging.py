"""Tests for logging configuration helpers."""

import logging
from logging.handlers import RotatingFileHandler

import pytest
from rich.logging import RichHandler

from docpager.utils.logger import add_file_handler, configure_logging, get_logger, parse_level, set_log_level
from docpager.utils.rich_logger import ConsoleReporter, setup_logging


class TestLogger:

    def test_parse_level(self):
        assert parse_level("debug") == logging.DEBUG

    @pytest.mark.parametrize("level", ["VERBOSE", "", None])
    def test_invalid_level(self, level):
        with pytest.raises(ValueError):
            parse_level(level)

    def test_get_logger(self):
        assert get_logger("docpager.test").name == "docpager.test"
        with pytest.raises(ValueError):
            get_logger("")

    def test_configure_logging_with_file(self, temp_dir):
        log_file = temp_dir / "nested" / "run.log"

        configure_logging("DEBUG", log_file=str(log_file))
        logging.getLogger("docpager.test").debug("hello file")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(handler, RotatingFileHandler) for handler in root.handlers)
        assert "hello file" in log_file.read_text(encoding="utf-8")

    def test_set_log_level(self):
        configure_logging("INFO")
        set_log_level("ERROR")

        root = logging.getLogger()
        assert root.level == logging.ERROR
        assert all(handler.level == logging.ERROR for handler in root.handlers)

    def test_add_file_handler_rejects_bad_arguments(self, temp_dir):
        with pytest.raises(ValueError):
            add_file_handler("not a logger", str(temp_dir / "x.log"))
        with pytest.raises(ValueError):
            add_file_handler(logging.getLogger("x"), "")


class TestRichLogger:

    def test_rich_handler_installed(self):
        setup_logging("INFO")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)

    def test_plain_handler(self):
        setup_logging("WARNING", use_rich=False)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], RichHandler)

    def test_reporter_tables(self, capsys):
        reporter = ConsoleReporter()
        reporter.table("Summary", {"pages": 3})
        reporter.pages("Pages", [{"caption": "Page 1 of 1", "kind": "content", "blocks": 2, "decorations": []}])
        reporter.success("done")

        out = capsys.readouterr().out
        assert "Summary" in out
        assert "Page 1 of 1" in out
        assert "done" in out
