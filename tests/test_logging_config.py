"""
Tests for fluxor_core.logging_config — human and JSON log output.
"""

import json
import logging

import pytest

from fluxor_core.config import LoggingConfig
from fluxor_core.logging_config import (
    _HumanFormatter,
    _JSONFormatter,
    setup_logging,
    setup_logging_from_config,
)


pytestmark = pytest.mark.usefixtures("clean_root_logger")


def _record(msg="hello", level=logging.INFO):
    return logging.LogRecord("fluxor.test", level, __file__, 1, msg, None, None)


class TestFormatters:

    def test_json_formatter(self):
        out = json.loads(_JSONFormatter().format(_record("decoded %s")))
        assert out["level"] == "INFO"
        assert out["logger"] == "fluxor.test"
        assert out["msg"] == "decoded %s"
        assert "ts" in out

    def test_human_formatter_plain(self):
        line = _HumanFormatter(colour=False).format(_record(level=logging.WARNING))
        assert "[WARNING]" in line
        assert line.endswith("fluxor.test: hello")
        assert "\033[" not in line

    def test_human_formatter_colour(self):
        line = _HumanFormatter(colour=True).format(_record(level=logging.ERROR))
        assert "\033[31m" in line


class TestSetupLogging:

    def test_sets_level_and_single_handler(self):
        setup_logging(level="debug")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_rejects_unknown_format(self):
        with pytest.raises(ValueError):
            setup_logging(fmt="xml")

    def test_file_is_json(self, tmp_path):
        log_file = tmp_path / "logs" / "fluxor.log"
        setup_logging(level="INFO", fmt="human", log_file=str(log_file))
        logging.getLogger("fluxor.test").info("written %d", 1)
        for h in logging.getLogger().handlers:
            h.flush()
        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["msg"] == "written 1"

    def test_from_config(self):
        setup_logging_from_config(LoggingConfig(level="WARNING", format="json"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, _JSONFormatter)
