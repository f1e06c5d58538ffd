# tests/test_log_utils.py
"""
Tests for log_utils.py and errors.py - Console output helpers
"""
import logging

from inkwell.errors import InkwellError, missing_readme_error
from inkwell.icons import SKIP, icons
from inkwell.log_utils import IconLogFormatter, setup_logging


def _record(level=logging.INFO, **extra):
    record = logging.LogRecord("inkwell.test", level, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestIconLogFormatter:
    def test_level_icon(self):
        assert IconLogFormatter("%(message)s").format(_record(logging.WARNING)) == f"{icons.WARNING} hello world"

    def test_explicit_icon(self):
        assert IconLogFormatter("%(message)s").format(_record(icon=SKIP)) == f"{SKIP} hello world"


class TestSetupLogging:
    def test_verbosity_levels(self):
        setup_logging(0)
        assert logging.getLogger("inkwell").level == logging.INFO

        setup_logging(1)
        logger = logging.getLogger("inkwell")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1


class TestErrors:
    def test_banner_includes_details(self, tmp_path):
        error = missing_readme_error(tmp_path / "react")
        text = str(error)

        assert "ManifestError" in text
        assert "'react' is missing README.md" in text
        assert "course_dir" in text
        assert "Suggestion" in text

    def test_cause(self):
        error = InkwellError("broken", cause=ValueError("bad value"))
        assert "Caused by: ValueError: bad value" in str(error)
