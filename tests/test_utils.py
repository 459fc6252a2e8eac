"""Tests for jianwen.utils."""

import logging

import pytest

from jianwen import parse


class TestLogger:
    """Tests for logger module."""

    def test_get_logger(self) -> None:
        from jianwen.utils.logger import get_logger

        logger = get_logger("mymodule")
        assert logger.name == "jianwen.mymodule"

    def test_logger_with_jianwen_prefix(self) -> None:
        from jianwen.utils.logger import get_logger

        logger = get_logger("jianwen.parser")
        assert logger.name == "jianwen.parser"

    def test_logger_name_starting_with_jianwen_not_submodule(self) -> None:
        """Names starting with 'jianwen' but not submodules should get prefix."""
        from jianwen.utils.logger import get_logger

        logger = get_logger("jianwen_other")
        assert logger.name == "jianwen.jianwen_other"

    def test_logger_exact_jianwen_name(self) -> None:
        from jianwen.utils.logger import get_logger

        assert get_logger("jianwen").name == "jianwen"

    def test_root_logger_has_null_handler(self) -> None:
        from jianwen.utils.logger import ROOT_LOGGER_NAME

        handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
        assert any(isinstance(handler, logging.NullHandler) for handler in handlers)

    def test_include_expansion_logs_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="jianwen"):
            parse("[@](a)", expand_include=True, load_file=lambda path, stack: "A")
        messages = [record.getMessage() for record in caplog.records]
        assert any(message.startswith("Loaded include a") for message in messages)
