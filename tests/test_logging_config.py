"""
Tests for the centralized logging configuration.
"""

import logging
from unittest.mock import patch

from covid_map.config.constants import LOG_FORMAT
from covid_map.config.logging_config import EXTERNAL_LOGGERS, configure_logging, set_log_level


class TestLoggingConfig:
    """Test cases for logging setup helpers."""

    @patch("logging.basicConfig")
    def test_configure_logging(self, mock_basic_config):
        configure_logging(level="debug")

        kwargs = mock_basic_config.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        assert kwargs["format"] == LOG_FORMAT
        assert kwargs["force"] is True
        for name in EXTERNAL_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    @patch("logging.basicConfig")
    def test_unknown_level_falls_back_to_info(self, mock_basic_config):
        configure_logging(level="chatty", suppress_external=False)

        assert mock_basic_config.call_args.kwargs["level"] == logging.INFO

    def test_set_log_level(self):
        module_logger = logging.getLogger("covid_map.test_module")
        other_logger = logging.getLogger("covid_mapping_other")
        saved = {
            name: logging.getLogger(name).level
            for name in list(logging.root.manager.loggerDict)
            if name == "covid_map" or name.startswith("covid_map.")
        }
        saved["covid_map"] = logging.getLogger("covid_map").level

        try:
            set_log_level("ERROR")

            assert module_logger.level == logging.ERROR
            assert logging.getLogger("covid_map").level == logging.ERROR
            assert other_logger.level == logging.NOTSET
        finally:
            for name, level in saved.items():
                logging.getLogger(name).setLevel(level)
