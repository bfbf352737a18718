"""
COVID-19 World Map Tracker - Centralized Logging Configuration

This module provides centralized logging configuration for the entire project.
Ensures consistent log formatting, levels, and output across all modules.
Library modules only create loggers with logging.getLogger(__name__); the
entry points (site builder, Streamlit app) call configure_logging.
"""

import logging
import sys

from .constants import LOG_FORMAT, LOG_LEVEL

PACKAGE_LOGGER = "covid_map"

# Verbose third-party loggers to quiet down
EXTERNAL_LOGGERS = [
    "urllib3.connectionpool",
    "requests.packages.urllib3",
    "folium",
    "branca",
    "streamlit",
]


def configure_logging(
    level: str = LOG_LEVEL, format_string: str = LOG_FORMAT, suppress_external: bool = True
) -> None:
    """
    Configure logging for the entire application.

    Args:
        level: Global logging level
        format_string: Log message format
        suppress_external: Whether to suppress verbose external library logs
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=format_string,
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    if suppress_external:
        for logger_name in EXTERNAL_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)


def set_log_level(level: str) -> None:
    """
    Change the logging level for all covid_map loggers.

    Args:
        level: New logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)
    for name in list(logging.root.manager.loggerDict):
        if isinstance(name, str) and name.startswith(f"{PACKAGE_LOGGER}."):
            logger = logging.getLogger(name)
            logger.setLevel(numeric_level)
            for handler in logger.handlers:
                handler.setLevel(numeric_level)
