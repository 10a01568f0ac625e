"""Runtime infrastructure for skatmoms.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Settings resolution via resolve_settings(), Settings
- Ledger CSV loading via load_rows()

Usage:
    from skatmoms.runtime import get_logger, resolve_settings, load_rows

    logger = get_logger(__name__)
    settings = resolve_settings()
    rows = load_rows(settings.source)
"""

from skatmoms.runtime.config import Settings, load_settings_file, resolve_period, resolve_settings
from skatmoms.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from skatmoms.runtime.paths import ProjectPaths, get_paths
from skatmoms.runtime.sheet_source import SourceUnavailable, load_rows, parse_csv_rows, read_csv_text

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Settings
    "Settings",
    "load_settings_file",
    "resolve_period",
    "resolve_settings",
    # Sources
    "SourceUnavailable",
    "load_rows",
    "parse_csv_rows",
    "read_csv_text",
    # Paths
    "get_paths",
    "ProjectPaths",
]
