"""Runtime loader for VAT return settings.

Each setting is taken from the first place that defines it:
1. explicit arguments (CLI flags)
2. environment variables SHEETS_CSV_URL, FROM_DATE, TO_DATE
3. the settings TOML file (see ProjectPaths.settings_file)

Example settings file::

    [source]
    url = "https://docs.google.com/spreadsheets/d/e/.../pub?output=csv"

    [period]
    from = "2024-01-01"
    to = "2024-03-31"
"""

from __future__ import annotations

import datetime as dt
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from skatmoms.domain.errors import ConfigurationError
from skatmoms.domain.invoice import parse_date
from skatmoms.domain.validation import Period
from skatmoms.runtime.logging import get_logger
from skatmoms.runtime.paths import get_paths

logger = get_logger(__name__)

SOURCE_ENV = "SHEETS_CSV_URL"
FROM_DATE_ENV = "FROM_DATE"
TO_DATE_ENV = "TO_DATE"


@dataclass(frozen=True)
class Settings:
    source: str
    period: Period

    @property
    def from_date(self) -> dt.date:
        return self.period.from_date

    @property
    def to_date(self) -> dt.date:
        return self.period.to_date


def load_settings_file(config_path: Path | None = None) -> dict[str, Any]:
    """Load the settings TOML file. A missing file yields an empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    path = config_path if config_path is not None else get_paths().settings_file
    if not path.exists():
        logger.debug("Settings file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid settings file {path}: {exc}") from exc


def _pick(explicit: str | None, env_name: str, environ: Mapping[str, str], file_value: Any) -> str | None:
    if explicit:
        return explicit
    env_value = environ.get(env_name, "").strip()
    if env_value:
        return env_value
    if file_value is None:
        return None
    text = str(file_value).strip()
    return text or None


def _require(value: str | None, env_name: str, flag: str) -> str:
    if value is None:
        raise ConfigurationError(f"{env_name} is required (set it in the environment or pass {flag})")
    return value


def _to_date(value: str, env_name: str) -> dt.date:
    try:
        return parse_date(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid {env_name}: {exc}") from exc


def _section(file_config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"Settings file must define [{name}] as a table")
    return section


def resolve_period(
    from_date: str | None = None,
    to_date: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    file_config: Mapping[str, Any] | None = None,
) -> Period:
    """Resolve the inclusive VAT period.

    Raises:
        ConfigurationError: A date is missing or does not parse, or the
            period starts after it ends.
    """
    env = os.environ if environ is None else environ
    section = _section(load_settings_file() if file_config is None else file_config, "period")

    resolved_from = _require(_pick(from_date, FROM_DATE_ENV, env, section.get("from")), FROM_DATE_ENV, "--from")
    resolved_to = _require(_pick(to_date, TO_DATE_ENV, env, section.get("to")), TO_DATE_ENV, "--to")

    start = _to_date(resolved_from, FROM_DATE_ENV)
    end = _to_date(resolved_to, TO_DATE_ENV)
    try:
        return Period(start, end)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


def resolve_settings(
    source: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    config_path: Path | None = None,
) -> Settings:
    """Resolve the record source and period.

    Raises:
        ConfigurationError: A setting is missing or invalid.
    """
    env = os.environ if environ is None else environ
    file_config = load_settings_file(config_path)

    section = _section(file_config, "source")
    resolved_source = _require(_pick(source, SOURCE_ENV, env, section.get("url")), SOURCE_ENV, "--source")
    period = resolve_period(from_date, to_date, environ=env, file_config=file_config)
    return Settings(source=resolved_source, period=period)
