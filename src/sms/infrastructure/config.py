"""Configuration loading.

Settings come from an INI file (``sms.ini`` by default)::

    [database]
    path = sms.db
    timeout = 5.0

    [sales]
    retention_days = 365

    [logging]
    level = INFO
    file = logs/sms.log

Every option is optional; a missing file means "all defaults".  Relative
paths are resolved against the directory holding the INI file.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from sms.domain.exceptions import DomainException
from sms.domain.service.sale_validator import DEFAULT_RETENTION_DAYS

CONFIG_FILE_NAME = "sms.ini"
CONFIG_ENV_VAR = "SMS_CONFIG"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(DomainException):
    """The configuration file is unreadable or holds an invalid value."""


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    database_path: Path = Path("sms.db")
    database_timeout: float = 5.0
    retention_days: int = DEFAULT_RETENTION_DAYS
    log_level: str = "INFO"
    log_file: Path | None = None


def resolve_config_path(
    explicit_path: Path | None = None,
    *,
    environ: Mapping[str, str] = os.environ,
) -> Path:
    """Pick the config file: explicit path, then ``$SMS_CONFIG``, then ``./sms.ini``."""
    if explicit_path is not None:
        return explicit_path
    from_env = environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return Path.cwd() / CONFIG_FILE_NAME


def load_settings(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] = os.environ,
) -> Settings:
    path = resolve_config_path(config_path, environ=environ).expanduser()
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Configuration file not found: {path}")
        return Settings()

    parser = configparser.ConfigParser()
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as exc:
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc
    return parse_settings(parser, base_path=path.resolve().parent)


def parse_settings(
    parser: configparser.ConfigParser, *, base_path: Path | None = None
) -> Settings:
    """Convert a ``ConfigParser`` into validated :class:`Settings`."""
    defaults = Settings()
    base_path = base_path or Path.cwd()

    try:
        db_path = parser.get("database", "path", fallback=str(defaults.database_path))
        timeout = parser.getfloat("database", "timeout", fallback=defaults.database_timeout)
        retention = parser.getint("sales", "retention_days", fallback=defaults.retention_days)
        log_level = parser.get("logging", "level", fallback=defaults.log_level).upper()
        log_file = parser.get("logging", "file", fallback=None)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration value: {exc}") from exc

    if timeout <= 0:
        raise ConfigError("[database] timeout must be positive")
    if retention < 0:
        raise ConfigError("[sales] retention_days cannot be negative")
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"[logging] level must be one of {', '.join(_LOG_LEVELS)}")

    return Settings(
        database_path=_anchor(Path(db_path), base_path),
        database_timeout=timeout,
        retention_days=retention,
        log_level=log_level,
        log_file=_anchor(Path(log_file), base_path) if log_file else None,
    )


def _anchor(path: Path, base_path: Path) -> Path:
    path = path.expanduser()
    return path if path.is_absolute() else (base_path / path).resolve()
