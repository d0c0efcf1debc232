from __future__ import annotations

"""Environment-driven configuration for the logging integration.

Variables (all optional):
    LOGTEMPLATE_LOG_DIR      directory for DailyFileHandler (default: ./logs)
    LOGTEMPLATE_LOG_NAMING   strftime pattern for file names (default: %Y-%m-%d.log)
    LOGTEMPLATE_LOG_PREFIX   text written before every header line
    LOGTEMPLATE_LOG_SUFFIX   text written after every header line
    LOGTEMPLATE_CONSOLE      "1"/"true" echoes every entry to stdout
    LOGTEMPLATE_LOG_LEVEL    level name or number (default: INFO)
    LOGTEMPLATE_JSON_LOGS    "1"/"true" switches the stream handler to JSON
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from logtemplate.logging.handlers import DEFAULT_NAMING_FORMAT, DailyFileHandler
from logtemplate.logging.helpers import JsonLogFormatter, get_logger, setup_base_logger

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})


def _flag(raw: Optional[str]) -> bool:
    return (raw or '').strip().lower() in _TRUTHY


def _level(raw: Optional[str]) -> int:
    raw = (raw or '').strip()
    if not raw:
        return logging.INFO
    if raw.isdigit():
        return int(raw)
    value = logging.getLevelName(raw.upper())
    if not isinstance(value, int):
        raise ValueError(f'unknown log level {raw!r}')
    return value


@dataclass(frozen=True)
class SinkConfig:
    """Immutable settings for the base logger and the daily file sink."""
    directory: Path = Path('logs')
    naming_format: str = DEFAULT_NAMING_FORMAT
    prefix: str = ''
    suffix: str = ''
    output_console: bool = False
    level: int = logging.INFO
    json_logs: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'SinkConfig':
        """Build a SinkConfig from LOGTEMPLATE_* variables of *env* (default: os.environ)."""
        env = os.environ if env is None else env
        return cls(
            directory=Path(env.get('LOGTEMPLATE_LOG_DIR') or 'logs'),
            naming_format=env.get('LOGTEMPLATE_LOG_NAMING') or DEFAULT_NAMING_FORMAT,
            prefix=env.get('LOGTEMPLATE_LOG_PREFIX', ''),
            suffix=env.get('LOGTEMPLATE_LOG_SUFFIX', ''),
            output_console=_flag(env.get('LOGTEMPLATE_CONSOLE')),
            level=_level(env.get('LOGTEMPLATE_LOG_LEVEL')),
            json_logs=_flag(env.get('LOGTEMPLATE_JSON_LOGS')),
        )


def configure_file_logging(config: SinkConfig, name: Optional[str] = None) -> DailyFileHandler:
    """Attach a DailyFileHandler built from *config* to the base (or *name*) logger."""
    setup_base_logger(json_logs=config.json_logs, level=config.level)
    handler = DailyFileHandler(
        config.directory,
        naming_format=config.naming_format,
        prefix=config.prefix,
        suffix=config.suffix,
        output_console=config.output_console,
        level=config.level,
    )
    handler.setFormatter(JsonLogFormatter() if config.json_logs else logging.Formatter('%(message)s'))
    target = get_logger(name)
    target.addHandler(handler)
    get_logger('config').debug('file sink attached at %s', config.directory)
    return handler
