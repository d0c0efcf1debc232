from __future__ import annotations

"""File sink writing one log file per naming period.

Every record becomes a block:

    <prefix> Level : [ INFO ], Time: [ 2026-10-19 12:00:00 ] <suffix>
    <prefix> Module : [ logtemplate.auth ] <suffix>
    <prefix> Category : [ auth ] <suffix>
    <prefix> File : [ "app/auth.py" ], Line: 42 <suffix>
    <prefix> Method : [ login ] <suffix>
    User 42 logged in from 10.0.0.1

The file name is ``naming_format`` rendered with ``strftime`` at emit time,
so the default ``%Y-%m-%d.log`` rolls over daily without any timer.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, TextIO

DEFAULT_NAMING_FORMAT = '%Y-%m-%d.log'


class DailyFileHandler(logging.Handler):
    """Append records to ``directory / now.strftime(naming_format)``."""

    def __init__(
        self,
        directory: str | Path,
        *,
        naming_format: str = DEFAULT_NAMING_FORMAT,
        prefix: str = '',
        suffix: str = '',
        output_console: bool = False,
        console: Optional[TextIO] = None,
        clock: Callable[[], datetime] = datetime.now,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        self.directory = Path(directory)
        self.naming_format = naming_format
        self.prefix = prefix
        self.suffix = suffix
        self.output_console = output_console
        self._console = console
        self._clock = clock

    def current_file(self) -> Path:
        """Return the file for the current period, creating directory and file."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / self._clock().strftime(self.naming_format)
        path.touch(exist_ok=True)
        return path

    def _line(self, content: str) -> str:
        return f'{self.prefix} {content} {self.suffix}'

    def render_entry(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        category = record.name.rsplit('.', 1)[-1]
        lines: List[str] = [
            self._line(f'Level : [ {record.levelname} ], Time: [ {when} ]'),
            self._line(f'Module : [ {record.name} ]'),
            self._line(f'Category : [ {category} ]'),
        ]
        if record.pathname:
            lines.append(self._line(f'File : [ "{record.pathname}" ], Line: {record.lineno}'))
            lines.append(self._line(f'Method : [ {record.funcName} ]'))
        lines.append(self.format(record))
        return '\n'.join(lines) + '\n\n\n'

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = self.render_entry(record)
            with self.current_file().open('a', encoding='utf-8') as fh:
                fh.write(entry)
            if self.output_console:
                print(entry, file=self._console or sys.stdout)
        except Exception:  # noqa: BLE001
            self.handleError(record)

