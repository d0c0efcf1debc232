from __future__ import annotations

from logtemplate.constants import NULL_VALUE, ORIGINAL_FORMAT_KEY
from logtemplate.errors import (
    FormatArgumentMismatchError,
    FormatSpecifierError,
    IndexOutOfRangeError,
    LogTemplateError,
)
from logtemplate.logging.adapter import TemplateLogger
from logtemplate.logging.helpers import get_logger
from logtemplate.processing.arguments import normalize_argument
from logtemplate.rendering.invariant import format_value
from logtemplate.template import Template, compile_template

__version__ = '0.1.0'


def template_logger(name: str | None = None, **extra) -> TemplateLogger:
    """Factory helper returning a TemplateLogger over ``get_logger(name)``."""
    return TemplateLogger(get_logger(name), extra or None)


__all__ = [
    'NULL_VALUE',
    'ORIGINAL_FORMAT_KEY',
    'FormatArgumentMismatchError',
    'FormatSpecifierError',
    'IndexOutOfRangeError',
    'LogTemplateError',
    'Template',
    'TemplateLogger',
    'compile_template',
    'format_value',
    'normalize_argument',
    'template_logger',
]
