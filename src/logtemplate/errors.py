from __future__ import annotations

"""Exception types raised by logtemplate.

Every error derives from :class:`LogTemplateError` and from the builtin
exception a plain Python caller would expect, so both ``except`` styles work.
"""


class LogTemplateError(Exception):
    """Base class for every logtemplate failure."""


class IndexOutOfRangeError(LogTemplateError, IndexError):
    """Structured value requested outside ``[0, len(placeholder_names)]``."""


class FormatArgumentMismatchError(LogTemplateError, ValueError):
    """A format item references an argument that was not supplied."""


class FormatSpecifierError(LogTemplateError, ValueError):
    """A format string is not valid for the value it is applied to."""
