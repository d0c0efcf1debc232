"""
template – Compiled message templates for structured logging.

A :class:`Template` is built once from a raw message template and then used
two ways at emission time:

  • text view        → :meth:`Template.render` / :meth:`Template.render_text`
  • structured view  → :meth:`Template.get_values` / :meth:`Template.get_value`

Example::

    >>> tpl = compile_template("User {UserId} logged in from {Ip}")
    >>> tpl.compiled_format
    'User {0} logged in from {1}'
    >>> tpl.render(42, "10.0.0.1")
    'User 42 logged in from 10.0.0.1'
    >>> tpl.get_values([42, "10.0.0.1"])[-1]
    ('{OriginalFormat}', 'User {UserId} logged in from {Ip}')
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from logtemplate.constants import ORIGINAL_FORMAT_KEY
from logtemplate.errors import FormatArgumentMismatchError, IndexOutOfRangeError
from logtemplate.parsing.compiler import compile_format
from logtemplate.processing.arguments import normalize_argument
from logtemplate.rendering.composite import format_positional

StructuredPair = Tuple[str, Any]


@dataclass(frozen=True)
class Template:
    """Immutable result of compiling a message template."""
    original_format: str
    compiled_format: str
    placeholder_names: Tuple[str, ...]

    def render(self, *args: Any) -> str:
        """Render with one positional argument per placeholder.

        Passing more arguments than there are placeholders is rejected.
        """
        if len(args) > len(self.placeholder_names):
            raise FormatArgumentMismatchError(
                f'template {self.original_format!r} takes {len(self.placeholder_names)} '
                f'argument(s), got {len(args)}'
            )
        return self.render_text(args)

    def render_text(self, values: Optional[Sequence[Any]] = None) -> str:
        """Render with an argument sequence; surplus trailing values are ignored."""
        args = [normalize_argument(v) for v in (values or ())]
        return format_positional(self.compiled_format, args)

    def get_value(self, values: Sequence[Any], index: int) -> StructuredPair:
        """Return the structured pair at *index*; one past the last name is the sentinel."""
        count = len(self.placeholder_names)
        if index < 0 or index > count:
            raise IndexOutOfRangeError(f'index {index} outside [0, {count}]')
        if index == count:
            return ORIGINAL_FORMAT_KEY, self.original_format
        if index >= len(values):
            raise FormatArgumentMismatchError(
                f'no value supplied for placeholder {self.placeholder_names[index]!r} at index {index}'
            )
        return self.placeholder_names[index], values[index]

    def get_values(self, values: Sequence[Any]) -> List[StructuredPair]:
        """Pair each placeholder name with its raw value, sentinel last."""
        names = self.placeholder_names
        if len(values) < len(names):
            raise FormatArgumentMismatchError(
                f'template {self.original_format!r} has {len(names)} placeholder(s), '
                f'got {len(values)} value(s)'
            )
        pairs: List[StructuredPair] = list(zip(names, values))
        # Values beyond the named placeholders are keyed by position.
        pairs.extend((str(i), values[i]) for i in range(len(names), len(values)))
        pairs.append((ORIGINAL_FORMAT_KEY, self.original_format))
        return pairs


def compile_template(raw: str) -> Template:
    """Compile *raw* into a :class:`Template`. Never raises on malformed braces."""
    compiled, names = compile_format(raw)
    return Template(original_format=raw, compiled_format=compiled, placeholder_names=names)
