"""
composite – Positional ``{index[,alignment][:format]}`` substitution.

Literal text keeps the classic escaping rules ("{{" → "{", "}}" → "}").
A brace that does not open a well-formed format item, or a lone "}", is kept
as literal text instead of raising: a malformed message template must never
break the caller that is trying to log it.
"""

from __future__ import annotations

import re
from typing import Any, List, Sequence

from logtemplate.errors import FormatArgumentMismatchError
from logtemplate.rendering.invariant import format_value

_ITEM_RX = re.compile(
    r"\{(?P<index>\d+) *(?:, *(?P<align>-?\d+) *)?(?::(?P<spec>[^{}]*))?\}"
)


def format_positional(fmt: str, args: Sequence[Any]) -> str:
    """Substitute *args* into the positional format string *fmt*."""
    out: List[str] = []
    i = 0
    n = len(fmt)

    while i < n:
        ch = fmt[i]
        if ch == '{':
            if fmt.startswith('{{', i):
                out.append('{')
                i += 2
                continue
            m = _ITEM_RX.match(fmt, i)
            if m is None:
                out.append(ch)
                i += 1
                continue
            out.append(_render_item(m, args))
            i = m.end()
            continue
        if ch == '}':
            out.append('}')
            i += 2 if fmt.startswith('}}', i) else 1
            continue
        # Copy the literal run up to the next brace in one go.
        j = i + 1
        while j < n and fmt[j] not in '{}':
            j += 1
        out.append(fmt[i:j])
        i = j

    return ''.join(out)


def _render_item(m: re.Match, args: Sequence[Any]) -> str:
    index = int(m.group('index'))
    if index >= len(args):
        raise FormatArgumentMismatchError(
            f'format item {{{index}}} needs at least {index + 1} argument(s), got {len(args)}'
        )
    text = format_value(args[index], m.group('spec') or '')
    align = m.group('align')
    if align:
        width = int(align)
        text = text.ljust(-width) if width < 0 else text.rjust(width)
    return text
