"""
compiler – Named message templates to positional composite format strings.

A template such as ``"User {UserId} logged in from {Ip}"`` is compiled once
into:

  • compiled format  → ``"User {0} logged in from {1}"``
  • placeholder names → ``("UserId", "Ip")``

Brace handling follows composite formatting:

  • {{literal}} → copied verbatim; the renderer collapses it to "{literal}"
  • {{{Name}}}  → literal "{" + placeholder Name + literal "}"
  • {Count,5:D2} → ",5:D2" is preserved after the positional index
  • unmatched braces never raise; they stay in the output as literal text
"""

from __future__ import annotations

from typing import List, Tuple

from logtemplate.constants import FORMAT_DELIMITERS
from logtemplate.logging.helpers import get_logger, trace_io

_log = get_logger('parsing.compiler')


def find_brace_index(fmt: str, brace: str, start: int, end: int) -> int:
    """Return the index of the next unescaped *brace* in ``fmt[start:end]``.

    Runs of identical braces are counted: an even run is an escape sequence
    and the search goes on, an odd run is a real brace. For ``{`` the last
    brace of the run wins, for ``}`` the first one does.

    Returns *end* when no candidate is found.
    """
    # Example: {{prefix{{{Argument}}}suffix}}.
    brace_index = end
    scan = start
    run = 0

    while scan < end:
        ch = fmt[scan]
        if run > 0 and ch != brace:
            if run % 2 == 0:
                run = 0
                brace_index = end
            else:
                break
        elif ch == brace:
            if brace == '}':
                if run == 0:
                    brace_index = scan
            else:
                brace_index = scan
            run += 1
        scan += 1

    return brace_index


def find_index_of_any(fmt: str, chars: Tuple[str, ...], start: int, end: int) -> int:
    """First index in ``fmt[start:end]`` holding one of *chars*, else *end*."""
    for idx in range(start, end):
        if fmt[idx] in chars:
            return idx
    return end


def compile_format(fmt: str) -> Tuple[str, Tuple[str, ...]]:
    """Split *fmt* into its compiled positional form and placeholder names."""
    out: List[str] = []
    names: List[str] = []
    scan = 0
    end = len(fmt)

    while scan < end:
        open_brace = find_brace_index(fmt, '{', scan, end)
        close_brace = find_brace_index(fmt, '}', open_brace, end)

        if close_brace == end:
            out.append(fmt[scan:end])
            scan = end
            continue

        # Format item syntax : { index[,alignment][ :formatString] }.
        delim = find_index_of_any(fmt, FORMAT_DELIMITERS, open_brace, close_brace)

        out.append(fmt[scan:open_brace + 1])
        out.append(str(len(names)))
        names.append(fmt[open_brace + 1:delim])
        out.append(fmt[delim:close_brace + 1])

        scan = close_brace + 1

    compiled = ''.join(out)
    trace_io(_log, 'compiled template', original=fmt, compiled=compiled, names=names)
    return compiled, tuple(names)
