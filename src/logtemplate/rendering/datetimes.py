"""
datetimes – Invariant date, time and duration formatting.

Standard specifiers expand to fixed invariant patterns ("d" → "MM/dd/yyyy",
"T" → "HH:mm:ss", "o" → round-trip ISO text ...). Anything longer than one
character is a custom pattern made of the usual tokens (yyyy, MM, dd, HH, mm,
ss, fff, tt, zzz ...), quoted literals and backslash escapes.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Union

from logtemplate.errors import FormatSpecifierError

DateLike = Union[datetime, date, time]

MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)
DAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

_ISO = "yyyy'-'MM'-'dd'T'HH':'mm':'ss"

STANDARD_PATTERNS = {
    'd': 'MM/dd/yyyy',
    'D': 'dddd, dd MMMM yyyy',
    'f': 'dddd, dd MMMM yyyy HH:mm',
    'F': 'dddd, dd MMMM yyyy HH:mm:ss',
    'g': 'MM/dd/yyyy HH:mm',
    'G': 'MM/dd/yyyy HH:mm:ss',
    'M': 'MMMM dd',
    'm': 'MMMM dd',
    'O': _ISO + "'.'fffffffK",
    'o': _ISO + "'.'fffffffK",
    'R': "ddd, dd MMM yyyy HH':'mm':'ss 'GMT'",
    'r': "ddd, dd MMM yyyy HH':'mm':'ss 'GMT'",
    's': _ISO,
    't': 'HH:mm',
    'T': 'HH:mm:ss',
    'u': "yyyy'-'MM'-'dd HH':'mm':'ss'Z'",
    'U': 'dddd, dd MMMM yyyy HH:mm:ss',
    'Y': 'yyyy MMMM',
    'y': 'yyyy MMMM',
}

# Specifiers rendering universal time.
_UTC_SPECIFIERS = frozenset('RruU')

_TOKEN_CHARS = frozenset('dfFghHKmMstyz')


def format_datetime(value: DateLike, spec: str = '') -> str:
    """Render a datetime, date or time with an invariant pattern."""
    if isinstance(value, datetime):
        moment = value
        default = 'G'
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
        default = 'd'
    else:
        moment = datetime.combine(date(1, 1, 1), value)
        default = 't'

    spec = spec or default
    if len(spec) == 1:
        pattern = STANDARD_PATTERNS.get(spec)
        if pattern is None:
            raise FormatSpecifierError(f'unknown date/time format specifier {spec!r}')
        if spec in _UTC_SPECIFIERS and moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        elif spec == 'U' and isinstance(value, datetime):
            # Naive values are local time.
            moment = moment.astimezone(timezone.utc)
        return _render_pattern(moment, pattern)
    return _render_pattern(moment, spec)


def _repeat(pattern: str, i: int) -> int:
    ch = pattern[i]
    n = 1
    while i + n < len(pattern) and pattern[i + n] == ch:
        n += 1
    return n


def _offset_parts(moment: datetime):
    offset = moment.utcoffset()
    if offset is None:
        offset = moment.astimezone().utcoffset() or timedelta(0)
    minutes = int(offset.total_seconds() // 60)
    sign = '-' if minutes < 0 else '+'
    hours, mins = divmod(abs(minutes), 60)
    return sign, hours, mins


def _fraction(moment: datetime, count: int, trim: bool) -> str:
    digits = f'{moment.microsecond:06d}0'[:count]
    if trim:
        digits = digits.rstrip('0')
    return digits


def _render_token(moment: datetime, ch: str, n: int, out: List[str]) -> None:
    if ch == 'd':
        if n == 1:
            out.append(str(moment.day))
        elif n == 2:
            out.append(f'{moment.day:02d}')
        elif n == 3:
            out.append(DAY_NAMES[moment.weekday()][:3])
        else:
            out.append(DAY_NAMES[moment.weekday()])
    elif ch == 'M':
        if n == 1:
            out.append(str(moment.month))
        elif n == 2:
            out.append(f'{moment.month:02d}')
        elif n == 3:
            out.append(MONTH_NAMES[moment.month - 1][:3])
        else:
            out.append(MONTH_NAMES[moment.month - 1])
    elif ch == 'y':
        if n == 1:
            out.append(str(moment.year % 100))
        elif n == 2:
            out.append(f'{moment.year % 100:02d}')
        else:
            out.append(str(moment.year).rjust(n, '0'))
    elif ch in 'hH':
        hour = moment.hour if ch == 'H' else (moment.hour % 12 or 12)
        out.append(f'{hour:02d}' if n >= 2 else str(hour))
    elif ch == 'm':
        out.append(f'{moment.minute:02d}' if n >= 2 else str(moment.minute))
    elif ch == 's':
        out.append(f'{moment.second:02d}' if n >= 2 else str(moment.second))
    elif ch in 'fF':
        if n > 7:
            raise FormatSpecifierError(f'too many fraction digits requested: {ch * n!r}')
        digits = _fraction(moment, n, trim=ch == 'F')
        if not digits and out and out[-1].endswith('.'):
            out[-1] = out[-1][:-1]
        out.append(digits)
    elif ch == 't':
        designator = 'AM' if moment.hour < 12 else 'PM'
        out.append(designator[:1] if n == 1 else designator)
    elif ch == 'g':
        out.append('A.D.')
    elif ch == 'K':
        if moment.tzinfo is None:
            return
        if moment.utcoffset() == timedelta(0):
            out.append('Z')
            return
        sign, hours, mins = _offset_parts(moment)
        out.append(f'{sign}{hours:02d}:{mins:02d}')
    elif ch == 'z':
        sign, hours, mins = _offset_parts(moment)
        if n == 1:
            out.append(f'{sign}{hours}')
        elif n == 2:
            out.append(f'{sign}{hours:02d}')
        else:
            out.append(f'{sign}{hours:02d}:{mins:02d}')


def _render_pattern(moment: datetime, pattern: str) -> str:
    out: List[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch in ("'", '"'):
            close = pattern.find(ch, i + 1)
            if close == -1:
                raise FormatSpecifierError(f'unterminated quote in date/time pattern {pattern!r}')
            out.append(pattern[i + 1:close])
            i = close + 1
            continue
        if ch == '\\':
            if i + 1 >= len(pattern):
                raise FormatSpecifierError(f'dangling escape in date/time pattern {pattern!r}')
            out.append(pattern[i + 1])
            i += 2
            continue
        if ch == '%':
            i += 1
            continue
        if ch in _TOKEN_CHARS:
            n = _repeat(pattern, i)
            _render_token(moment, ch, n, out)
            i += n
            continue
        out.append(ch)
        i += 1
    return ''.join(out)


# --------------------------------------------------------------------------- #
#  Durations                                                                  #
# --------------------------------------------------------------------------- #
def format_timedelta(value: timedelta, spec: str = '') -> str:
    """Render a timedelta with the constant (c), short (g) or long (G) layout."""
    ticks = (value // timedelta(microseconds=1)) * 10
    sign = '-' if ticks < 0 else ''
    ticks = abs(ticks)
    days, rem = divmod(ticks, 864_000_000_000)
    hours, rem = divmod(rem, 36_000_000_000)
    minutes, rem = divmod(rem, 600_000_000)
    seconds, fraction = divmod(rem, 10_000_000)

    kind = spec or 'c'
    if kind in ('c', 't', 'T'):
        text = f'{days}.' if days else ''
        text += f'{hours:02d}:{minutes:02d}:{seconds:02d}'
        if fraction:
            text += f'.{fraction:07d}'
        return sign + text
    if kind == 'g':
        text = f'{days}:' if days else ''
        text += f'{hours}:{minutes:02d}:{seconds:02d}'
        if fraction:
            text += '.' + f'{fraction:07d}'.rstrip('0')
        return sign + text
    if kind == 'G':
        return f'{sign}{days}:{hours:02d}:{minutes:02d}:{seconds:02d}.{fraction:07d}'
    return sign + _render_duration(days, hours, minutes, seconds, fraction, spec)


def _render_duration(days: int, hours: int, minutes: int, seconds: int, fraction: int, pattern: str) -> str:
    out: List[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch in ("'", '"'):
            close = pattern.find(ch, i + 1)
            if close == -1:
                raise FormatSpecifierError(f'unterminated quote in duration pattern {pattern!r}')
            out.append(pattern[i + 1:close])
            i = close + 1
            continue
        if ch == '\\' and i + 1 < len(pattern):
            out.append(pattern[i + 1])
            i += 2
            continue
        if ch == '%':
            i += 1
            continue
        n = _repeat(pattern, i)
        value: Optional[int] = {'d': days, 'h': hours, 'm': minutes, 's': seconds}.get(ch)
        if value is not None:
            out.append(str(value).rjust(n, '0'))
        elif ch in 'fF':
            if n > 7:
                raise FormatSpecifierError(f'too many fraction digits requested: {ch * n!r}')
            digits = f'{fraction:07d}'[:n]
            out.append(digits.rstrip('0') if ch == 'F' else digits)
        else:
            raise FormatSpecifierError(f'invalid character {ch!r} in duration pattern {pattern!r}')
        i += n
    return ''.join(out)
