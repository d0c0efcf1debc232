"""
invariant – Culture-invariant rendering of single values.

:func:`format_value` turns one argument into text for a composite format item
``{index[,alignment][:formatString]}``. Output never depends on the process
locale: "." is the decimal separator, "," the group separator, "¤" the
currency symbol and month/day names are English.

Numbers accept the standard specifiers C, D, E, F, G, N, P, R, X and B with an
optional precision, or a custom pattern built from 0 # . , % ‰ ; and quoted
literals. Midpoints round away from zero on the exact decimal value of the
number, so ``format_value(2.5, "F0") == "3"``.
"""

from __future__ import annotations

import math
import numbers
import re
from datetime import date, datetime, time, timedelta
from decimal import Context, Decimal, ROUND_HALF_UP
from enum import Enum, Flag
from typing import Any, List, Optional, Tuple
from uuid import UUID

from logtemplate.errors import FormatSpecifierError
from logtemplate.rendering.datetimes import format_datetime, format_timedelta

_STANDARD_RX = re.compile(r"([A-Za-z])(\d{0,9})")
_EXPONENT_RX = re.compile(r"[Ee][+-]?0")

_CURRENCY_SYMBOL = '¤'
_GROUP_SEPARATOR = ','
_GROUP_SIZE = 3
_DEFAULT_PRECISION = 2

# Decimal exponent from which float round-trip text switches to E notation.
_ROUNDTRIP_SCI_THRESHOLD = 15


def format_value(value: Any, spec: str = '') -> str:
    """Render *value* with the optional format string *spec*."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'True' if value else 'False'
    if isinstance(value, Enum):
        return _format_enum(value, spec)
    if isinstance(value, (numbers.Real, Decimal)):
        return format_number(value, spec)
    if isinstance(value, (datetime, date, time)):
        return format_datetime(value, spec)
    if isinstance(value, timedelta):
        return format_timedelta(value, spec)
    if isinstance(value, UUID):
        return _format_uuid(value, spec)
    if spec and type(value).__format__ is not object.__format__:
        try:
            return format(value, spec)
        except (TypeError, ValueError) as exc:
            raise FormatSpecifierError(f'invalid format {spec!r} for {type(value).__name__}: {exc}') from exc
    return str(value)


# --------------------------------------------------------------------------- #
#  Numbers                                                                    #
# --------------------------------------------------------------------------- #
def format_number(value: Any, spec: str = '') -> str:
    """Render an int, float or Decimal using a standard or custom specifier."""
    is_integral = isinstance(value, numbers.Integral)
    if is_integral:
        value = int(value)
    elif isinstance(value, Decimal):
        if value.is_nan():
            return 'NaN'
        if value.is_infinite():
            return '-Infinity' if value.is_signed() else 'Infinity'
    else:
        value = float(value)
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'

    if not spec:
        return _default_text(value)

    m = _STANDARD_RX.fullmatch(spec)
    if m is None:
        return _format_custom(value, spec)

    kind = m.group(1)
    precision: Optional[int] = int(m.group(2)) if m.group(2) else None
    upper = kind.upper()

    if upper in ('D', 'X', 'B'):
        if not is_integral:
            raise FormatSpecifierError(f'format {spec!r} requires an integral value, got {value!r}')
        if upper == 'D':
            digits = str(abs(value)).rjust(precision or 0, '0')
            return f'-{digits}' if value < 0 else digits
        return _format_radix(value, 16 if upper == 'X' else 2, precision or 0, kind == 'X')

    negative = _is_negative(value)
    exact = _to_decimal(value)

    if upper == 'F':
        return _signed(negative, _fixed_text(abs(exact), _pick(precision)))
    if upper == 'N':
        return _signed(negative, _group(_fixed_text(abs(exact), _pick(precision))))
    if upper == 'C':
        body = _CURRENCY_SYMBOL + _group(_fixed_text(abs(exact), _pick(precision)))
        return f'({body})' if negative else body
    if upper == 'P':
        body = _group(_fixed_text(_shift(abs(exact), 2), _pick(precision))) + ' %'
        return _signed(negative, body)
    if upper == 'E':
        return _signed(negative, _scientific_text(abs(exact), 6 if precision is None else precision, kind, 3))
    if upper == 'G':
        return _signed(negative, _general_text(value, abs(exact), precision, kind))
    if upper == 'R':
        if isinstance(value, Decimal):
            raise FormatSpecifierError(f'format {spec!r} is not supported for Decimal values')
        return _default_text(value)
    raise FormatSpecifierError(f'unknown numeric format specifier {spec!r}')


def _pick(precision: Optional[int]) -> int:
    return _DEFAULT_PRECISION if precision is None else precision


def _is_negative(value: Any) -> bool:
    if isinstance(value, float):
        return math.copysign(1.0, value) < 0
    if isinstance(value, Decimal):
        return value.is_signed()
    return value < 0


def _signed(negative: bool, body: str) -> str:
    return f'-{body}' if negative else body


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(value)


def _shift(d: Decimal, places: int) -> Decimal:
    """Exact multiplication of *d* by 10 ** *places*."""
    sign, digits, exponent = d.as_tuple()
    return Decimal((sign, digits, exponent + places))


def _context_for(d: Decimal, places: int) -> Context:
    return Context(prec=max(64, d.adjusted() + places + 8), rounding=ROUND_HALF_UP)


def _round_places(d: Decimal, places: int) -> Decimal:
    """Round *d* to *places* fractional digits, midpoints away from zero."""
    return d.quantize(Decimal(1).scaleb(-places), context=_context_for(d, places))


def _round_significant(d: Decimal, digits: int) -> Decimal:
    if d.is_zero():
        return d
    exp = d.adjusted() - digits + 1
    return d.quantize(Decimal(1).scaleb(exp), context=_context_for(d, max(0, -exp)))


def _fixed_text(d: Decimal, places: int) -> str:
    return format(_round_places(d, places), 'f')


def _group(text: str) -> str:
    """Insert group separators into the integer part of a fixed-point text."""
    int_part, dot, frac = text.partition('.')
    return _group_digits(int_part) + dot + frac


def _group_digits(digits: str) -> str:
    chunks: List[str] = []
    while len(digits) > _GROUP_SIZE:
        chunks.append(digits[-_GROUP_SIZE:])
        digits = digits[:-_GROUP_SIZE]
    chunks.append(digits)
    return _GROUP_SEPARATOR.join(reversed(chunks))


def _digits_and_exponent(d: Decimal) -> Tuple[str, int]:
    """Significant digits of *d* without trailing zeros and its adjusted exponent."""
    if d.is_zero():
        return '0', 0
    digits = ''.join(str(x) for x in d.as_tuple().digits).rstrip('0') or '0'
    return digits, d.adjusted()


def _exponent_text(exp: int, letter: str, min_digits: int) -> str:
    sign = '-' if exp < 0 else '+'
    return f'{letter}{sign}{str(abs(exp)).rjust(min_digits, "0")}'


def _scientific_text(d: Decimal, precision: int, kind: str, min_exp_digits: int) -> str:
    rounded = _round_significant(d, precision + 1)
    if rounded.is_zero():
        digits, exp = '0', 0
    else:
        digits = ''.join(str(x) for x in rounded.as_tuple().digits)
        exp = rounded.adjusted()
    digits = digits.ljust(precision + 1, '0')[:precision + 1]
    mantissa = digits[0] + ('.' + digits[1:] if precision > 0 else '')
    return mantissa + _exponent_text(exp, 'E' if kind.isupper() else 'e', min_exp_digits)


def _compact_text(digits: str, exp: int, threshold: int, kind: str) -> str:
    """Render trimmed *digits* at exponent *exp* the way the G specifier does."""
    if -4 <= exp < threshold:
        if exp >= 0:
            int_part = digits[:exp + 1].ljust(exp + 1, '0')
            frac = digits[exp + 1:]
        else:
            int_part = '0'
            frac = '0' * (-exp - 1) + digits
        return int_part + ('.' + frac if frac else '')
    mantissa = digits[0] + ('.' + digits[1:] if len(digits) > 1 else '')
    return mantissa + _exponent_text(exp, 'E' if kind.isupper() else 'e', 2)


def _general_text(value: Any, d: Decimal, precision: Optional[int], kind: str) -> str:
    if not precision:
        if isinstance(value, float):
            return _roundtrip_text(abs(value), kind)
        return format(d, 'f')
    digits, exp = _digits_and_exponent(_round_significant(d, precision))
    return _compact_text(digits, exp, precision, kind)


def _roundtrip_text(value: float, kind: str = 'G') -> str:
    digits, exp = _digits_and_exponent(Decimal(repr(value)))
    return _compact_text(digits, exp, _ROUNDTRIP_SCI_THRESHOLD, kind)


def _default_text(value: Any) -> str:
    if isinstance(value, float):
        return _signed(_is_negative(value), _roundtrip_text(abs(value)))
    if isinstance(value, Decimal):
        return format(value, 'f')
    return str(value)


def _format_radix(value: int, base: int, min_digits: int, upper: bool) -> str:
    if value < 0:
        bits = 32 if value >= -(1 << 31) else 64
        value &= (1 << bits) - 1
    if base == 16:
        text = format(value, 'X' if upper else 'x')
    else:
        text = format(value, 'b')
    return text.rjust(min_digits, '0')


# --------------------------------------------------------------------------- #
#  Custom numeric patterns                                                    #
# --------------------------------------------------------------------------- #
def _split_sections(spec: str) -> List[str]:
    sections: List[str] = []
    buf: List[str] = []
    quote: Optional[str] = None
    i = 0
    while i < len(spec):
        ch = spec[i]
        if quote:
            if ch == quote:
                quote = None
            buf.append(ch)
        elif ch in ('"', "'"):
            quote = ch
            buf.append(ch)
        elif ch == '\\' and i + 1 < len(spec):
            buf.append(spec[i:i + 2])
            i += 1
        elif ch == ';':
            sections.append(''.join(buf))
            buf = []
        else:
            buf.append(ch)
        i += 1
    sections.append(''.join(buf))
    return sections[:3]


def _tokenize_pattern(section: str) -> List[Tuple[str, str]]:
    """Split a custom section into ('digit'|'point'|'comma'|'percent'|'permille'|'lit', text)."""
    tokens: List[Tuple[str, str]] = []
    i = 0
    while i < len(section):
        ch = section[i]
        if ch in '0#':
            tokens.append(('digit', ch))
        elif ch == '.':
            tokens.append(('point', ch))
        elif ch == ',':
            tokens.append(('comma', ch))
        elif ch == '%':
            tokens.append(('percent', ch))
        elif ch == '‰':
            tokens.append(('permille', ch))
        elif ch in 'Ee' and _EXPONENT_RX.match(section, i):
            raise FormatSpecifierError(f'exponent notation is not supported in custom pattern {section!r}')
        elif ch in ('"', "'"):
            close = section.find(ch, i + 1)
            close = len(section) if close == -1 else close
            tokens.append(('lit', section[i + 1:close]))
            i = close
        elif ch == '\\':
            if i + 1 < len(section):
                tokens.append(('lit', section[i + 1]))
                i += 1
        else:
            tokens.append(('lit', ch))
        i += 1
    return tokens


def _format_custom(value: Any, spec: str) -> str:
    sections = _split_sections(spec)
    exact = _to_decimal(value)
    negative = _is_negative(value) and not exact.is_zero()

    section = sections[0]
    use_sign = negative
    if exact.is_zero() and len(sections) == 3 and sections[2]:
        section = sections[2]
    elif negative and len(sections) >= 2 and sections[1]:
        section = sections[1]
        use_sign = False

    body = _apply_pattern(abs(exact), _tokenize_pattern(section))
    return f'-{body}' if use_sign else body


def _apply_pattern(d: Decimal, tokens: List[Tuple[str, str]]) -> str:
    point_at = next((i for i, (kind, _) in enumerate(tokens) if kind == 'point'), len(tokens))
    int_slots = [i for i in range(point_at) if tokens[i][0] == 'digit']
    frac_slots = [i for i in range(point_at, len(tokens)) if tokens[i][0] == 'digit']

    # Commas directly left of the point (or of the last integer digit) scale by 1000.
    scale_commas = set()
    j = point_at - 1
    while j >= 0 and tokens[j][0] == 'comma':
        scale_commas.add(j)
        j -= 1
    grouping = any(
        kind == 'comma' and i not in scale_commas and int_slots and int_slots[0] < i < int_slots[-1]
        for i, (kind, _) in enumerate(tokens[:point_at])
    )

    for kind, _ in tokens:
        if kind == 'percent':
            d = _shift(d, 2)
        elif kind == 'permille':
            d = _shift(d, 3)
    if int_slots:
        d = _shift(d, -3 * len(scale_commas))

    frac_count = len(frac_slots)
    min_frac = 0
    for pos, slot in enumerate(frac_slots):
        if tokens[slot][1] == '0':
            min_frac = pos + 1

    text = _fixed_text(d, frac_count)
    int_digits, _, frac_digits = text.partition('.')
    frac_digits = frac_digits.rstrip('0').ljust(min_frac, '0') if frac_count else ''

    first_zero = next((n for n, slot in enumerate(int_slots) if tokens[slot][1] == '0'), len(int_slots))
    min_int = len(int_slots) - first_zero
    if int_digits == '0':
        int_digits = ''
    int_digits = int_digits.rjust(min_int, '0')

    out: List[str] = []
    if grouping:
        int_text = _group_digits(int_digits) if int_digits else ''
        assigned = {int_slots[0]: int_text} if int_slots else {}
    else:
        assigned = {}
        remaining = int_digits
        for n in range(len(int_slots) - 1, -1, -1):
            slot = int_slots[n]
            if n == 0:
                assigned[slot] = remaining
            else:
                assigned[slot] = remaining[-1:] if remaining else ''
                remaining = remaining[:-1]

    frac_index = 0
    for i, (kind, tok) in enumerate(tokens):
        if kind == 'digit':
            if i < point_at:
                out.append(assigned.get(i, ''))
            else:
                if frac_index < len(frac_digits):
                    out.append(frac_digits[frac_index])
                frac_index += 1
        elif kind == 'point':
            if i == point_at and not int_slots:
                out.append(int_digits)
            if i == point_at and frac_digits:
                out.append('.')
        elif kind == 'comma':
            continue
        elif kind == 'percent':
            out.append('%')
        elif kind == 'permille':
            out.append('‰')
        else:
            out.append(tok)
    return ''.join(out)


# --------------------------------------------------------------------------- #
#  Enums and UUIDs                                                            #
# --------------------------------------------------------------------------- #
def _format_enum(value: Enum, spec: str) -> str:
    upper = spec.upper()
    if upper in ('', 'G', 'F'):
        if isinstance(value, Flag):
            return _flag_names(value)
        return str(value.name)
    raw = value.value
    if upper == 'D':
        return format_value(raw)
    if upper == 'X' and isinstance(raw, int):
        return _format_radix(raw, 16, 8, True)
    raise FormatSpecifierError(f'invalid enum format specifier {spec!r}')


def _flag_names(value: Flag) -> str:
    """Name of an exactly matching member, else the matching members in ascending value order."""
    members = sorted(type(value).__members__.values(), key=lambda m: m.value, reverse=True)
    for member in members:
        if member.value == value.value:
            return str(member.name)
    names = []
    remaining = value.value
    for member in members:
        if member.value and (member.value & remaining) == member.value:
            names.append(member.name)
            remaining &= ~member.value
    if remaining or not names:
        return format_value(value.value)
    return ', '.join(reversed(names))


def _format_uuid(value: UUID, spec: str) -> str:
    upper = spec.upper()
    if upper in ('', 'D'):
        text = str(value)
    elif upper == 'N':
        text = value.hex
    elif upper == 'B':
        text = '{' + str(value) + '}'
    elif upper == 'P':
        text = '(' + str(value) + ')'
    else:
        raise FormatSpecifierError(f'invalid UUID format specifier {spec!r}')
    return text
