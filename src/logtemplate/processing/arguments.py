"""
arguments – Render-time normalisation of template arguments.

Before substitution every argument goes through :func:`normalize_argument`:

  • None            → "(null)"
  • str             → unchanged (never exploded into characters)
  • Mapping         → "[key, value], [key, value]"
  • other Iterable  → "a, b, c" with every element normalised on its own
  • anything else   → unchanged, left to the invariant value formatter
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from logtemplate.constants import NULL_VALUE, SEQUENCE_SEPARATOR
from logtemplate.rendering.invariant import format_value


def _element_text(value: Any) -> str:
    normalized = normalize_argument(value)
    if isinstance(normalized, str):
        return normalized
    return format_value(normalized)


def normalize_argument(value: Any) -> Any:
    """Return *value* ready for composite substitution.

    The function is pure: iterables are read once and never mutated.
    """
    if value is None:
        return NULL_VALUE
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return SEQUENCE_SEPARATOR.join(
            f'[{_element_text(k)}, {_element_text(v)}]' for k, v in value.items()
        )
    if isinstance(value, Iterable):
        return SEQUENCE_SEPARATOR.join(_element_text(item) for item in value)
    return value
