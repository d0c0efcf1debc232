from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Text substituted for ``None`` arguments and ``None`` sequence elements.
NULL_VALUE: str = '(null)'

# Key of the trailing structured pair carrying the raw template.
ORIGINAL_FORMAT_KEY: str = '{OriginalFormat}'

# Characters introducing ",alignment" and ":format" suffixes of a format item.
FORMAT_DELIMITERS: tuple[str, ...] = (',', ':')

# Separator used when a sequence argument is flattened into text.
SEQUENCE_SEPARATOR: str = ', '
