"""Public API surface for logtemplate.parsing."""
from .compiler import compile_format, find_brace_index, find_index_of_any

__all__ = [
    "compile_format",
    "find_brace_index",
    "find_index_of_any",
]
