"""Public API surface for logtemplate.processing."""
from .arguments import normalize_argument

__all__ = [
    "normalize_argument",
]
