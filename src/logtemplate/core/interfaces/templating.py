from __future__ import annotations
from typing import Any, List, Optional, Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class MessageTemplateProtocol(Protocol):
    """Compiled message template offering a text and a structured view."""

    original_format: str
    compiled_format: str
    placeholder_names: Tuple[str, ...]

    def render_text(self, values: Optional[Sequence[Any]] = None) -> str:
        ...

    def get_value(self, values: Sequence[Any], index: int) -> Tuple[str, Any]:
        ...

    def get_values(self, values: Sequence[Any]) -> List[Tuple[str, Any]]:
        ...


@runtime_checkable
class TemplateCompilerProtocol(Protocol):
    """Callable turning a raw message template into a compiled one."""

    def __call__(self, raw: str) -> MessageTemplateProtocol:
        ...
