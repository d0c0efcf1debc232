from __future__ import annotations
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LoggerLikeProtocol(Protocol):
    """Logging surface accepted by TemplateLogger and the CLI."""

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None: ...

    def isEnabledFor(self, level: int) -> bool: ...

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    """Factory for scoped plain and message-template loggers."""

    def get_logger(self, name: str) -> LoggerLikeProtocol:
        """Return a logger instance associated with `name`."""
        ...

    def get_template_logger(self, name: str) -> LoggerLikeProtocol:
        """Return a logger whose messages are named-placeholder templates."""
        ...
