"""Public surface for logtemplate.core: protocol types for downstream consumers."""

from logtemplate.core.interfaces import (  # noqa: F401
    LoggerFactoryProtocol,
    LoggerLikeProtocol,
    MessageTemplateProtocol,
    TemplateCompilerProtocol,
)

__all__ = [
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'MessageTemplateProtocol',
    'TemplateCompilerProtocol',
]
