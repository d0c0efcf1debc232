from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .templating import MessageTemplateProtocol, TemplateCompilerProtocol

__all__ = [
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'MessageTemplateProtocol',
    'TemplateCompilerProtocol',
]
