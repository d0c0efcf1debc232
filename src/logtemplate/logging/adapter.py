from __future__ import annotations

"""Message-template aware logger adapter.

    log = TemplateLogger(get_logger('auth'))
    log.info("User {UserId} logged in from {Ip}", 42, "10.0.0.1")

The record message is the rendered text ("User 42 logged in from 10.0.0.1")
and the record carries a ``context`` mapping with the structured view
({"UserId": 42, "Ip": "10.0.0.1", "{OriginalFormat}": "..."}), which
JsonLogFormatter emits under ``ctx``.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Dict, List, MutableMapping, Optional, Tuple

from logtemplate.constants import ORIGINAL_FORMAT_KEY
from logtemplate.errors import LogTemplateError
from logtemplate.logging.helpers import get_logger
from logtemplate.template import Template, compile_template

_log = get_logger('logging.adapter')


class TemplateLogger(logging.LoggerAdapter):
    """LoggerAdapter whose messages are named-placeholder templates."""

    def __init__(self, logger: logging.Logger, extra: Optional[MutableMapping[str, Any]] = None) -> None:
        super().__init__(logger, extra or {})

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        if not self.isEnabledFor(level):
            return
        text, context = self.render(str(msg), args)

        extra: Dict[str, Any] = dict(self.extra or {})
        extra.update(kwargs.pop('extra', None) or {})
        extra['context'] = context
        kwargs['extra'] = extra
        kwargs['stacklevel'] = kwargs.get('stacklevel', 1) + 1
        self.logger.log(level, text, **kwargs)

    @staticmethod
    def render(msg: str, args: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
        """Return the rendered text and structured context for *msg* and *args*.

        One-shot iterables are materialised first so the text and the context
        see the same items. A template that cannot be rendered with *args* is
        reported on the package logger and emitted verbatim.
        """
        args = [_materialise(arg) for arg in args]
        template: Template = compile_template(msg)
        try:
            text = template.render_text(args)
        except LogTemplateError as exc:
            _log.error("template rendering failed for %r: %s", msg, exc)
            text = msg
        try:
            pairs = template.get_values(args)
        except LogTemplateError:
            supplied = min(len(args), len(template.placeholder_names))
            pairs = [template.get_value(args, i) for i in range(supplied)]
            pairs.append((ORIGINAL_FORMAT_KEY, msg))
        return text, _context(pairs)


def _materialise(arg: Any) -> Any:
    if isinstance(arg, Iterable) and not isinstance(arg, (Sequence, Mapping)):
        return list(arg)
    return arg


def _context(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    # A repeated name keeps its first value; later ones get the position as suffix.
    context: Dict[str, Any] = {}
    for position, (name, value) in enumerate(pairs):
        key = name if name not in context else f'{name}_{position}'
        context[key] = value
    return context
