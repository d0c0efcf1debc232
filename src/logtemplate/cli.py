from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, NoReturn, Optional, Sequence

from logtemplate.errors import LogTemplateError
from logtemplate.logging.factory import DefaultLoggerFactory
from logtemplate.logging.helpers import get_logger
from logtemplate.rendering.invariant import format_value
from logtemplate.template import compile_template

logger = get_logger('cli')


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="logtemplate",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "logtemplate – render named-placeholder message templates\n"
            "Example: logtemplate \"User {UserId} logged in from {Ip}\" 42 10.0.0.1"
        ),
    )
    p.add_argument("template", help="Message template, e.g. \"Took {Elapsed:F2} ms\".")
    p.add_argument("args", nargs="*", metavar="ARG", help="Positional values, one per placeholder.")

    g_mode = p.add_argument_group("Output")
    g_mode.add_argument(
        "--inspect",
        action="store_true",
        help="Print the compiled positional format and the placeholder names.",
    )
    g_mode.add_argument(
        "--values",
        action="store_true",
        help="Print the structured (name, value) pairs as JSON instead of the text.",
    )
    g_mode.add_argument(
        "--json-args",
        action="store_true",
        dest="json_args",
        help="Decode every ARG as JSON (numbers, lists, null …) instead of plain text.",
    )

    g_misc = p.add_argument_group("Miscellaneous")
    g_misc.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit diagnostics as JSON log lines on stderr.",
    )
    return p


def _fatal(msg: str, code: int = 1) -> NoReturn:
    """Exit the process with a logged error."""
    logger.error(msg)
    sys.exit(code)


def _decode_args(raw: Sequence[str], as_json: bool) -> List[Any]:
    if not as_json:
        return list(raw)
    values: List[Any] = []
    for item in raw:
        try:
            values.append(json.loads(item))
        except json.JSONDecodeError as exc:
            _fatal(f"argument {item!r} is not valid JSON: {exc}")
    return values


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the ``logtemplate`` console script."""
    ns = _build_parser().parse_args(argv)
    global logger
    logger = DefaultLoggerFactory(json_logs=ns.json_logs, level=logging.INFO).get_logger('cli')

    template = compile_template(ns.template)
    if ns.inspect:
        print(json.dumps(
            {"compiled": template.compiled_format, "names": list(template.placeholder_names)},
            ensure_ascii=False,
        ))
        return 0

    values = _decode_args(ns.args, ns.json_args)
    try:
        if ns.values:
            pairs = template.get_values(values)
            print(json.dumps([[k, v] for k, v in pairs], ensure_ascii=False, default=format_value))
        else:
            print(template.render_text(values))
    except LogTemplateError as exc:
        _fatal(f"cannot render {ns.template!r}: {exc}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
