#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging integration for *logtemplate*.

• TemplateLogger: rendered message + structured ``context`` on every record.
• JsonLogFormatter: ``ctx`` payload, invariant rendering of non-JSON values.
• DailyFileHandler / SinkConfig: file naming, header block, console echo.
"""
from __future__ import annotations

import io
import json
import logging
import sys
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

import logtemplate  # noqa: E402
from logtemplate import ORIGINAL_FORMAT_KEY, TemplateLogger, template_logger  # noqa: E402
from logtemplate.config import SinkConfig, configure_file_logging  # noqa: E402
from logtemplate.logging.factory import DefaultLoggerFactory  # noqa: E402
from logtemplate.logging.handlers import DailyFileHandler  # noqa: E402
from logtemplate.logging.helpers import JsonLogFormatter, get_logger  # noqa: E402


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _capture(name: str) -> tuple[logging.Logger, _ListHandler]:
    lg = logging.getLogger(name)
    lg.handlers.clear()
    lg.setLevel(logging.DEBUG)
    lg.propagate = False
    handler = _ListHandler()
    lg.addHandler(handler)
    return lg, handler


def _record(msg: str, context: dict | None = None) -> logging.LogRecord:
    record = logging.LogRecord("logtemplate.tests", logging.INFO, __file__, 10, msg, None, None, func="handler")
    if context is not None:
        record.context = context  # type: ignore[attr-defined]
    return record


# --------------------------------------------------------------------------- #
#  1. Logger names                                                            #
# --------------------------------------------------------------------------- #
class LoggerNameTests(unittest.TestCase):
    def test_namespacing(self) -> None:
        self.assertEqual(get_logger().name, "logtemplate")
        self.assertEqual(get_logger("auth").name, "logtemplate.auth")
        self.assertEqual(get_logger("logtemplate.auth").name, "logtemplate.auth")

    def test_factory_returns_namespaced_loggers(self) -> None:
        factory = DefaultLoggerFactory(stream=io.StringIO())
        self.assertEqual(factory.get_logger("svc").name, "logtemplate.svc")
        self.assertIsInstance(factory.get_template_logger("svc"), TemplateLogger)


# --------------------------------------------------------------------------- #
#  2. TemplateLogger                                                          #
# --------------------------------------------------------------------------- #
class TemplateLoggerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.logger, self.handler = _capture("tests.adapter")

    def test_message_and_context(self) -> None:
        TemplateLogger(self.logger).info("User {UserId} from {Ip}", 42, "10.0.0.1")
        record = self.handler.records[-1]
        self.assertEqual(record.getMessage(), "User 42 from 10.0.0.1")
        self.assertEqual(
            record.context,
            {"UserId": 42, "Ip": "10.0.0.1", ORIGINAL_FORMAT_KEY: "User {UserId} from {Ip}"},
        )

    def test_percent_signs_are_not_interpreted(self) -> None:
        TemplateLogger(self.logger).warning("100% of {N} done", 3)
        self.assertEqual(self.handler.records[-1].getMessage(), "100% of 3 done")

    def test_extra_is_merged(self) -> None:
        TemplateLogger(self.logger, {"request_id": "r1"}).error("failed {Code}", 500, extra={"attempt": 2})
        record = self.handler.records[-1]
        self.assertEqual(record.request_id, "r1")
        self.assertEqual(record.attempt, 2)
        self.assertEqual(record.levelno, logging.ERROR)

    def test_disabled_level_is_skipped(self) -> None:
        self.logger.setLevel(logging.WARNING)
        TemplateLogger(self.logger).debug("hidden {X}", 1)
        self.assertEqual(self.handler.records, [])

    def test_render_failure_falls_back_to_template(self) -> None:
        with self.assertLogs("logtemplate.logging.adapter", level="ERROR"):
            TemplateLogger(self.logger).info("need {A} and {B}", 1)
        record = self.handler.records[-1]
        self.assertEqual(record.getMessage(), "need {A} and {B}")
        self.assertEqual(record.context, {"A": 1, ORIGINAL_FORMAT_KEY: "need {A} and {B}"})

    def test_repeated_names_keep_every_value(self) -> None:
        TemplateLogger(self.logger).info("{A} and {A}", 1, 2)
        record = self.handler.records[-1]
        self.assertEqual(record.getMessage(), "1 and 2")
        self.assertEqual(record.context, {"A": 1, "A_1": 2, ORIGINAL_FORMAT_KEY: "{A} and {A}"})

    def test_generator_arguments_reach_text_and_context(self) -> None:
        TemplateLogger(self.logger).info("Ids: {Ids}", (n for n in range(3)))
        record = self.handler.records[-1]
        self.assertEqual(record.getMessage(), "Ids: 0, 1, 2")
        self.assertEqual(record.context["Ids"], [0, 1, 2])
        payload = json.loads(JsonLogFormatter().format(record))
        self.assertEqual(payload["ctx"]["Ids"], [0, 1, 2])

    def test_exception_keeps_exc_info(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            TemplateLogger(self.logger).exception("crashed in {Step}", "load")
        record = self.handler.records[-1]
        self.assertEqual(record.getMessage(), "crashed in load")
        self.assertIsNotNone(record.exc_info)

    def test_template_logger_helper(self) -> None:
        adapter = template_logger("tests.helper", service="api")
        self.assertEqual(adapter.logger.name, "logtemplate.tests.helper")
        self.assertEqual(adapter.extra, {"service": "api"})


# --------------------------------------------------------------------------- #
#  3. JSON formatter                                                          #
# --------------------------------------------------------------------------- #
class JsonFormatterTests(unittest.TestCase):
    def test_payload_fields(self) -> None:
        payload = json.loads(JsonLogFormatter().format(_record("hello", {"A": 1})))
        self.assertEqual(payload["msg"], "hello")
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["module"], "logtemplate.tests")
        self.assertEqual(payload["version"], logtemplate.__version__)
        self.assertEqual(payload["ctx"], {"A": 1})
        self.assertTrue(payload["ts"].endswith("Z"))

    def test_non_json_values_use_invariant_text(self) -> None:
        when = datetime(2024, 3, 5, 14, 7, 9)
        payload = json.loads(JsonLogFormatter().format(_record("x", {"When": when})))
        self.assertEqual(payload["ctx"]["When"], "03/05/2024 14:07:09")

    def test_empty_context_is_omitted(self) -> None:
        payload = json.loads(JsonLogFormatter().format(_record("x")))
        self.assertNotIn("ctx", payload)


# --------------------------------------------------------------------------- #
#  4. File sink & configuration                                               #
# --------------------------------------------------------------------------- #
class DailyFileHandlerTests(unittest.TestCase):
    def test_writes_entry_to_dated_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "nested" / "logs"
            handler = DailyFileHandler(
                target,
                prefix=">>",
                suffix="<<",
                clock=lambda: datetime(2026, 10, 19, 8, 0, 0),
            )
            handler.setFormatter(logging.Formatter("%(message)s"))
            handler.handle(_record("User 42 logged in"))

            path = target / "2026-10-19.log"
            self.assertTrue(path.exists())
            text = path.read_text(encoding="utf-8")
            self.assertIn(">> Level : [ INFO ], Time: [", text)
            self.assertIn(">> Category : [ tests ] <<", text)
            self.assertIn(">> Method : [ handler ] <<", text)
            self.assertIn("User 42 logged in\n", text)

    def test_appends_and_echoes(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            console = io.StringIO()
            handler = DailyFileHandler(
                td,
                naming_format="app-%Y.log",
                output_console=True,
                console=console,
                clock=lambda: datetime(2026, 1, 1),
            )
            handler.handle(_record("first"))
            handler.handle(_record("second"))
            text = (Path(td) / "app-2026.log").read_text(encoding="utf-8")
            self.assertLess(text.index("first"), text.index("second"))
            self.assertIn("second", console.getvalue())

    def test_current_file_creates_empty_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            handler = DailyFileHandler(Path(td) / "d", clock=lambda: datetime(2026, 2, 3))
            path = handler.current_file()
            self.assertEqual(path.name, "2026-02-03.log")
            self.assertEqual(path.read_text(encoding="utf-8"), "")


class SinkConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = SinkConfig.from_env({})
        self.assertEqual(cfg.directory, Path("logs"))
        self.assertEqual(cfg.naming_format, "%Y-%m-%d.log")
        self.assertEqual(cfg.level, logging.INFO)
        self.assertFalse(cfg.output_console)
        self.assertFalse(cfg.json_logs)

    def test_from_env(self) -> None:
        cfg = SinkConfig.from_env({
            "LOGTEMPLATE_LOG_DIR": "/var/log/app",
            "LOGTEMPLATE_LOG_NAMING": "%Y%m%d.txt",
            "LOGTEMPLATE_LOG_PREFIX": "[",
            "LOGTEMPLATE_LOG_SUFFIX": "]",
            "LOGTEMPLATE_CONSOLE": "true",
            "LOGTEMPLATE_LOG_LEVEL": "debug",
            "LOGTEMPLATE_JSON_LOGS": "1",
        })
        self.assertEqual(cfg.directory, Path("/var/log/app"))
        self.assertEqual(cfg.naming_format, "%Y%m%d.txt")
        self.assertEqual((cfg.prefix, cfg.suffix), ("[", "]"))
        self.assertTrue(cfg.output_console)
        self.assertEqual(cfg.level, logging.DEBUG)
        self.assertTrue(cfg.json_logs)

    def test_numeric_and_invalid_levels(self) -> None:
        self.assertEqual(SinkConfig.from_env({"LOGTEMPLATE_LOG_LEVEL": "30"}).level, 30)
        with self.assertRaises(ValueError):
            SinkConfig.from_env({"LOGTEMPLATE_LOG_LEVEL": "chatty"})

    def test_configure_file_logging_attaches_handler(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            handler = configure_file_logging(SinkConfig(directory=Path(td)), name="tests.sink")
            target = get_logger("tests.sink")
            try:
                self.assertIn(handler, target.handlers)
                self.assertIsInstance(handler, DailyFileHandler)
            finally:
                target.removeHandler(handler)
                handler.close()


if __name__ == "__main__":
    unittest.main()
