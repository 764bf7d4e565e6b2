from __future__ import annotations

import io
import json
import logging
import unittest
from unittest.mock import patch

from ghmustache import ParserConfig, RenderConfig, __version__
from ghmustache.constants import DEFAULT_MAX_DEPTH, DEFAULT_MAX_NESTING
from ghmustache.logging.factory import DefaultLoggerFactory
from ghmustache.logging.helpers import JsonLogFormatter, get_logger, parse_level, trace_render


class ConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(ParserConfig().max_nesting, DEFAULT_MAX_NESTING)
        cfg = RenderConfig()
        self.assertEqual(cfg.max_depth, DEFAULT_MAX_DEPTH)
        self.assertTrue(cfg.escape)

    def test_from_env(self) -> None:
        env = {"GHMUSTACHE_MAX_DEPTH": "7", "GHMUSTACHE_MAX_PARTIAL_DEPTH": "3", "GHMUSTACHE_MAX_NESTING": "9"}
        cfg = RenderConfig.from_env(env)
        self.assertEqual((cfg.max_depth, cfg.max_partial_depth), (7, 3))
        self.assertEqual(ParserConfig.from_env(env).max_nesting, 9)

    def test_malformed_env_falls_back(self) -> None:
        with self.assertLogs("ghmustache.config", level="WARNING") as cm:
            cfg = RenderConfig.from_env({"GHMUSTACHE_MAX_DEPTH": "lots", "GHMUSTACHE_MAX_PARTIAL_DEPTH": "0"})
        self.assertEqual(cfg, RenderConfig())
        self.assertEqual(len(cm.output), 2)


class LoggingHelperTests(unittest.TestCase):
    def test_namespacing(self) -> None:
        self.assertEqual(get_logger().name, "ghmustache")
        self.assertEqual(get_logger("render").name, "ghmustache.render")
        self.assertEqual(get_logger("ghmustache.parser").name, "ghmustache.parser")

    def test_json_formatter_schema(self) -> None:
        record = logging.LogRecord("ghmustache.render", logging.WARNING, __file__, 1, "hi %s", ("x",), None)
        record.context = {"name": "v"}
        payload = json.loads(JsonLogFormatter().format(record))
        self.assertEqual(payload["level"], "WARNING")
        self.assertEqual(payload["module"], "ghmustache.render")
        self.assertEqual(payload["msg"], "hi x")
        self.assertEqual(payload["version"], __version__)
        self.assertEqual(payload["ctx"], {"name": "v"})
        self.assertTrue(payload["ts"].endswith("Z"))

    def test_factory_configures_base_logger_once(self) -> None:
        base = logging.getLogger("ghmustache")
        saved = list(base.handlers)
        base.handlers.clear()
        try:
            stream = io.StringIO()
            factory = DefaultLoggerFactory(stream=stream)
            log = factory.get_logger("cli")
            factory.get_logger("cli")
            self.assertEqual(len(base.handlers), 1)
            log.info("configured")
            self.assertIn("INFO: configured", stream.getvalue())
        finally:
            base.handlers[:] = saved

    def test_factory_from_env(self) -> None:
        factory = DefaultLoggerFactory.from_env({"GHMUSTACHE_LOG_LEVEL": "warning", "GHMUSTACHE_JSON_LOGS": "1"})
        self.assertEqual(factory.level, logging.WARNING)
        self.assertTrue(factory.json_logs)
        self.assertEqual(DefaultLoggerFactory.from_env({"GHMUSTACHE_LOG_LEVEL": "bogus"}).level, logging.INFO)
        self.assertEqual(DefaultLoggerFactory.from_env({}, verbose=True).level, logging.DEBUG)

    def test_parse_level(self) -> None:
        self.assertEqual(parse_level("debug"), logging.DEBUG)
        self.assertEqual(parse_level("30"), 30)
        self.assertEqual(parse_level(None, logging.ERROR), logging.ERROR)

    def test_trace_is_gated_by_environment(self) -> None:
        log = get_logger("trace-test")
        with patch.dict("os.environ", {"GHMUSTACHE_TRACE": "0"}):
            with patch.object(log, "debug") as dbg:
                trace_render(log, "section", name="x")
                dbg.assert_not_called()
        with patch.dict("os.environ", {"GHMUSTACHE_TRACE": "1"}):
            with patch.object(log, "debug") as dbg:
                trace_render(log, "section", name="x")
                dbg.assert_called_once()


if __name__ == "__main__":
    unittest.main()
