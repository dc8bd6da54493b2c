# PATH: tests/unit/test_logging_contract.py
"""
Tests specifically for logging contract enforcement.

No kwargs to logger; only extra={"context": {...}} allowed.
"""

import ast
import json
import logging
import unittest
from pathlib import Path
from typing import Any, Dict, List

from core.exceptions import TransportError
from core.logging import (
    ConsoleFormatter,
    JSONFormatter,
    clear_global_context,
    get_logger,
    record_context,
    set_global_context,
)

PROJECT_ROOT = Path(__file__).parent.parent.parent
SOURCE_DIRS = ("api", "chains", "config", "core", "watcher")


class TestLoggingContractEnforcement(unittest.TestCase):
    """AST-based tests for logging contract."""

    ALLOWED_KWARGS = {"exc_info", "extra", "stack_info", "stacklevel"}

    def _find_logger_violations(self, source_code: str) -> List[Dict[str, Any]]:
        """Find logger calls with invalid kwargs using AST."""
        violations = []
        tree = ast.parse(source_code)

        for node in ast.walk(tree):
            if not isinstance(node, ast.Call):
                continue
            if not isinstance(node.func, ast.Attribute):
                continue

            method_name = node.func.attr
            if method_name not in ("debug", "info", "warning", "error", "critical", "exception"):
                continue

            obj = node.func.value
            is_logger = False
            if isinstance(obj, ast.Name):
                is_logger = "log" in obj.id.lower()
            elif isinstance(obj, ast.Attribute):
                is_logger = "log" in obj.attr.lower()

            if not is_logger:
                continue

            for kw in node.keywords:
                if kw.arg and kw.arg not in self.ALLOWED_KWARGS:
                    violations.append({
                        "line": node.lineno,
                        "method": method_name,
                        "invalid_kwarg": kw.arg,
                    })

        return violations

    def _source_files(self) -> List[Path]:
        files = [PROJECT_ROOT / "run_server.py"]
        for directory in SOURCE_DIRS:
            files.extend((PROJECT_ROOT / directory).rglob("*.py"))
        return files

    def test_detects_violation(self):
        """The checker itself flags bare kwargs."""
        violations = self._find_logger_violations("logger.info('x', address='0x1')\n")
        self.assertEqual(violations[0]["invalid_kwarg"], "address")

    def test_source_tree_has_no_invalid_kwargs(self):
        """Every module passes context only via extra."""
        files = self._source_files()
        self.assertGreater(len(files), 1)

        msg = ""
        for filepath in files:
            source = filepath.read_text(encoding="utf-8")
            for v in self._find_logger_violations(source):
                msg += f"  {filepath.name}:{v['line']}: logger.{v['method']}(..., {v['invalid_kwarg']}=...)\n"

        if msg:
            self.fail(f"Logging violations:\n{msg}")


class TestLoggingContextCapture(unittest.TestCase):
    """Tests that context is properly captured in log records."""

    def setUp(self):
        self.captured_records = []

        class CapturingHandler(logging.Handler):
            def __init__(self, records_list):
                super().__init__()
                self.records = records_list

            def emit(self, record):
                self.records.append(record)

        self.logger_name = f"test_capture_{id(self)}"
        base = logging.getLogger(self.logger_name)
        base.setLevel(logging.DEBUG)
        base.handlers = []
        base.addHandler(CapturingHandler(self.captured_records))
        self.addCleanup(clear_global_context)

    def test_adapter_merges_default_and_call_context(self):
        logger = get_logger(self.logger_name, rpc_url="http://node.test")

        logger.info("Block fetched", extra={"context": {"block_number": 16}})

        record = self.captured_records[0]
        self.assertEqual(record.context["rpc_url"], "http://node.test")
        self.assertEqual(record.context["block_number"], 16)

    def test_call_context_wins(self):
        logger = get_logger(self.logger_name, address="a")

        logger.info("x", extra={"context": {"address": "b"}})

        self.assertEqual(self.captured_records[0].context["address"], "b")

    def test_json_formatter_output(self):
        set_global_context(service="txwatch")
        logger = get_logger(self.logger_name)

        logger.warning("Error getting current block", extra={"context": {"error_code": "INFRA_RPC_ERROR"}})

        entry = json.loads(JSONFormatter().format(self.captured_records[0]))
        self.assertEqual(entry["level"], "WARNING")
        self.assertEqual(entry["logger"], self.logger_name)
        self.assertEqual(entry["message"], "Error getting current block")
        self.assertEqual(entry["context"]["service"], "txwatch")
        self.assertEqual(entry["context"]["error_code"], "INFRA_RPC_ERROR")

    def test_json_formatter_exception(self):
        logger = get_logger(self.logger_name)
        try:
            raise ValueError("Test error")
        except ValueError:
            logger.error("Caught error", exc_info=True)

        entry = json.loads(JSONFormatter().format(self.captured_records[0]))
        self.assertIn("ValueError", entry["context"]["exception"])

    def test_console_formatter_summarizes_context(self):
        logger = get_logger(self.logger_name)

        logger.info("ctx", extra={"context": {"a": 1, "b": 2, "c": 3, "d": 4}})

        line = ConsoleFormatter().format(self.captured_records[0])
        self.assertIn("a=1", line)
        self.assertIn("(+1 more)", line)

    def test_console_formatter_includes_global_context(self):
        set_global_context(service="txwatch")
        logger = get_logger(self.logger_name)

        logger.info("started")

        line = ConsoleFormatter().format(self.captured_records[0])
        self.assertIn("service=txwatch", line)

    def test_txwatch_error_code_added_from_exc_info(self):
        logger = get_logger(self.logger_name)
        try:
            raise TransportError("connection refused")
        except TransportError:
            logger.error("Node unreachable", exc_info=True)

        entry = json.loads(JSONFormatter().format(self.captured_records[0]))
        self.assertEqual(entry["context"]["error_code"], "INFRA_RPC_TRANSPORT")

    def test_explicit_error_code_not_overwritten(self):
        logger = get_logger(self.logger_name)
        try:
            raise TransportError("connection refused")
        except TransportError:
            logger.error("x", exc_info=True, extra={"context": {"error_code": "CUSTOM"}})

        self.assertEqual(record_context(self.captured_records[0])["error_code"], "CUSTOM")


if __name__ == "__main__":
    unittest.main()
