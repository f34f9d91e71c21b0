from __future__ import annotations

import sqlite3
import unittest
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from mini_dal.core.binder import bind_params, has_marker
from mini_dal.core.errors import BindError, DalError, DriverError
from mini_dal.core.executor import execute_statement, prepare_statement
from mini_dal.core.values import BoundValue, ValueKind
from tests.fake_driver import FakeDriver


class Color(str, Enum):
    RED = "red"


class BoundValueTests(unittest.TestCase):
    def test_storage_classes(self) -> None:
        samples = [
            (None, ValueKind.NULL, None),
            (True, ValueKind.INTEGER, 1),
            (7, ValueKind.INTEGER, 7),
            (1.5, ValueKind.REAL, 1.5),
            ("Ann", ValueKind.TEXT, "Ann"),
            (b"\x00\x01", ValueKind.BLOB, b"\x00\x01"),
            (bytearray(b"ab"), ValueKind.BLOB, b"ab"),
            (Decimal("1.10"), ValueKind.TEXT, "1.10"),
            (date(2024, 1, 2), ValueKind.TEXT, "2024-01-02"),
            (datetime(2024, 1, 2, 3, 4, 5), ValueKind.TEXT, "2024-01-02T03:04:05"),
            (Color.RED, ValueKind.TEXT, "red"),
        ]
        for raw, kind, value in samples:
            with self.subTest(raw=raw):
                bound = BoundValue.of(raw)
                self.assertIs(bound.kind, kind)
                self.assertEqual(bound.value, value)

    def test_passthrough_and_null_flag(self) -> None:
        bound = BoundValue(ValueKind.TEXT, "x")
        self.assertIs(BoundValue.of(bound), bound)
        self.assertTrue(BoundValue.of(None).is_null)
        self.assertFalse(bound.is_null)

    def test_unsupported_type(self) -> None:
        with self.assertRaises(TypeError):
            BoundValue.of(object())


class BinderTests(unittest.TestCase):
    def test_has_marker(self) -> None:
        self.assertTrue(has_marker("SELECT * FROM t WHERE id = :id", "id"))
        self.assertTrue(has_marker("SELECT * FROM t WHERE id=:id AND x = 1", "id"))
        self.assertFalse(has_marker("SELECT * FROM t WHERE id = :identity", "id"))
        self.assertFalse(has_marker("SELECT id::text FROM t", "text"))
        self.assertFalse(has_marker("SELECT * FROM t", "id"))

    def test_binds_tagged_values_in_order(self) -> None:
        driver = FakeDriver()
        statement = driver.prepare("UPDATE t SET b = :b WHERE a = :a")
        returned = bind_params(statement, {"b": "x", "a": 1})

        self.assertIs(returned, statement)
        self.assertEqual(list(statement.bound), ["b", "a"])
        self.assertEqual(statement.bound["b"], BoundValue(ValueKind.TEXT, "x"))
        self.assertEqual(statement.bound["a"], BoundValue(ValueKind.INTEGER, 1))

    def test_empty_params_bind_nothing(self) -> None:
        statement = FakeDriver().prepare("SELECT 1")
        self.assertIs(bind_params(statement, None), statement)
        self.assertEqual(statement.bound, {})

    def test_missing_marker_raises(self) -> None:
        statement = FakeDriver().prepare("SELECT * FROM t WHERE a = :a")
        with self.assertRaises(BindError) as ctx:
            bind_params(statement, {"a": 1, "b": 2})
        self.assertIn(":b", str(ctx.exception))
        self.assertEqual(ctx.exception.sql, statement.sql)

    def test_unsupported_value_raises_bind_error(self) -> None:
        statement = FakeDriver().prepare("SELECT * FROM t WHERE a = :a")
        with self.assertRaises(BindError) as ctx:
            bind_params(statement, {"a": object()})
        self.assertIsInstance(ctx.exception.__cause__, TypeError)

    def test_driver_bind_failure_is_translated(self) -> None:
        driver = FakeDriver(bind_error=RuntimeError("bad parameter"))
        statement = driver.prepare("SELECT * FROM t WHERE a = :a")
        with self.assertRaises(BindError) as ctx:
            bind_params(statement, {"a": 1})
        self.assertEqual(ctx.exception.message, "bad parameter")


class ExecutorTests(unittest.TestCase):
    def test_execute_returns_statement(self) -> None:
        driver = FakeDriver()
        statement = driver.prepare("SELECT 1")
        self.assertIs(execute_statement(statement), statement)
        self.assertTrue(statement.executed)

    def test_driver_failure_becomes_driver_error(self) -> None:
        failure = sqlite3.IntegrityError("UNIQUE constraint failed: users.email")
        statement = FakeDriver(execute_error=failure).prepare("INSERT INTO users(email) VALUES (:email)")

        with self.assertRaises(DriverError) as ctx:
            execute_statement(statement)

        self.assertEqual(ctx.exception.message, "UNIQUE constraint failed: users.email")
        self.assertEqual(ctx.exception.sql, statement.sql)
        self.assertIs(ctx.exception.__cause__, failure)
        self.assertIsInstance(ctx.exception, DalError)

    def test_dal_errors_pass_through(self) -> None:
        failure = BindError("No value bound for ':a'.")
        statement = FakeDriver(execute_error=failure).prepare("SELECT :a")
        with self.assertRaises(BindError) as ctx:
            execute_statement(statement)
        self.assertIs(ctx.exception, failure)

    def test_core_does_not_log(self) -> None:
        failure = RuntimeError("syntax error")
        with self.assertNoLogs("mini_dal.core", level="DEBUG"):
            execute_statement(FakeDriver().prepare("SELECT 1"))
            with self.assertRaises(DriverError):
                execute_statement(FakeDriver(execute_error=failure).prepare("SELEC 1"))

    def test_prepare_failure_becomes_driver_error(self) -> None:
        driver = FakeDriver(prepare_error=ConnectionResetError("server gone"))
        with self.assertRaises(DriverError) as ctx:
            prepare_statement(driver, "SELECT 1")
        self.assertEqual(ctx.exception.message, "server gone")


if __name__ == "__main__":
    unittest.main()
