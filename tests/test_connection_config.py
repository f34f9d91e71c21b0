from __future__ import annotations

import os
import sqlite3
import tempfile
import unittest
from typing import Any

from mini_dal import DalConnectionError, DataAccess
from mini_dal.ports.db_api.connection import (
    ConnectionConfig,
    connect,
    load_driver_module,
    open_driver,
)
from mini_dal.ports.db_api.dialects import MySQLDialect, PostgresDialect, SQLiteDialect


class _FakeMySQLModule:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def connect(self, **kwargs: Any) -> object:
        self.calls.append(kwargs)
        return object()


class _RefusingModule:
    def connect(self, **kwargs: Any) -> object:
        raise OSError("Connection refused")


class ConnectionConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = ConnectionConfig()
        self.assertEqual(config.backend, "sqlite")
        self.assertEqual(config.database, ":memory:")
        self.assertIsNone(config.resolved_port)
        self.assertIsInstance(config.dialect(), SQLiteDialect)

    def test_default_ports_and_dialects(self) -> None:
        mysql = ConnectionConfig(backend="mysql", database="app")
        postgres = ConnectionConfig(backend="postgres", database="app", port=6543)
        self.assertEqual(mysql.resolved_port, 3306)
        self.assertEqual(postgres.resolved_port, 6543)
        self.assertIsInstance(mysql.dialect(), MySQLDialect)
        self.assertIsInstance(postgres.dialect(), PostgresDialect)

    def test_unknown_backend(self) -> None:
        with self.assertRaises(ValueError):
            ConnectionConfig(backend="oracle")

    def test_from_env(self) -> None:
        config = ConnectionConfig.from_env(
            environ={
                "APP_DB_BACKEND": "MySQL",
                "APP_DB_HOST": "db.internal",
                "APP_DB_PORT": "3307",
                "APP_DB_DATABASE": "shop",
                "APP_DB_USER": "shop",
                "APP_DB_PASSWORD": "secret",
            },
            prefix="APP_DB_",
        )
        self.assertEqual(config.backend, "mysql")
        self.assertEqual(config.host, "db.internal")
        self.assertEqual(config.port, 3307)
        self.assertEqual(config.database, "shop")
        self.assertEqual(config.password, "secret")
        self.assertEqual(config.charset, "utf8mb4")

    def test_from_env_defaults(self) -> None:
        self.assertEqual(ConnectionConfig.from_env(environ={}), ConnectionConfig())


class ConnectTests(unittest.TestCase):
    def test_load_sqlite_driver(self) -> None:
        name, module = load_driver_module("sqlite")
        self.assertEqual(name, "sqlite3")
        self.assertIs(module, sqlite3)

    def test_pymysql_connect_arguments(self) -> None:
        module = _FakeMySQLModule()
        config = ConnectionConfig(
            backend="mysql", database="shop", user="u", password="p", host="h"
        )
        connect(config, loader=lambda backend: ("pymysql", module))
        self.assertEqual(
            module.calls,
            [
                {
                    "host": "h",
                    "port": 3306,
                    "user": "u",
                    "password": "p",
                    "database": "shop",
                    "charset": "utf8mb4",
                    "autocommit": True,
                }
            ],
        )

    def test_connect_failure_is_connection_error(self) -> None:
        config = ConnectionConfig(backend="mysql", database="shop")
        with self.assertRaises(DalConnectionError) as ctx:
            connect(config, loader=lambda backend: ("pymysql", _RefusingModule()))
        self.assertIsInstance(ctx.exception, ConnectionError)
        self.assertIn("Connection refused", str(ctx.exception))

    def test_missing_driver(self) -> None:
        def loader(backend: str) -> Any:
            raise DalConnectionError(f"No DB-API driver installed for {backend!r}")

        with self.assertRaises(DalConnectionError):
            with open_driver(ConnectionConfig(backend="postgres"), loader=loader):
                pass

    def test_open_driver_persists_in_autocommit_and_closes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "app.db")
            config = ConnectionConfig(database=path)

            with open_driver(config) as driver:
                dal = DataAccess(driver)
                dal.query("CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT)").close()
                dal.insert("notes", {"body": "hello"})
            self.assertIsNone(driver.conn)

            with open_driver(config) as driver:
                self.assertEqual(DataAccess(driver).get_value("notes", "body", {"id": 1}), "hello")

    def test_open_driver_closes_on_error(self) -> None:
        with self.assertRaises(RuntimeError):
            with open_driver(ConnectionConfig()) as driver:
                raise RuntimeError("boom")
        self.assertIsNone(driver.conn)


if __name__ == "__main__":
    unittest.main()
