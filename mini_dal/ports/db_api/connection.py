"""Connection configuration and scoped opening of DB-API drivers."""

from __future__ import annotations

import contextlib
import importlib
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Optional, Tuple

from ...core.errors import DalConnectionError
from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect
from .driver import DbApiDriver

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"mysql": 3306, "postgres": 5432}
_DRIVER_MODULES = {
    "sqlite": ("sqlite3",),
    "mysql": ("pymysql", "MySQLdb", "mysql.connector"),
    "postgres": ("psycopg", "psycopg2"),
}
_DIALECTS = {
    "sqlite": SQLiteDialect,
    "mysql": MySQLDialect,
    "postgres": PostgresDialect,
}


@dataclass(frozen=True)
class ConnectionConfig:
    """Settings used to open one database connection.

    Attributes:
        backend: One of `sqlite`, `mysql`, `postgres`.
        database: Database name, or file path / `:memory:` for sqlite.
        host: Server host (ignored by sqlite).
        port: Server port; defaults per backend when `None`.
        user: Login user.
        password: Login password.
        charset: Connection character set (mysql only).
    """

    backend: str = "sqlite"
    database: str = ":memory:"
    host: str = "localhost"
    port: Optional[int] = None
    user: str = ""
    password: str = ""
    charset: str = "utf8mb4"

    def __post_init__(self) -> None:
        if self.backend not in _DIALECTS:
            raise ValueError(
                f"Unsupported backend {self.backend!r}; "
                f"expected one of {sorted(_DIALECTS)}."
            )

    @property
    def resolved_port(self) -> Optional[int]:
        if self.port is not None:
            return self.port
        return _DEFAULT_PORTS.get(self.backend)

    @classmethod
    def from_env(
        cls,
        prefix: str = "MINI_DAL_",
        environ: Optional[Mapping[str, str]] = None,
    ) -> ConnectionConfig:
        """Read settings from `<prefix>BACKEND`, `HOST`, `PORT`, and so on."""

        env = os.environ if environ is None else environ

        def get(key: str, default: str) -> str:
            return env.get(f"{prefix}{key}", default)

        port = get("PORT", "")
        return cls(
            backend=get("BACKEND", "sqlite").lower(),
            database=get("DATABASE", ":memory:"),
            host=get("HOST", "localhost"),
            port=int(port) if port else None,
            user=get("USER", ""),
            password=get("PASSWORD", ""),
            charset=get("CHARSET", "utf8mb4"),
        )

    def dialect(self) -> Dialect:
        return _DIALECTS[self.backend]()


def load_driver_module(backend: str) -> Tuple[str, Any]:
    """Import the first available DB-API module for `backend`.

    Raises:
        DalConnectionError: If no driver module is installed.
    """

    for module_name in _DRIVER_MODULES[backend]:
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            continue
        if getattr(module, "connect", None) is not None:
            return module_name, module
    raise DalConnectionError(
        f"No DB-API driver installed for {backend!r}; "
        f"install one of {', '.join(_DRIVER_MODULES[backend])}."
    )


def connect(
    config: ConnectionConfig,
    *,
    loader: Callable[[str], Tuple[str, Any]] = load_driver_module,
) -> Any:
    """Open a DB-API connection in autocommit mode.

    Raises:
        DalConnectionError: If the driver is missing or the connection fails.
    """

    module_name, module = loader(config.backend)
    logger.debug(
        "connecting backend=%s driver=%s database=%s",
        config.backend,
        module_name,
        config.database,
    )
    try:
        return _open(module_name, module, config)
    except DalConnectionError:
        raise
    except Exception as exc:
        raise DalConnectionError(
            f"Could not connect to {config.backend} database "
            f"{config.database!r}: {exc}"
        ) from exc


def _open(module_name: str, module: Any, config: ConnectionConfig) -> Any:
    if module_name == "sqlite3":
        # isolation_level=None keeps sqlite3 in autocommit mode.
        return module.connect(config.database, isolation_level=None)
    if module_name == "pymysql":
        return module.connect(
            host=config.host,
            port=config.resolved_port,
            user=config.user,
            password=config.password,
            database=config.database,
            charset=config.charset,
            autocommit=True,
        )
    if module_name == "MySQLdb":
        conn = module.connect(
            host=config.host,
            port=config.resolved_port,
            user=config.user,
            passwd=config.password,
            db=config.database,
            charset=config.charset,
        )
        conn.autocommit(True)
        return conn
    if module_name == "mysql.connector":
        return module.connect(
            host=config.host,
            port=config.resolved_port,
            user=config.user,
            password=config.password,
            database=config.database,
            charset=config.charset,
            autocommit=True,
        )
    if module_name == "psycopg":
        return module.connect(
            host=config.host,
            port=config.resolved_port,
            user=config.user,
            password=config.password,
            dbname=config.database,
            autocommit=True,
        )
    conn = module.connect(
        host=config.host,
        port=config.resolved_port,
        user=config.user,
        password=config.password,
        dbname=config.database,
    )
    conn.autocommit = True
    return conn


@contextlib.contextmanager
def open_driver(
    config: ConnectionConfig,
    *,
    loader: Callable[[str], Tuple[str, Any]] = load_driver_module,
) -> Iterator[DbApiDriver]:
    """Open a connection, yield a `DbApiDriver`, and always close it."""

    driver = DbApiDriver(connect(config, loader=loader), config.dialect())
    try:
        yield driver
    finally:
        driver.close()
