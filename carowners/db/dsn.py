"""
Conversion of driver name + DSN connection strings into SQLAlchemy URLs.

The DSN follows the MySQL driver convention
``user:password@tcp(host:port)/database?param=value``.
"""

import re
import logging
from typing import Dict, Optional
from urllib.parse import parse_qsl

from sqlalchemy.engine import URL, make_url

from carowners.core.exceptions import InvalidDSNError

logger = logging.getLogger(__name__)

DRIVERS: Dict[str, str] = {
    "mysql": "mysql+mysqlconnector",
    "postgres": "postgresql+psycopg2",
    "sqlite3": "sqlite",
}

DEFAULT_PORTS: Dict[str, int] = {
    "mysql": 3306,
    "postgres": 5432,
}

# Driver-side options with no SQLAlchemy counterpart
DROPPED_PARAMS = {"parseTime", "loc", "_fk", "cache", "mode"}

_MYSQL_DSN = re.compile(
    r"^(?:(?P<user>[^:@/]*)(?::(?P<password>.*))?@)?"
    r"(?:(?P<net>[a-z]+)(?:\((?P<addr>[^)]*)\))?)?"
    r"/(?P<database>[^?]*)"
    r"(?:\?(?P<params>.*))?$"
)


def _query_params(params: Optional[str]) -> Dict[str, str]:
    if not params:
        return {}
    return {k: v for k, v in parse_qsl(params, keep_blank_values=True) if k not in DROPPED_PARAMS}


def _split_addr(dsn: str, addr: str, default_port: int):
    host, sep, port = addr.rpartition(":")
    if not sep:
        return addr or "localhost", default_port
    if not port.isdigit():
        raise InvalidDSNError(dsn, f"port {port!r} is not a number")
    return host or "localhost", int(port)


def _parse_mysql(dsn: str) -> URL:
    match = _MYSQL_DSN.match(dsn)
    if not match:
        raise InvalidDSNError(dsn, "expected user:password@tcp(host:port)/database")

    net = match.group("net") or "tcp"
    addr = match.group("addr") or ""
    query = _query_params(match.group("params"))
    host, port = None, None

    if net == "tcp":
        host, port = _split_addr(dsn, addr, DEFAULT_PORTS["mysql"])
    elif net == "unix":
        if not addr:
            raise InvalidDSNError(dsn, "unix protocol requires a socket path")
        query["unix_socket"] = addr
    else:
        raise InvalidDSNError(dsn, f"unsupported protocol {net!r}")

    return URL.create(
        DRIVERS["mysql"],
        username=match.group("user") or None,
        password=match.group("password"),
        host=host,
        port=port,
        database=match.group("database") or None,
        query=query,
    )


def _parse_postgres(dsn: str) -> URL:
    # URL form is handed to SQLAlchemy as-is, only the driver changes
    if dsn.startswith(("postgres://", "postgresql://")):
        url = make_url("postgresql" + dsn[dsn.index("://"):])
        return url.set(drivername=DRIVERS["postgres"])

    # key=value form: "host=localhost port=5432 user=x dbname=y sslmode=disable"
    pairs = {}
    for token in dsn.split():
        key, sep, value = token.partition("=")
        if not sep:
            raise InvalidDSNError(dsn, f"expected key=value, got {token!r}")
        pairs[key] = value

    port = pairs.pop("port", None)
    if port is not None and not port.isdigit():
        raise InvalidDSNError(dsn, f"port {port!r} is not a number")

    return URL.create(
        DRIVERS["postgres"],
        username=pairs.pop("user", None),
        password=pairs.pop("password", None),
        host=pairs.pop("host", "localhost"),
        port=int(port) if port else DEFAULT_PORTS["postgres"],
        database=pairs.pop("dbname", None),
        query=pairs,
    )


def _parse_sqlite(dsn: str) -> URL:
    path, _, params = dsn.partition("?")
    if path.startswith("file:"):
        path = path[len("file:"):]
    in_memory = dict(parse_qsl(params)).get("mode") == "memory"
    database = None if in_memory or path in ("", ":memory:") else path
    return URL.create(DRIVERS["sqlite3"], database=database)


def parse_dsn(driver: Optional[str], dsn: Optional[str]) -> URL:
    """
    Build a SQLAlchemy URL from a driver name and DSN.

    Args:
        driver: One of "mysql", "postgres" or "sqlite3"
        dsn: Connection string in the driver's native format

    Returns:
        URL: SQLAlchemy URL for the matching dialect and DB-API driver

    Raises:
        InvalidDSNError: If the driver is unknown or the DSN is malformed
    """
    if not driver or driver not in DRIVERS:
        raise InvalidDSNError(dsn or "", f"unsupported driver {driver!r}")
    if dsn is None:
        raise InvalidDSNError("", "DSN is empty")

    if driver == "mysql":
        url = _parse_mysql(dsn)
    elif driver == "postgres":
        url = _parse_postgres(dsn)
    else:
        url = _parse_sqlite(dsn)

    logger.debug(f"Resolved {driver} DSN to {url}")
    return url
