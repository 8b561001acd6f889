"""Open database connections from URLs through a registry of driver factories.

A factory receives the parsed URL and returns a live connection; most hand
`url.dsn` straight to their driver. Drivers are imported lazily so sqlurl
itself depends on none of them.
"""

import logging
from typing import Any, Callable, Optional, Union
from urllib.parse import quote

from .errors import UnknownDriverError
from .options import gen_query_options
from .parser import Parser, default_parser
from .url import URL

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[URL], Any]


def _connect_sqlite3(url: URL):
    import sqlite3
    # URI mode keeps query options such as ?mode=ro working, so the path gets escaped
    path = url.opaque or url.host + url.path
    return sqlite3.connect("file:" + quote(path) + gen_query_options(url.query), uri=True)


def _connect_postgres(url: URL):
    import psycopg2  # pylint: disable=import-outside-toplevel,import-error
    return psycopg2.connect(url.dsn)


def _connect_mysql(url: URL):
    import pymysql  # pylint: disable=import-outside-toplevel,import-error
    host, port, database = url.host_port_db
    kwargs = {
        "user": url.username,
        "password": url.password or "",
        "database": database or None,
    }
    if url.transport == "unix":
        kwargs["unix_socket"] = host
    else:
        kwargs["host"] = host
        kwargs["port"] = int(port)
    return pymysql.connect(**kwargs)


def _connect_odbc(url: URL):
    import pyodbc  # pylint: disable=import-outside-toplevel,import-error
    return pyodbc.connect(url.dsn)


_factories: dict[str, ConnectionFactory] = {
    "sqlite3": _connect_sqlite3,
    "postgres": _connect_postgres,
    "mysql": _connect_mysql,
    "odbc": _connect_odbc,
}
_urls: dict[str, URL] = {}


def register_driver(name: str, factory: ConnectionFactory) -> None:
    """Make `open` use factory(url) for URLs resolving to driver name."""
    _factories[name] = factory


def unregister_driver(name: str) -> Optional[ConnectionFactory]:
    return _factories.pop(name, None)


def open(url: Union[str, URL], parser: Optional[Parser] = None):  # pylint: disable=redefined-builtin
    """Parse url if needed and open it with the factory registered for its driver."""
    if isinstance(url, str):
        url = (parser or default_parser()).parse(url)
    try:
        factory = _factories[url.open_driver]
    except KeyError as error:
        raise UnknownDriverError(url.open_driver) from error
    logger.debug("opening %s with driver %s", url.short(), url.open_driver)
    return factory(url)


def connect(database_url: str, name: str = "default", parser: Optional[Parser] = None) -> URL:
    """Store database_url under name for get_connection; the URL is parsed right away."""
    if not isinstance(database_url, str):
        raise ValueError(f"database_url should be a `str`, got {type(database_url).__name__}")
    url = (parser or default_parser()).parse(database_url)
    _urls[name] = url
    return url


def get_connection(name: str = "default"):
    """Open a new connection to the URL stored under name."""
    try:
        url = _urls[name]
    except KeyError as error:
        raise ValueError(f"No connection configured with name=`{name}`") from error
    return open(url)
