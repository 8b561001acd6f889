"""Generators for MySQL and PostgreSQL, which accept unix socket paths in the URL path.

For a unix URL the path mixes the socket location and the database name;
the filesystem is probed from the leaf upward to tell them apart.
"""

import logging
from typing import ClassVar

from ..errors import RelativePathNotSupportedError
from ..fs import FileSystem, join_path, resolve_dir, resolve_socket
from ..options import gen_options, gen_query_options, set_option
from ..url import URL
from .base import GeneratedDSN, Generator

logger = logging.getLogger(__name__)


class MysqlGenerator(Generator):
    """MySQL (go-sql-driver format): `user:pass@tcp(host:3306)/dbname?opts`.

    Under unix, the first path prefix that is a socket file is the socket:
    "my:/var/run/mysqld/mysqld.sock/mydb" -> `unix(/var/run/mysqld/mysqld.sock)/mydb`.
    """

    STYLE: ClassVar[str] = "socket"

    default_host: str = "localhost"
    default_port: str = "3306"

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        host, port, database = url.hostname, url.port, url.database
        dsn = ""
        if url.username:
            dsn = url.username
            if url.password is not None:
                dsn += ":" + url.password
            dsn += "@"
        if url.transport == "unix":
            if not host:
                database = "/" + database
            host, database = resolve_socket(join_path(host, database), fs)
            logger.debug("mysql socket %s, database %r", host, database)
            port = ""
        else:
            host = host or self.default_host
            port = port or self.default_port
        dsn += url.transport + "(" + host + (":" + port if port else "") + ")/" + database
        return GeneratedDSN(dsn + gen_query_options(url.query), host_port_db=(host, port, database))


class PostgresGenerator(Generator):
    """PostgreSQL (libpq key/value format): `dbname=db host=h password=p port=5432 user=u`.

    Under unix, the first path prefix that is a directory is the socket
    directory, optionally followed by ":port" (libpq derives the socket file
    name from the port): "pg:/var/run/postgresql:5433/mydb".
    """

    STYLE: ClassVar[str] = "socket"

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        host, port, database = url.hostname, url.port, url.database
        if host == ".":
            raise RelativePathNotSupportedError(f"{url.unaliased_driver}: relative socket paths are not supported")
        if url.transport == "unix":
            if not host:
                database = "/" + database
            host, port, database = resolve_dir(join_path(host, database), fs)
            logger.debug("postgres socket directory %s, port %r, database %r", host, port, database)
        values = url.query
        set_option(values, "host", host)
        set_option(values, "port", port)
        set_option(values, "dbname", database)
        if url.username is not None:
            set_option(values, "user", url.username)
            set_option(values, "password", url.password or "")
        return GeneratedDSN(gen_options(values, "", "=", " ", ","), host_port_db=(host, port, database))
