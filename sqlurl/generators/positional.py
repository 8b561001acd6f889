"""Positional generators: DSNs made by joining URL parts with fixed separators."""

from typing import ClassVar

from ..errors import MissingHostError, MissingPasswordError, MissingPathError, MissingUserError
from ..fs import FileSystem, join_path, resolve_socket
from ..options import convert_options, gen_options
from ..url import URL
from .base import GeneratedDSN, Generator


class PositionalGenerator(Generator):
    """Base for separator-joined DSNs."""

    STYLE: ClassVar[str] = "positional"

    def userinfo(self, url: URL, sep: str) -> str:
        """Return "user<sep>password" (or just "user"), or "" without a username."""
        if not url.username:
            return ""
        if url.password is None:
            return url.username
        return url.username + sep + url.password


class OracleGenerator(PositionalGenerator):
    """Oracle easy connect: `user/pass@host:port/service[/instance]`."""

    require_user: bool = True

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        userinfo = self.userinfo(url, "/")
        if self.require_user and not userinfo:
            raise MissingUserError(url.unaliased_driver)
        dsn = url.hostname
        if url.port:
            dsn += ":" + url.port
        service, slash, instance = url.database.rpartition("/")
        if not slash:
            service, instance = instance, ""
        if service:
            dsn += "/" + service
        if instance:
            dsn += "/" + instance
        if userinfo:
            dsn = userinfo + "@" + dsn
        return GeneratedDSN(dsn)


class MymysqlGenerator(PositionalGenerator):
    """MyMySQL: `tcp:host:port,opt=val*dbname/user/pass`, or `unix:/path/to/sock*dbname`."""

    default_host: str = "localhost"
    default_port: str = "3306"

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        host, port, database = url.hostname, url.port, url.database
        if url.transport == "unix":
            if not host:
                database = "/" + database
            host, database = resolve_socket(join_path(host, database), fs)
            port = ""
        else:
            host = host or self.default_host
            port = port or self.default_port
        dsn = url.transport + ":" + host + (":" + port if port else "")
        dsn += gen_options(
            convert_options(url.query, {"true": ""}),
            ",", "=", ",", " ", False,
        )
        dsn += "*" + database
        userinfo = self.userinfo(url, "/")
        if userinfo:
            dsn += "/" + userinfo
        return GeneratedDSN(dsn, host_port_db=(host, port, database))


class YqlGenerator(PositionalGenerator):
    """YQL: `user|pass|store://host/path`; a user without a password is rejected."""

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        dsn = ""
        if url.username is not None:
            if url.password is None:
                raise MissingPasswordError(f"{url.unaliased_driver}: missing password for user `{url.username}`")
            dsn = url.username + "|" + url.password
        if url.host:
            dsn = (dsn or "|") + "|store://" + url.host + url.path
        return GeneratedDSN(dsn)


class VoltdbGenerator(PositionalGenerator):
    """VoltDB: `host:port`."""

    default_host: str = "localhost"
    default_port: str = "21212"

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        return GeneratedDSN((url.hostname or self.default_host) + ":" + (url.port or self.default_port))


class SnowflakeGenerator(PositionalGenerator):
    """Snowflake: `user:pass@account/dbname/schema?opts`; the account (host) is mandatory."""

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        if not url.hostname:
            raise MissingHostError(url.unaliased_driver)
        dsn = url.host + "/" + url.database
        userinfo = self.userinfo(url, ":")
        if userinfo:
            dsn = userinfo + "@" + dsn
        if url.raw_query:
            dsn += "?" + url.raw_query
        return GeneratedDSN(dsn)


class SpannerGenerator(PositionalGenerator):
    """Spanner: `projects/<host>/instances/<instance>/databases/<db>` from `sp://project/instance/db`."""

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        project = url.hostname
        if not project:
            raise MissingHostError(url.unaliased_driver)
        instance, slash, database = url.database.partition("/")
        if not slash or not instance or not database:
            raise MissingPathError(url.unaliased_driver)
        return GeneratedDSN(f"projects/{project}/instances/{instance}/databases/{database}")
