"""Generators for drivers whose native DSN is itself a URL."""

from typing import ClassVar

from ..errors import InvalidTransportError
from ..fs import FileSystem
from ..url import URL, format_url
from .base import GeneratedDSN, Generator


class PassthroughGenerator(Generator):
    """Re-serialize the URL under a fixed scheme (e.g. pgx URLs become postgres:// URLs).

    With truncate, the leading "scheme://" is dropped (Firebird and Hive expect
    "user:pass@host/path").
    """

    STYLE: ClassVar[str] = "passthrough"

    scheme: str = ""
    truncate: bool = False

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        return GeneratedDSN(self._format(url, self.scheme, url.host, url.raw_query, url.username, url.password))

    def _format(self, url: URL, scheme: str, host: str, raw_query: str, username, password) -> str:
        dsn = format_url(
            scheme="" if self.truncate else scheme,
            opaque=url.opaque,
            username=username,
            password=password,
            host=host,
            path=url.path,
            raw_query=raw_query,
            fragment=url.fragment,
        )
        if self.truncate:
            dsn = dsn.removeprefix("//")
        return dsn


class ClickhouseGenerator(PassthroughGenerator):
    """ClickHouse: native protocol on port 9000 by default, http(s) when asked as transport.

    Any other transport is rejected rather than written out as a URL scheme.
    """

    scheme: str = "clickhouse"
    default_port: str = "9000"
    native_transports: tuple[str, ...] = ("tcp", "unix", "udp")
    http_schemes: tuple[str, ...] = ("http", "https")

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        transport = url.transport.lower()
        if transport in self.native_transports:
            scheme = self.scheme
        elif transport in self.http_schemes:
            scheme = transport
        else:
            raise InvalidTransportError(url.unaliased_driver or self.scheme, url.transport)
        host = url.host
        if host and not url.port and scheme == self.scheme:
            host += ":" + self.default_port
        return GeneratedDSN(self._format(url, scheme, host, url.raw_query, url.username, url.password))
