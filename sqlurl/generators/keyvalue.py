"""Key/value generators: driver-manager style `Key=value;Key=value` connection strings."""

from typing import ClassVar

from ..fs import FileSystem, exists
from ..options import Values, gen_options_odbc, set_option
from ..url import URL
from .base import GeneratedDSN, Generator


def split_instance(host: str, database: str) -> tuple[str, str]:
    """Move an instance name from the path onto the host: ("h", "inst/db") -> ("h\\inst", "db")."""
    instance, slash, rest = database.partition("/")
    if slash:
        return host + "\\" + instance, rest
    return host, database


class KeyValueGenerator(Generator):
    """Build the DSN from an explicit field table merged with the query parameters.

    Subclasses provide `fields`; keys are sorted in the output, empty values
    are dropped when skip_when_empty, and keys starting with one of the
    `ignore` prefixes are left out.
    """

    STYLE: ClassVar[str] = "keyvalue"

    skip_when_empty: bool = True
    ignore: tuple[str, ...] = ()

    def fields(self, url: URL, fs: FileSystem) -> dict[str, str]:
        raise NotImplementedError("Subclasses must implement `fields`")

    def values(self, url: URL, fs: FileSystem) -> Values:
        values = url.query
        for key, value in self.fields(url, fs).items():
            set_option(values, key, value)
        return values

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        return GeneratedDSN(gen_options_odbc(self.values(url, fs), self.skip_when_empty, self.ignore))


class SqlserverGenerator(KeyValueGenerator):
    """SQL Server: `Database=db;Password=p;Port=1433;Server=host\\instance;User ID=u`."""

    def fields(self, url: URL, fs: FileSystem) -> dict[str, str]:
        host, database = split_instance(url.hostname, url.database)
        fields = {"Server": host, "Port": url.port, "Database": database}
        if url.username is not None:
            fields["User ID"] = url.username
            fields["Password"] = url.password or ""
        return fields


class SybaseGenerator(KeyValueGenerator):
    """SQL Anywhere: `DatabaseName=db;Host=h;LINKS=tcpip(PORT=2638);PWD=p;UID=u`."""

    def fields(self, url: URL, fs: FileSystem) -> dict[str, str]:
        host, database = split_instance(url.hostname, url.database)
        fields = {"Host": host, "DatabaseName": database}
        if url.port:
            fields["LINKS"] = f"tcpip(PORT={url.port})"
        if url.username is not None:
            fields["UID"] = url.username
            fields["PWD"] = url.password or ""
        return fields


class AdodbGenerator(KeyValueGenerator):
    """ADODB: the host is the OLE DB provider, the path the data source.

    A data source that does not exist on disk is split at its first
    separator into data source and database ("server/db").
    """

    def fields(self, url: URL, fs: FileSystem) -> dict[str, str]:
        source, database = url.database or ".", ""
        if not exists(fs, source):
            for index, char in enumerate(source):
                if char in "\\/":
                    source, database = source[:index], source[index + 1:]
                    break
        fields = {
            "Provider": url.hostname,
            "Port": url.port,
            "Data Source": source,
            "Database": database,
        }
        if url.username is not None:
            fields["User ID"] = url.username
            fields["Password"] = url.password or ""
        return fields


class OdbcGenerator(KeyValueGenerator):
    """ODBC: the transport names the ODBC driver, e.g. `odbc+Postgres+Unicode://...`."""

    default_ports: tuple[tuple[str, str], ...] = (("mysql", "3306"), ("postgres", "5432"))
    fallback_port: str = "1433"

    def fields(self, url: URL, fs: FileSystem) -> dict[str, str]:
        host, database = split_instance(url.hostname, url.database)
        port = url.port
        if not port:
            family = url.transport.lower()
            port = next((port for name, port in self.default_ports if name in family), self.fallback_port)
        fields = {
            "Driver": "{" + url.transport.replace("+", " ") + "}",
            "Server": host,
            "Port": port,
            "Database": database,
        }
        if url.username is not None:
            fields["UID"] = url.username
            fields["PWD"] = url.password or ""
        return fields


class OleodbcGenerator(OdbcGenerator):
    """ODBC through the OLE DB bridge: `Provider=MSDASQL.1;Extended Properties="<ODBC string>"`.

    Query keys starting with one of `outer` stay in the OLE DB string; all the
    others are passed through the extended properties untouched.
    """

    provider: str = "MSDASQL.1"
    outer: tuple[str, ...] = ("Provider", "Persist Security Info")

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        values = self.values(url, fs)
        properties = gen_options_odbc(values, self.skip_when_empty, self.ignore + self.outer)
        prefixes = tuple(prefix.lower() for prefix in self.outer)
        outer = {key: items for key, items in values.items() if key.lower().startswith(prefixes)}
        provider = self.provider
        for key in list(outer):
            if key.lower() == "provider":
                provider = ",".join(outer.pop(key))
        dsn = "Provider=" + provider
        options = gen_options_odbc(outer, self.skip_when_empty)
        if options:
            dsn += ";" + options
        return GeneratedDSN(dsn + f';Extended Properties="{properties}"')
