"""Scheme registry: the base scheme table plus runtime register / unregister / alias."""

import logging
import threading
from typing import Iterable, Optional

from .errors import DuplicateAliasError, DuplicateSchemeError, UnknownSchemeError
from .generators import (
    AdodbGenerator,
    ClickhouseGenerator,
    FileGenerator,
    MymysqlGenerator,
    MysqlGenerator,
    OdbcGenerator,
    OleodbcGenerator,
    OpaqueGenerator,
    OracleGenerator,
    PassthroughGenerator,
    PostgresGenerator,
    SnowflakeGenerator,
    SpannerGenerator,
    SqlserverGenerator,
    SybaseGenerator,
    TemplateGenerator,
    VoltdbGenerator,
    YqlGenerator,
)
from .scheme import Scheme, sort_aliases
from .transport import Transport

logger = logging.getLogger(__name__)

_SOCKETS = Transport.TCP | Transport.UDP | Transport.UNIX


def base_schemes() -> list[Scheme]:
    """Return the schemes every default registry starts with."""
    return [
        Scheme(driver="file", generator=FileGenerator(), opaque=True),
        # core databases
        Scheme(driver="mysql", generator=MysqlGenerator(), transport=_SOCKETS,
               aliases=["mariadb", "maria", "percona", "aurora"]),
        Scheme(driver="oracle", generator=TemplateGenerator(template="oracle://localhost:1521"),
               aliases=["or", "ora", "oci", "oci8", "odpi", "odpi-c"]),
        Scheme(driver="postgres", generator=PostgresGenerator(), transport=Transport.UNIX,
               aliases=["pg", "postgresql", "pgsql"]),
        Scheme(driver="sqlite3", generator=OpaqueGenerator(), opaque=True, aliases=["sqlite"]),
        Scheme(driver="sqlserver", generator=SqlserverGenerator(), aliases=["ms", "mssql", "azuresql"]),
        # wire compatibles
        Scheme(driver="cockroachdb",
               generator=TemplateGenerator(template="postgres://localhost:26257/?sslmode=disable"),
               aliases=["cr", "cockroach", "crdb", "cdb"], override="postgres"),
        Scheme(driver="memsql", generator=MysqlGenerator(), override="mysql"),
        Scheme(driver="redshift", generator=TemplateGenerator(template="postgres://localhost:5439/"),
               aliases=["rs"], override="postgres"),
        Scheme(driver="tidb", generator=MysqlGenerator(), override="mysql"),
        Scheme(driver="vitess", generator=MysqlGenerator(), aliases=["vt"], override="mysql"),
        # alternate implementations
        Scheme(driver="godror", generator=OracleGenerator(), aliases=["gr"]),
        Scheme(driver="moderncsqlite", generator=OpaqueGenerator(), opaque=True,
               aliases=["mq", "modernsqlite"], alt_driver="sqlite"),
        Scheme(driver="mymysql", generator=MymysqlGenerator(), transport=_SOCKETS, aliases=["zm", "mymy"]),
        Scheme(driver="pgx", generator=PassthroughGenerator(scheme="postgres"), transport=Transport.UNIX,
               aliases=["px"]),
        # other databases
        Scheme(driver="adodb", generator=AdodbGenerator(), aliases=["ado"]),
        Scheme(driver="awsathena", generator=PassthroughGenerator(scheme="s3"), aliases=["s3", "aws", "athena"]),
        Scheme(driver="avatica", generator=TemplateGenerator(template="http://localhost:8765/"),
               aliases=["av", "phoenix"]),
        Scheme(driver="bigquery", generator=PassthroughGenerator(scheme="bigquery"), aliases=["bq"]),
        Scheme(driver="clickhouse", generator=ClickhouseGenerator(), transport=Transport.ANY, aliases=["ch"]),
        Scheme(driver="csvq", generator=OpaqueGenerator(), opaque=True, aliases=["cs", "csv", "tsv", "json"]),
        Scheme(driver="duckdb", generator=OpaqueGenerator(), opaque=True, aliases=["dk", "ddb", "duck"]),
        Scheme(driver="firebirdsql", generator=PassthroughGenerator(truncate=True), aliases=["fb", "firebird"]),
        Scheme(driver="h2", generator=TemplateGenerator(template="h2://localhost:9092/")),
        Scheme(driver="hdb", generator=PassthroughGenerator(scheme="hdb"), aliases=["sa", "saphana", "sap", "hana"]),
        Scheme(driver="hive", generator=PassthroughGenerator(truncate=True), aliases=["hi", "hive2"]),
        Scheme(driver="n1ql", generator=TemplateGenerator(template="http://localhost:8093/"),
               aliases=["n1", "couchbase"]),
        Scheme(driver="odbc", generator=OdbcGenerator(), transport=Transport.ANY),
        Scheme(driver="oleodbc", generator=OleodbcGenerator(), transport=Transport.ANY,
               aliases=["oo", "ole"], override="adodb"),
        Scheme(driver="snowflake", generator=SnowflakeGenerator(), aliases=["sf"]),
        Scheme(driver="spanner", generator=SpannerGenerator(), aliases=["sp"]),
        Scheme(driver="sqlany", generator=SybaseGenerator(), aliases=["sy", "sybase", "any"]),
        Scheme(driver="voltdb", generator=VoltdbGenerator(), aliases=["volt", "vdb"]),
        Scheme(driver="yql", generator=YqlGenerator()),
    ]


class SchemeRegistry:
    """Maps driver names and aliases to Schemes.

    Mutation and lookup share one lock, so schemes may be registered while
    other threads parse.
    """

    def __init__(self, schemes: Iterable[Scheme] = ()):
        self._lock = threading.RLock()
        self._schemes: dict[str, Scheme] = {}
        for scheme in schemes:
            self.register(scheme)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def get(self, name: str) -> Optional[Scheme]:
        """Return the scheme registered under name (driver or alias), or None."""
        with self._lock:
            return self._schemes.get(name.lower())

    def lookup(self, name: str) -> Scheme:
        """Return the scheme registered under name; raise UnknownSchemeError otherwise."""
        scheme = self.get(name)
        if scheme is None:
            raise UnknownSchemeError(name)
        return scheme

    def schemes(self) -> list[Scheme]:
        """Registered schemes, one entry each, sorted by driver."""
        with self._lock:
            unique = {scheme.driver: scheme for scheme in self._schemes.values()}
        return [unique[driver] for driver in sorted(unique)]

    def protocols(self, name: str) -> list[str]:
        """Driver name followed by every alias of the scheme registered under name."""
        scheme = self.lookup(name)
        return [scheme.driver, *scheme.aliases]

    def register(self, scheme: Scheme) -> Scheme:
        """Register scheme and its aliases; return the stored scheme.

        A two-letter alias derived from the driver name is added when none of
        the aliases has two letters.
        """
        aliases = [alias for alias in scheme.aliases if alias != scheme.driver]
        if not any(len(alias) == 2 for alias in aliases) and len(scheme.driver) > 2:
            aliases.append(scheme.driver[:2])
        scheme = scheme.model_copy(update={"aliases": sort_aliases(aliases)})
        with self._lock:
            if scheme.driver in self._schemes:
                raise DuplicateSchemeError(scheme.driver)
            for alias in scheme.aliases:
                if alias in self._schemes:
                    raise DuplicateAliasError(alias)
            for name in (scheme.driver, *scheme.aliases):
                self._schemes[name] = scheme
        logger.debug("registered scheme %s (aliases: %s)", scheme.driver, ", ".join(scheme.aliases))
        return scheme

    def unregister(self, name: str) -> Optional[Scheme]:
        """Remove the scheme registered under name with all its aliases; return it, or None."""
        with self._lock:
            scheme = self._schemes.get(name.lower())
            if scheme is None:
                return None
            for key in (scheme.driver, *scheme.aliases):
                self._schemes.pop(key, None)
        logger.debug("unregistered scheme %s", scheme.driver)
        return scheme

    def register_alias(self, name: str, alias: str) -> Scheme:
        """Add alias to the scheme registered under name; return the updated scheme."""
        alias = alias.strip().lower()
        with self._lock:
            scheme = self.lookup(name)
            if alias in self._schemes:
                raise DuplicateAliasError(alias)
            scheme = scheme.model_copy(update={"aliases": sort_aliases((*scheme.aliases, alias))})
            for key in (scheme.driver, *scheme.aliases):
                self._schemes[key] = scheme
        logger.debug("registered alias %s for scheme %s", alias, scheme.driver)
        return scheme


def default_registry() -> SchemeRegistry:
    """Return a new registry holding the base schemes."""
    return SchemeRegistry(base_schemes())
