"""DSN generators: one class per connection string grammar."""

from .base import GeneratedDSN, Generator
from .file import DUCKDB, SQLITE3, FileEngine, FileGenerator, OpaqueGenerator
from .keyvalue import (
    AdodbGenerator,
    KeyValueGenerator,
    OdbcGenerator,
    OleodbcGenerator,
    SqlserverGenerator,
    SybaseGenerator,
)
from .passthrough import ClickhouseGenerator, PassthroughGenerator
from .positional import (
    MymysqlGenerator,
    OracleGenerator,
    PositionalGenerator,
    SnowflakeGenerator,
    SpannerGenerator,
    VoltdbGenerator,
    YqlGenerator,
)
from .socket import MysqlGenerator, PostgresGenerator
from .template import TemplateGenerator

__all__ = [
    "GeneratedDSN",
    "Generator",
    "PassthroughGenerator",
    "ClickhouseGenerator",
    "TemplateGenerator",
    "KeyValueGenerator",
    "SqlserverGenerator",
    "SybaseGenerator",
    "AdodbGenerator",
    "OdbcGenerator",
    "OleodbcGenerator",
    "PositionalGenerator",
    "OracleGenerator",
    "MymysqlGenerator",
    "YqlGenerator",
    "VoltdbGenerator",
    "SnowflakeGenerator",
    "SpannerGenerator",
    "MysqlGenerator",
    "PostgresGenerator",
    "OpaqueGenerator",
    "FileGenerator",
    "FileEngine",
    "SQLITE3",
    "DUCKDB",
]
