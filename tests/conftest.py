import pytest

from sqlurl import Parser, default_registry
from tests.helpers import DUCKDB_HEADER, SQLITE_HEADER, FakeFileSystem


@pytest.fixture(scope="function")
def fs():
    """Synthetic filesystem with the usual MySQL socket and PostgreSQL socket directory."""
    return FakeFileSystem(
        sockets=["/var/run/mysqld/mysqld.sock"],
        dirs=["/var/run/postgresql"],
        files={
            "/data/app.db": SQLITE_HEADER,
            "/data/analytics.db": DUCKDB_HEADER,
            "/data/notes.txt": b"hello",
        },
    )


@pytest.fixture(scope="function")
def parser(fs):
    """Parser over a fresh default registry and the synthetic filesystem."""
    return Parser(registry=default_registry(), fs=fs)
