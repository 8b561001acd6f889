"""Tests for sqlurl.generators.socket: MySQL and PostgreSQL DSNs, including unix sockets."""

import pytest

from sqlurl import RelativePathNotSupportedError
from sqlurl.generators import MysqlGenerator, PostgresGenerator
from sqlurl.url import decompose
from tests.helpers import FakeFileSystem


def _url(urlstr, **update):
    return decompose(urlstr).model_copy(update=update)


@pytest.fixture
def sockets():
    return FakeFileSystem(sockets=["/tmp/mysql.sock"], dirs=["/run/pg"])


def test_mysql_tcp():
    generated = MysqlGenerator().generate(_url("my://user:pass@db:3307/app?parseTime=true"), FakeFileSystem())
    assert generated.dsn == "user:pass@tcp(db:3307)/app?parseTime=true"
    assert generated.host_port_db == ("db", "3307", "app")
    assert generated.alt_driver == ""


def test_mysql_user_without_password():
    assert MysqlGenerator().generate(_url("my://user@db/app"), FakeFileSystem()).dsn == "user@tcp(db:3306)/app"


def test_mysql_custom_defaults():
    generator = MysqlGenerator(default_host="127.0.0.1", default_port="4000")
    assert generator.generate(_url("my://"), FakeFileSystem()).dsn == "tcp(127.0.0.1:4000)/"


def test_mysql_unix_socket(sockets):
    generated = MysqlGenerator().generate(_url("my:/tmp/mysql.sock/app", transport="unix"), sockets)
    assert generated.dsn == "unix(/tmp/mysql.sock)/app"
    assert generated.host_port_db == ("/tmp/mysql.sock", "", "app")


def test_mysql_unix_socket_missing(sockets):
    generated = MysqlGenerator().generate(_url("my:/tmp/other.sock", transport="unix"), sockets)
    assert generated.dsn == "unix(/tmp/other.sock)/"


def test_postgres_tcp():
    generated = PostgresGenerator().generate(
        _url("pg://user:pass@db:5433/app?sslmode=disable"), FakeFileSystem())
    assert generated.dsn == "dbname=app host=db password=pass port=5433 sslmode=disable user=user"
    assert generated.host_port_db == ("db", "5433", "app")


def test_postgres_unix_directory(sockets):
    generated = PostgresGenerator().generate(_url("pg:/run/pg:5433/app", transport="unix"), sockets)
    assert generated.dsn == "dbname=app host=/run/pg port=5433"
    assert generated.host_port_db == ("/run/pg", "5433", "app")


def test_postgres_relative_host():
    with pytest.raises(RelativePathNotSupportedError):
        PostgresGenerator().generate(_url("pg://./app", transport="unix"), FakeFileSystem())


def test_socket_style():
    assert MysqlGenerator.STYLE == PostgresGenerator.STYLE == "socket"
