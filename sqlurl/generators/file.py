"""Generators for embedded, single-file databases (SQLite, DuckDB, csvq, ...)."""

import logging
import posixpath
from typing import ClassVar

from pydantic import BaseModel

from ..errors import MissingPathError
from ..fs import FileSystem, is_file, probe_header
from ..options import gen_query_options
from ..url import URL
from .base import GeneratedDSN, Generator

logger = logging.getLogger(__name__)


class OpaqueGenerator(Generator):
    """The DSN is the file path itself, followed by the sorted query options."""

    STYLE: ClassVar[str] = "file"

    def path(self, url: URL) -> str:
        path = url.opaque or url.host + url.path
        if not path:
            raise MissingPathError(url.unaliased_driver)
        return path

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        return GeneratedDSN(self.path(url) + gen_query_options(url.query))


class FileEngine(BaseModel):
    """An embedded engine recognizable by file extension and header magic."""

    model_config = {"frozen": True}

    driver: str
    extensions: tuple[str, ...]
    magic: bytes
    magic_offset: int = 0

    def matches_header(self, header: bytes) -> bool:
        return header[self.magic_offset:self.magic_offset + len(self.magic)] == self.magic


SQLITE3 = FileEngine(driver="sqlite3", extensions=(".sqlite", ".sqlite3", ".db3", ".s3db"), magic=b"SQLite format 3\x00")
DUCKDB = FileEngine(driver="duckdb", extensions=(".duckdb", ".ddb"), magic=b"DUCK", magic_offset=8)


class FileGenerator(OpaqueGenerator):
    """Opaque file path whose engine is guessed from the file itself.

    An extension owned by one engine decides directly. Otherwise (ambiguous
    extensions like ".db", or unknown ones) the header of an existing file
    is matched against each engine's magic. A file that does not exist, or
    whose header matches nothing, falls back to `default_engine`.
    """

    engines: tuple[FileEngine, ...] = (SQLITE3, DUCKDB)
    default_engine: str = "sqlite3"
    header_size: int = 64

    def detect(self, path: str, fs: FileSystem) -> str:
        """Return the driver name of the engine for the file at path."""
        extension = posixpath.splitext(path)[1].lower()
        owners = [engine for engine in self.engines if extension in engine.extensions]
        if len(owners) == 1:
            return owners[0].driver
        if is_file(fs, path):
            header = probe_header(fs, path, self.header_size)
            for engine in self.engines:
                if engine.matches_header(header):
                    logger.debug("%s recognized as %s from its header", path, engine.driver)
                    return engine.driver
        logger.debug("cannot tell the engine of %s, using %s", path, self.default_engine)
        return self.default_engine

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        path = self.path(url)
        return GeneratedDSN(path + gen_query_options(url.query), alt_driver=self.detect(path, fs))
