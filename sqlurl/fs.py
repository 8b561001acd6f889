"""Filesystem capability used to disambiguate socket paths and database files.

Generators never touch the disk directly: they go through a FileSystem handed
to them by the Parser, so tests can substitute a synthetic filesystem.
"""

import logging
import os
import posixpath
import stat
from typing import Protocol, runtime_checkable

from .errors import FilesystemProbeError

logger = logging.getLogger(__name__)


@runtime_checkable
class FileSystem(Protocol):
    """Read-only view of a filesystem."""

    def mode(self, path: str) -> int:
        """Return the st_mode of path; raise FilesystemProbeError if it cannot be inspected."""
        ...  # pylint: disable=unnecessary-ellipsis

    def read_header(self, path: str, size: int) -> bytes:
        """Return at most size bytes from the start of path; raise FilesystemProbeError on failure."""
        ...  # pylint: disable=unnecessary-ellipsis


class OSFileSystem:
    """FileSystem backed by the operating system."""

    def mode(self, path: str) -> int:
        try:
            return os.stat(path).st_mode
        except (OSError, ValueError) as error:
            raise FilesystemProbeError(path) from error

    def read_header(self, path: str, size: int) -> bytes:
        try:
            with open(path, "rb") as file:
                return file.read(size)
        except (OSError, ValueError) as error:
            raise FilesystemProbeError(path) from error


def probe_mode(fs: FileSystem, path: str) -> int:
    """Return the mode of path, or 0 when it does not exist or cannot be inspected."""
    try:
        return fs.mode(path)
    except FilesystemProbeError:
        logger.debug("cannot probe %s, treating as absent", path)
        return 0


def probe_header(fs: FileSystem, path: str, size: int) -> bytes:
    """Return the first size bytes of path, or b"" when it cannot be read."""
    try:
        return fs.read_header(path, size)[:size]
    except FilesystemProbeError:
        logger.debug("cannot read header of %s", path)
        return b""


def is_socket(fs: FileSystem, path: str) -> bool:
    return stat.S_ISSOCK(probe_mode(fs, path))


def is_dir(fs: FileSystem, path: str) -> bool:
    return stat.S_ISDIR(probe_mode(fs, path))


def is_file(fs: FileSystem, path: str) -> bool:
    return stat.S_ISREG(probe_mode(fs, path))


def exists(fs: FileSystem, path: str) -> bool:
    return probe_mode(fs, path) != 0


def join_path(*parts: str) -> str:
    """Join the non-empty parts with "/" and clean the result ("" if all are empty)."""
    parts = [part for part in parts if part]
    if not parts:
        return ""
    return posixpath.normpath("/".join(parts))


def resolve_socket(path: str, fs: FileSystem) -> tuple[str, str]:
    """Split path into (socket, database).

    Walks from the leaf upward and stops at the first entry that is a unix
    socket; whatever follows it is the database name. Without a socket on
    disk, the whole path is the socket and the database name is empty.
    """
    directory = path
    while directory not in ("", "/", "."):
        if is_socket(fs, directory):
            return directory, path[len(directory):].strip("/")
        directory = posixpath.dirname(directory)
    return path, ""


def resolve_dir(path: str, fs: FileSystem) -> tuple[str, str, str]:
    """Split path into (directory, port, database).

    Like resolve_socket, but stops at the first directory, and accepts a
    `:port` suffix on the directory (e.g. "/var/run/postgresql:5433/mydb").
    """
    directory = path
    while directory not in ("", "/", "."):
        port = ""
        colon, slash = directory.rfind(":"), directory.rfind("/")
        if colon != -1 and colon > slash:
            port = directory[colon + 1:]
            directory = directory[:colon]
        if is_dir(fs, directory):
            rest = path[len(directory):]
            if port and rest.startswith(":" + port):
                rest = rest[len(port) + 1:]
            return directory, port, rest.removeprefix("/")
        directory = directory[:slash] if slash != -1 else ""
    return path, "", ""
