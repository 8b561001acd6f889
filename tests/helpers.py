"""Shared test helpers."""

import stat

from sqlurl.errors import FilesystemProbeError


SQLITE_HEADER = b"SQLite format 3\x00" + b"\x10\x00" + b"\x00" * 46
DUCKDB_HEADER = b"\x00" * 8 + b"DUCK" + b"\x00" * 52


class FakeFileSystem:
    """In-memory FileSystem: declared sockets, directories and files; everything else is absent.

    Parent directories of every declared entry exist too. Probed paths are
    recorded in `probed`.
    """

    def __init__(self, sockets=(), dirs=(), files=None, unreadable=()):
        self.modes: dict[str, int] = {}
        self.files: dict[str, bytes] = dict(files or {})
        self.unreadable = set(unreadable)
        self.probed: list[str] = []
        for path in dirs:
            self._add(path, stat.S_IFDIR | 0o755)
        for path in sockets:
            self._add(path, stat.S_IFSOCK | 0o777)
        for path in self.files:
            self._add(path, stat.S_IFREG | 0o644)

    def _add(self, path: str, mode: int):
        self.modes[path] = mode
        parent = path.rsplit("/", 1)[0]
        while parent.startswith("/") and parent not in self.modes:
            self.modes[parent] = stat.S_IFDIR | 0o755
            parent = parent.rsplit("/", 1)[0]

    def mode(self, path: str) -> int:
        self.probed.append(path)
        try:
            return self.modes[path]
        except KeyError as error:
            raise FilesystemProbeError(path) from error

    def read_header(self, path: str, size: int) -> bytes:
        if path in self.unreadable or path not in self.files:
            raise FilesystemProbeError(path)
        return self.files[path][:size]
