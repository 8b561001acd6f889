"""Base Generator type: subclasses turn a parsed URL into a driver DSN."""

from abc import ABC, abstractmethod
from typing import ClassVar, NamedTuple, Optional

from pydantic import BaseModel

from ..fs import FileSystem
from ..url import URL


class GeneratedDSN(NamedTuple):
    """What a generator produces for one URL."""

    dsn: str
    alt_driver: str = ""
    """Driver name to open the DSN with, when it differs from the scheme's."""
    host_port_db: Optional[tuple[str, str, str]] = None
    """(host, port, database) when the generator had to resolve them (socket paths)."""


class Generator(BaseModel, ABC):
    """Base for DSN generators; one subclass per output grammar.

    Generators are pure functions of the URL, except for what they learn
    through the FileSystem they are given.
    """

    model_config = {"frozen": True}

    STYLE: ClassVar[str] = ""
    """Generator family: passthrough, template, keyvalue, positional, socket or file."""

    @abstractmethod
    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        """Return the DSN for url; raise a SqlurlError if the URL cannot be expressed."""
        ...  # pylint: disable=unnecessary-ellipsis
