"""Parse database URLs into driver names and DSNs.

    parser = Parser()
    url = parser.parse("pg://user:pass@localhost/dbname")
    url.driver  # "postgres"
    url.dsn     # "dbname=dbname host=localhost password=pass user=user"

Supported forms:

    scheme[+transport]://[user[:pass]@]host[:port][/path][?query][#fragment]
    scheme[+transport]:opaque[?query]
    /path/to/existing/file.db
"""

import enum
import logging
from functools import cache
from typing import NamedTuple
from urllib.parse import quote, unquote

from pydantic import BaseModel, Field

from .errors import InvalidTransportError, UnknownSchemeError
from .fs import FileSystem, OSFileSystem, is_file
from .registry import SchemeRegistry, default_registry
from .scheme import Scheme
from .transport import Transport
from .url import URL, decompose, encode_credentials

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    """Where a decomposed URL stands with respect to opaque reconciliation."""

    DECOMPOSED = "decomposed"
    RECONCILED = "reconciled"


class _State(NamedTuple):
    url: URL
    text: str
    scheme: Scheme
    explicit_transport: bool
    phase: Phase


class Parser(BaseModel):
    """Resolves URLs against a scheme registry.

    The filesystem is only consulted to tell socket paths from database names
    and to recognize database files; substitute it to parse without touching
    the disk.
    """

    model_config = {"arbitrary_types_allowed": True}

    registry: SchemeRegistry = Field(default_factory=default_registry)
    fs: FileSystem = Field(default_factory=OSFileSystem)

    def parse(self, urlstr: str) -> URL:
        """Parse urlstr into a URL with driver, DSN and transport resolved.

        Raises a SqlurlError subclass on any failure; nothing is returned
        partially.
        """
        state = self._decompose(self._with_scheme(urlstr))
        state = self._reconcile(state)
        url, scheme = state.url, state.scheme

        # an explicit transport on an any-transport scheme names a driver, not a socket type
        names_driver = state.explicit_transport and bool(scheme.transport & Transport.ANY)
        if not names_driver and (url.hostname == "." or (not url.host and url.database)):
            if url.transport != "unix":
                logger.debug("%s: inferring unix transport from %r", url.original_scheme, url.path)
            url = url.model_copy(update={"transport": "unix"})

        if (state.explicit_transport or url.transport != "tcp") and not scheme.transport.permits(url.transport):
            raise InvalidTransportError(scheme.driver, url.transport)

        url = url.model_copy(update={
            "driver": scheme.override or scheme.driver,
            "unaliased_driver": scheme.driver,
            "alias": scheme.primary_alias,
        })
        generated = scheme.generator.generate(url, self.fs)
        return url.model_copy(update={
            "dsn": generated.dsn,
            "alt_driver": generated.alt_driver or scheme.alt_driver,
            "resolved": generated.host_port_db,
        })

    def _with_scheme(self, urlstr: str) -> str:
        """Turn a bare path to an existing file into a `file:` URL."""
        if urlstr and ":" not in urlstr.split("/", 1)[0] and is_file(self.fs, urlstr):
            logger.debug("%s is a file, parsing as file: URL", urlstr)
            return "file:" + quote(urlstr)
        return urlstr

    def _decompose(self, urlstr: str, phase: Phase = Phase.DECOMPOSED) -> _State:
        if phase is Phase.DECOMPOSED:
            urlstr = encode_credentials(urlstr)
        url = decompose(urlstr, decode_credentials=False)
        name, transport, explicit = url.scheme, "tcp", False
        if "+" in url.scheme:
            name, _, transport = url.scheme.rpartition("+")
            explicit = True
        scheme = self.registry.get(name)
        if scheme is None and "+" in name:
            # ODBC driver names may contain "+" themselves: "odbc+Postgres+Unicode"
            first, _, rest = url.scheme.partition("+")
            candidate = self.registry.get(first)
            if candidate is not None and candidate.transport & Transport.ANY:
                scheme, name, transport = candidate, first, rest
        if scheme is None:
            raise UnknownSchemeError(name)
        if scheme.transport & Transport.ANY and explicit:
            transport = url.original_scheme[len(name) + 1:]
        return _State(
            url=url.model_copy(update={"scheme": name, "transport": transport}),
            text=urlstr,
            scheme=scheme,
            explicit_transport=explicit,
            phase=phase,
        )

    def _reconcile(self, state: _State) -> _State:
        """Bring the URL into the form its scheme expects (at most one re-decomposition).

        A scheme that does not take opaque URLs gets "scheme:rest" re-read as
        "scheme://rest"; an opaque scheme gets host and path folded into the
        opaque part. A reconciled state is returned unchanged.
        """
        if state.phase is Phase.RECONCILED:
            return state
        url, scheme = state.url, state.scheme
        if not scheme.opaque and url.opaque:
            # re-read the undecoded text so escapes in the opaque part survive
            rest = state.text[len(url.original_scheme) + 1:]
            logger.debug("re-reading opaque URL as %s", url.original_scheme + "://...")
            return self._decompose(url.original_scheme + "://" + rest, Phase.RECONCILED)
        if scheme.opaque and not url.opaque:
            url = url.model_copy(update={"opaque": unquote(url.host) + url.path, "host": "", "path": ""})
        return state._replace(url=url, phase=Phase.RECONCILED)


@cache
def default_parser() -> Parser:
    """Parser over the base schemes and the real filesystem, shared by the module-level helpers."""
    return Parser()


def parse(urlstr: str) -> URL:
    """Parse urlstr with the default parser."""
    return default_parser().parse(urlstr)
