"""Parsed database URL and its presentation helpers (string, short, normalize)."""

from __future__ import annotations

import re
from functools import cached_property
from typing import Optional
from urllib.parse import parse_qs, quote, unquote, urlsplit

from pydantic import BaseModel

from .errors import InvalidPortError, URLSyntaxError
from .options import Values

_USERINFO_SAFE = "$&+,;="
_PATH_SAFE = "/:@!$&'()*+,;="
_FRAGMENT_SAFE = "/?:@!$&'()*+,;="


def quote_userinfo(value: str) -> str:
    """Percent-encode a username or password for the userinfo part of a URL."""
    return quote(value, safe=_USERINFO_SAFE)


def format_url(
    scheme: str = "",
    opaque: str = "",
    username: Optional[str] = None,
    password: Optional[str] = None,
    host: str = "",
    path: str = "",
    raw_query: str = "",
    fragment: str = "",
) -> str:
    """Assemble URL components back into a string.

    `path`, `opaque` and `fragment` are decoded values and get escaped; `host`
    and `raw_query` are written as they are.
    """
    out = scheme + ":" if scheme else ""
    if opaque:
        if opaque.startswith("//"):
            out += "//"
        out += quote(opaque, safe=_PATH_SAFE)
    else:
        if scheme or host or username is not None:
            if host or path or username is not None:
                out += "//"
            if username is not None:
                out += quote_userinfo(username)
                if password is not None:
                    out += ":" + quote_userinfo(password)
                out += "@"
            out += host
        if path and host and not path.startswith("/"):
            out += "/"
        out += quote(path, safe=_PATH_SAFE)
    if raw_query:
        out += "?" + raw_query
    if fragment:
        out += "#" + quote(fragment, safe=_FRAGMENT_SAFE)
    return out


def split_host_port(host: str) -> tuple[str, str]:
    """Split "host:port" (or "[v6]:port") into its hostname and port."""
    if host.startswith("["):
        end = host.find("]")
        if end != -1:
            rest = host[end + 1:]
            return host[1:end], rest[1:] if rest.startswith(":") else ""
    if ":" in host:
        hostname, _, port = host.rpartition(":")
        return hostname, port
    return host, ""


class URL(BaseModel):
    """A database URL decomposed into its components.

    Instances come out of Parser.parse with `driver` and `dsn` filled in;
    `dsn` is what gets handed to the driver's connect call.
    """

    model_config = {"frozen": True}

    original_scheme: str
    """Scheme exactly as written, e.g. "PG+unix"."""
    scheme: str
    """Lowercase scheme token without the transport, e.g. "pg"."""
    transport: str = "tcp"
    username: Optional[str] = None
    password: Optional[str] = None
    host: str = ""
    """Authority host as written, port included ("db:5432")."""
    path: str = ""
    opaque: str = ""
    raw_query: str = ""
    fragment: str = ""

    driver: str = ""
    unaliased_driver: str = ""
    alt_driver: str = ""
    dsn: str = ""
    alias: str = ""
    resolved: Optional[tuple[str, str, str]] = None
    """(host, port, database) as resolved by the generator, when it resolves one."""

    @property
    def hostname(self) -> str:
        return split_host_port(self.host)[0]

    @property
    def port(self) -> str:
        return split_host_port(self.host)[1]

    @property
    def database(self) -> str:
        return self.path.removeprefix("/")

    @property
    def query(self) -> Values:
        """Query parameters as a fresh multimap (safe to modify)."""
        return parse_qs(self.raw_query, keep_blank_values=True)

    @property
    def open_driver(self) -> str:
        """Driver name to open the DSN with."""
        return self.alt_driver or self.driver

    @cached_property
    def host_port_db(self) -> tuple[str, str, str]:
        if self.resolved is not None:
            return self.resolved
        if self.opaque:
            return ("", "", self.opaque)
        return (self.hostname, self.port, self.database)

    def string(self) -> str:
        """Rebuild the URL under its original scheme.

        The password is encoded twice, matching the double decoding done when
        parsing, so the result parses back to the same URL.
        """
        password = self.password
        if password is not None:
            password = quote_userinfo(password)
        return format_url(
            scheme=self.original_scheme,
            opaque=self.opaque,
            username=self.username,
            password=password,
            host=self.host,
            path=self.path,
            raw_query=self.raw_query,
            fragment=self.fragment,
        )

    def __str__(self) -> str:
        return self.string()

    def with_credentials(self, username: str, password: Optional[str]) -> str:
        """Return the URL string with the given credentials in place of the current ones."""
        return self.model_copy(update={"username": username, "password": password}).string()

    def short(self) -> str:
        """Password-free one-line summary, e.g. "pg:user@localhost/dbname"."""
        out = self.alias or self.scheme
        if self.transport != "tcp":
            out += "+" + self.transport
        out += ":"
        if self.username:
            out += self.username + "@"
        out += self.host
        if self.path not in ("", "/"):
            out += self.path
        out += self.opaque
        return out

    def normalize(self, sep: str, empty: str, cut: int = 0) -> str:
        """Join (driver[+transport], host, port, database, username) with sep.

        Blank fields are rendered as `empty`. With cut > 0, blank fields at the
        end are dropped, but never any of the first `cut` fields. No default
        port is filled in, so "pg://h/db" and "pg://h:5432/db" differ.
        """
        driver = self.unaliased_driver or self.scheme
        if self.transport not in ("tcp", "unix"):
            driver += "+" + self.transport
        fields = [driver, *self.host_port_db, self.username or ""]
        if cut > 0:
            while len(fields) > cut and fields[-1] == "":
                fields.pop()
        return sep.join(field if field != "" else empty for field in fields)


_CREDENTIALS_RE = re.compile(
    r"^(?P<prefix>[A-Za-z][A-Za-z0-9+.\-]*:(?://)?)(?P<user>[^:@/?#]*):(?P<password>[^@/?#]*)@"
)
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def encode_credentials(urlstr: str) -> str:
    """Rewrite a `user:password@` segment so that its password decodes twice.

    The password is percent-decoded twice and re-encoded once; the single
    decode done by decompose then yields the doubly decoded value. So
    "p%2540ss", "p%40ss" and "p@ss" all end up as "p@ss".
    """
    match = _CREDENTIALS_RE.match(urlstr)
    if match is None:
        return urlstr
    password = unquote(unquote(match["password"]))
    return (
        match["prefix"] + match["user"] + ":" + quote_userinfo(password) + "@"
        + urlstr[match.end():]
    )


def decompose(urlstr: str, decode_credentials: bool = True) -> URL:
    """Split urlstr into its generic URI components.

    The returned URL has its `scheme` lowercased but still carries any
    "+transport" suffix; nothing is resolved against the registry. Path,
    opaque part and fragment come back percent-decoded.
    """
    if _CONTROL_RE.search(urlstr):
        raise URLSyntaxError(f"invalid control character in URL {urlstr!r}")
    if decode_credentials:
        urlstr = encode_credentials(urlstr)
    try:
        parts = urlsplit(urlstr)
    except ValueError as error:
        raise URLSyntaxError(f"cannot split URL {urlstr!r}: {error}") from error
    # urlsplit lowercases the scheme and skips leading blanks
    original_scheme = urlstr[:len(parts.scheme)]
    if not parts.scheme or original_scheme.lower() != parts.scheme:
        raise URLSyntaxError(f"missing database scheme in {urlstr!r}")
    username = password = None
    host = path = opaque = ""
    if parts.netloc:
        # hostname would come back lowercased; ADODB provider names keep their case
        host = parts.netloc.rpartition("@")[2]
        try:
            parts.port  # raises ValueError for a malformed or out of range port
        except ValueError as error:
            raise InvalidPortError(split_host_port(host)[1]) from error
        if parts.username is not None:
            username = unquote(parts.username)
        if parts.password is not None:
            password = unquote(parts.password)
        path = unquote(parts.path)
    elif parts.path.startswith("/"):
        path = unquote(parts.path)
    else:
        opaque = unquote(parts.path)
    return URL(
        original_scheme=original_scheme,
        scheme=parts.scheme,
        username=username,
        password=password,
        host=host,
        path=path,
        opaque=opaque,
        raw_query=parts.query,
        fragment=unquote(parts.fragment),
    )
