"""Inject credentials found by an external lookup (e.g. a password file) into a URL."""

import logging
from typing import Optional, Protocol

from .parser import Parser, default_parser
from .url import URL

logger = logging.getLogger(__name__)


class CredentialLookup(Protocol):
    """Finds credentials for a URL.

    `key` is `url.normalize(":", "", 3)`, i.e. "driver:host:port[:database[:user]]";
    entries may use "*" as a per-field wildcard. Returns (username, password)
    or None when nothing matches.
    """

    def __call__(self, url: URL, key: str) -> Optional[tuple[str, str]]:
        ...  # pylint: disable=unnecessary-ellipsis


def apply_credentials(url: URL, lookup: CredentialLookup, parser: Optional[Parser] = None) -> URL:
    """Return url re-parsed with the credentials lookup finds for it.

    URLs that already carry a password, and URLs lookup has nothing for, are
    returned as they are.
    """
    if url.password is not None:
        return url
    match = lookup(url, url.normalize(":", "", 3))
    if match is None:
        return url
    username, password = match
    if username == "*":
        username = url.username or ""
    logger.debug("credentials found for %s", url.short())
    return (parser or default_parser()).parse(url.with_credentials(username, password))
