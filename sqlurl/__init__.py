"""sqlurl: parse database URLs into driver names and connection strings."""

from .errors import (
    DuplicateAliasError,
    DuplicateSchemeError,
    FilesystemProbeError,
    InvalidFieldError,
    InvalidPortError,
    InvalidTransportError,
    MissingComponentError,
    MissingHostError,
    MissingPasswordError,
    MissingPathError,
    MissingUserError,
    RelativePathNotSupportedError,
    SchemeRegistrationError,
    SqlurlError,
    UnknownDriverError,
    UnknownSchemeError,
    UnsupportedCombinationError,
    URLSyntaxError,
)
from .fs import FileSystem, OSFileSystem
from .transport import Transport
from .scheme import Scheme
from .registry import SchemeRegistry, base_schemes, default_registry
from .url import URL
from .parser import Parser, default_parser, parse
from .connection import connect, get_connection, open, register_driver, unregister_driver  # pylint: disable=redefined-builtin
from .credentials import CredentialLookup, apply_credentials


def register(scheme: Scheme) -> Scheme:
    """Register scheme with the default parser's registry."""
    return default_parser().registry.register(scheme)


def unregister(name: str):
    """Remove a scheme from the default parser's registry."""
    return default_parser().registry.unregister(name)


def register_alias(name: str, alias: str) -> Scheme:
    """Add an alias to a scheme of the default parser's registry."""
    return default_parser().registry.register_alias(name, alias)
