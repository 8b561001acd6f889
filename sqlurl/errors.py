"""Exceptions raised while parsing database URLs and generating DSNs.

Every error derives from SqlurlError (itself a ValueError), so callers can
catch the whole family or a single kind. The class is the kind: compare with
isinstance / pytest.raises, not on the message.
"""


class SqlurlError(ValueError):
    """Base class for all sqlurl errors."""


class URLSyntaxError(SqlurlError):
    """The string is not a well-formed URL (missing scheme, control characters, ...)."""


class UnknownSchemeError(SqlurlError):
    """No scheme is registered under the given driver name or alias."""

    def __init__(self, scheme: str):
        super().__init__(f"unknown database scheme `{scheme}`")
        self.scheme = scheme


class InvalidTransportError(SqlurlError):
    """The transport is not allowed by the scheme's capabilities."""

    def __init__(self, scheme: str, transport: str):
        super().__init__(f"invalid transport protocol `{transport}` for scheme `{scheme}`")
        self.scheme = scheme
        self.transport = transport


class MissingComponentError(SqlurlError):
    """A URL component the generator cannot work without is absent."""

    component = ""

    def __init__(self, scheme: str = ""):
        message = f"missing {self.component}"
        if scheme:
            message = f"{scheme}: {message}"
        super().__init__(message)
        self.scheme = scheme


class MissingHostError(MissingComponentError):
    component = "host"


class MissingUserError(MissingComponentError):
    component = "user"


class MissingPathError(MissingComponentError):
    component = "path"


class InvalidFieldError(SqlurlError):
    """A URL component is present but cannot be interpreted."""

    field = ""

    def __init__(self, value: str):
        super().__init__(f"invalid {self.field} `{value}`")
        self.value = value


class InvalidPortError(InvalidFieldError):
    field = "port"


class UnsupportedCombinationError(SqlurlError):
    """The components are individually valid but the driver cannot use them together."""


class MissingPasswordError(UnsupportedCombinationError):
    """A username was given without the password the driver requires."""


class RelativePathNotSupportedError(UnsupportedCombinationError):
    """The driver only accepts absolute socket paths."""


class FilesystemProbeError(SqlurlError):
    """A filesystem entry could not be inspected.

    Socket and file resolution absorb this error and fall back to the path as
    given; it only escapes when a FileSystem is used directly.
    """

    def __init__(self, path: str):
        super().__init__(f"cannot inspect `{path}`")
        self.path = path


class SchemeRegistrationError(SqlurlError):
    """A registry mutation conflicts with the registered schemes."""


class DuplicateSchemeError(SchemeRegistrationError):
    def __init__(self, driver: str):
        super().__init__(f"scheme `{driver}` already registered")
        self.driver = driver


class DuplicateAliasError(SchemeRegistrationError):
    def __init__(self, alias: str):
        super().__init__(f"alias `{alias}` already registered")
        self.alias = alias


class UnknownDriverError(SqlurlError):
    """No connection factory is registered for the driver."""

    def __init__(self, driver: str):
        super().__init__(f"no connection factory registered for driver `{driver}`")
        self.driver = driver
