"""Scheme descriptor: a driver identity, its aliases, transports and DSN generator."""

from pydantic import BaseModel, field_validator

from .generators.base import Generator
from .transport import Transport


def sort_aliases(aliases) -> tuple[str, ...]:
    """Sort aliases by length, then alphabetically; the first one is the primary alias."""
    return tuple(sorted(set(aliases), key=lambda alias: (len(alias), alias)))


class Scheme(BaseModel):
    """A registered database scheme.

    `driver` is the canonical token; `override` is the driver name exposed in
    parsed URLs for wire-compatible databases (e.g. cockroachdb speaks
    postgres); `alt_driver` is the name to open the DSN with when it differs
    from the exposed one.
    """

    model_config = {"frozen": True}

    driver: str
    generator: Generator
    transport: Transport = Transport.NONE
    opaque: bool = False
    aliases: tuple[str, ...] = ()
    override: str = ""
    alt_driver: str = ""

    @field_validator("driver")
    @classmethod
    def _check_driver(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("Scheme driver must not be empty")
        return value

    @field_validator("aliases", mode="before")
    @classmethod
    def _normalize_aliases(cls, value) -> tuple[str, ...]:
        if value is None:
            return ()
        return sort_aliases(alias.strip().lower() for alias in value if alias and alias.strip())

    @property
    def style(self) -> str:
        """Style tag of the generator (see Generator.STYLE)."""
        return self.generator.STYLE

    @property
    def primary_alias(self) -> str:
        return self.aliases[0] if self.aliases else self.driver
