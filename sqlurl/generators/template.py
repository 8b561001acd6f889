"""Template-merge generator: a fixed base URL supplies defaults the input overrides."""

from typing import ClassVar
from urllib.parse import parse_qs

from pydantic import field_validator

from ..errors import SqlurlError
from ..fs import FileSystem
from ..options import encode_query
from ..url import URL, decompose, format_url, split_host_port
from .base import GeneratedDSN, Generator


class TemplateGenerator(Generator):
    """Merge the URL into `template`.

    Every component present in the input (user, host, port, path, each query
    key, fragment) replaces the template's; the rest comes from the template.
    Multiple values of one query key are joined with a space.
    """

    STYLE: ClassVar[str] = "template"

    template: str

    @field_validator("template")
    @classmethod
    def _check_template(cls, value: str) -> str:
        try:
            decompose(value)
        except SqlurlError as error:
            raise ValueError(f"invalid template URL `{value}`: {error}") from error
        return value

    def generate(self, url: URL, fs: FileSystem) -> GeneratedDSN:
        base = decompose(self.template)
        username, password = base.username, base.password
        if url.username is not None:
            username, password = url.username, url.password
        hostname, port = split_host_port(base.host)
        if url.hostname:
            hostname = url.hostname
        if url.port:
            port = url.port
        if ":" in hostname:
            hostname = f"[{hostname}]"
        host = hostname + (":" + port if port else "")
        query = parse_qs(base.raw_query, keep_blank_values=True)
        for key, values in url.query.items():
            query[key] = [" ".join(values)]
        dsn = format_url(
            scheme=base.original_scheme,
            opaque=url.opaque or base.opaque,
            username=username,
            password=password,
            host=host,
            path=url.path or base.path,
            raw_query=encode_query(query),
            fragment=url.fragment or base.fragment,
        )
        return GeneratedDSN(dsn)
