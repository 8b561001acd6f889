"""Builders for option strings: plain key/value lists, ODBC strings and URL queries."""

from typing import Iterable
from urllib.parse import urlencode

Values = dict[str, list[str]]


def gen_options(
    values: Values,
    joiner: str = "",
    assign: str = "=",
    sep: str = " ",
    value_sep: str = ",",
    skip_when_empty: bool = True,
    ignore: Iterable[str] = (),
) -> str:
    """Join values into a deterministic option string.

    Keys are sorted. Multiple values for a key are joined with value_sep.
    Keys starting with one of the ignore prefixes (case-insensitive) are left
    out. Empty values are dropped when skip_when_empty, otherwise the bare key
    is emitted. joiner is prepended when anything is emitted.

    >>> gen_options({"port": ["5432"], "host": ["db"]})
    'host=db port=5432'
    """
    prefixes = tuple(prefix.lower() for prefix in ignore)
    options = []
    for key in sorted(values):
        if prefixes and key.lower().startswith(prefixes):
            continue
        value = value_sep.join(values[key])
        if skip_when_empty and value == "":
            continue
        options.append(key + (assign + value if value != "" else ""))
    if not options:
        return ""
    return joiner + sep.join(options)


def gen_options_odbc(values: Values, skip_when_empty: bool = True, ignore: Iterable[str] = ()) -> str:
    """ODBC style: `Key=value;Other=value`."""
    return gen_options(values, "", "=", ";", ",", skip_when_empty, ignore)


def gen_query_options(values: Values) -> str:
    """Encode values as a sorted query string, with its leading "?" (empty if nothing to encode)."""
    encoded = encode_query(values)
    return "?" + encoded if encoded else ""


def encode_query(values: Values) -> str:
    return urlencode([(key, value) for key in sorted(values) for value in values[key]])


def convert_options(values: Values, pairs: dict[str, str]) -> Values:
    """Return a copy of values where each value found in pairs is replaced by its mapping."""
    return {key: [pairs.get(value, value) for value in items] for key, items in values.items()}


def set_option(values: Values, key: str, value: str) -> None:
    """Replace every value of key with value, like url.Values.Set."""
    values[key] = [value]
