"""
URI helpers.

Escaping follows the Go ``net/url`` rules the Camel runtime expects:
query components escape everything except unreserved characters (space
becomes ``+``), path segments additionally keep ``$&+,:;=@``.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote, quote_plus

_PATH_SEGMENT_SAFE = "$&+,:;=@"


def query_escape(value: str) -> str:
    return quote_plus(value, safe="")


def path_escape(value: str) -> str:
    return quote(value, safe=_PATH_SEGMENT_SAFE)


def append_parameters(uri: str, params: Mapping[str, str] | None) -> str:
    """
    Append parameters to a URI as a query string.

    Keys are sorted so that the result does not depend on the mapping's
    iteration order. Existing query strings are extended with ``&``.

    Example:
        append_parameters("log:info", {"showAll": "true", "level": "WARN"})
        # "log:info?level=WARN&showAll=true"
    """
    if not params:
        return uri
    prefix = "&" if "?" in uri else "?"
    parts = [uri]
    for key in sorted(params):
        parts.append(f"{prefix}{query_escape(key)}={query_escape(params[key])}")
        prefix = "&"
    return "".join(parts)
