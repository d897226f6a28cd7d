"""Parsing of caller-supplied version tokens for optimistic concurrency."""

import re

from recipe_api.domain.failures import VersionInvalid

# Leading integer, like a lenient integer parse: "7", " 7", "-1", "3abc" → 3
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)", re.ASCII)


def parse_version(token: str | None) -> int | VersionInvalid:
    """Return the version carried by ``token`` or a ``VersionInvalid`` failure.

    Negative versions are returned as-is; they simply never match a stored
    version and are rejected later by the currency check.
    """
    if token is None:
        return VersionInvalid(None)

    match = _LEADING_INT.match(token)
    if match is None:
        return VersionInvalid(token)
    return int(match.group(1))
