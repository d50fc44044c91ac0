"""API key extraction from the HTTP Authorization header.

Accepted form: ``Authorization: ApiKey <key>``

The value is split on every single space character, so runs of spaces yield
empty fields:
- "ApiKey abc"      -> "abc"
- "ApiKey    abc"   -> ""            (second field is empty)
- "  ApiKey abc"    -> malformed     (first field is empty)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from multidict import CIMultiDict, CIMultiDictProxy

AUTHORIZATION_HEADER = "Authorization"
API_KEY_SCHEME = "ApiKey"
MALFORMED_HEADER_MESSAGE = "malformed authorization header"

HeaderCollection = Mapping[str, str | Sequence[str]]


class AuthHeaderError(Exception):
    """Base class for Authorization header extraction failures."""


class NoAuthHeaderError(AuthHeaderError):
    """No Authorization header was included in the request."""

    def __init__(self) -> None:
        super().__init__("no authorization header included")


class MalformedHeaderError(AuthHeaderError):
    """The Authorization header is present but not of the form ``ApiKey <key>``."""

    def __init__(self) -> None:
        super().__init__(MALFORMED_HEADER_MESSAGE)


def _authorization_values(headers: HeaderCollection) -> list[str]:
    """Return every Authorization value in order, matching the name case-insensitively."""
    if isinstance(headers, (CIMultiDict, CIMultiDictProxy)):
        return headers.getall(AUTHORIZATION_HEADER, [])

    values: list[str] = []
    wanted = AUTHORIZATION_HEADER.lower()
    for name, value in headers.items():
        if name.lower() != wanted:
            continue
        if isinstance(value, str):
            values.append(value)
        else:
            values.extend(value)
    return values


def get_api_key(headers: HeaderCollection) -> str:
    """Extract the API key from request headers.

    Only the first Authorization value is considered. Raises NoAuthHeaderError
    when the header is absent or empty and MalformedHeaderError when it cannot
    be parsed.
    """
    values = _authorization_values(headers)
    if not values or not values[0]:
        raise NoAuthHeaderError()

    value = values[0]
    scheme, sep, remainder = value.partition(" ")
    if not sep or not remainder:
        raise MalformedHeaderError()
    if scheme != API_KEY_SCHEME:
        raise MalformedHeaderError()

    return value.split(" ")[1]
