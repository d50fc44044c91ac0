"""aiohttp middleware: run the ApiKey extractor on every request."""

from __future__ import annotations

import logging
from typing import Any

from aiohttp import web

from apikeyauth.auth import (
    API_KEY_SCHEME,
    MALFORMED_HEADER_MESSAGE,
    MalformedHeaderError,
    NoAuthHeaderError,
    get_api_key,
)

log = logging.getLogger(__name__)

REQUEST_KEY = "api_key"

_ALLOWED_MALFORMED_STATUSES = {400, 401}


def _mask_key(raw_key: str) -> str:
    """Return last 6 characters of the key for debugging.

    Keys of 6 characters or fewer are hidden entirely.
    """
    if len(raw_key) <= 6:
        return "***"
    return raw_key[-6:]


def _unauthorized(text: str) -> web.Response:
    return web.Response(
        status=401, text=text, headers={"WWW-Authenticate": API_KEY_SCHEME}
    )


def _malformed(status: int) -> web.Response:
    if status == 401:
        return _unauthorized(MALFORMED_HEADER_MESSAGE)
    return web.Response(status=status, text=MALFORMED_HEADER_MESSAGE)


def api_key_middleware(config: dict[str, Any]):
    """Build a middleware that stores the extracted key at request["api_key"].

    The key is not checked against any store; that is left to the handlers.
    """
    auth_config = config["auth"]
    malformed_status = int(auth_config["malformed_status"])
    if malformed_status not in _ALLOWED_MALFORMED_STATUSES:
        raise ValueError(
            f"auth.malformed_status must be one of "
            f"{sorted(_ALLOWED_MALFORMED_STATUSES)}, got {malformed_status}"
        )
    reject_empty_key = bool(auth_config["reject_empty_key"])
    exempt_paths = frozenset(auth_config["exempt_paths"])

    @web.middleware
    async def middleware(request: web.Request, handler):
        if request.path in exempt_paths:
            return await handler(request)

        try:
            key = get_api_key(request.headers)
        except NoAuthHeaderError:
            log.debug("Rejected %s: no authorization header", request.path)
            return _unauthorized("missing authorization header")
        except MalformedHeaderError:
            log.debug("Rejected %s: malformed authorization header", request.path)
            return _malformed(malformed_status)

        if not key and reject_empty_key:
            log.debug("Rejected %s: empty api key", request.path)
            return _malformed(malformed_status)

        log.debug("Accepted %s: key=...%s", request.path, _mask_key(key))
        request[REQUEST_KEY] = key
        return await handler(request)

    return middleware
