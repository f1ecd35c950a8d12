"""Header-injecting ``httpx`` transport decorator.

Purpose:
    Attach a fixed set of HTTP headers to every outgoing request regardless of
    which SDK issued it. The SDK is handed an ``httpx.Client`` whose transport
    is this decorator; requests pass through unchanged apart from the headers.

External dependencies:
    - ``httpx`` transport API (``BaseTransport.handle_request``).

Failure modes:
    - Errors from the wrapped transport propagate unchanged.
"""

from __future__ import annotations

from typing import Mapping, Optional

import httpx


class HeaderTransport(httpx.BaseTransport):
    """Set static headers on each request, then delegate to ``base``.

    Existing values for the same header names are replaced.
    """

    def __init__(self, headers: Mapping[str, str], base: Optional[httpx.BaseTransport] = None) -> None:
        self._headers = dict(headers)
        self._base = base if base is not None else httpx.HTTPTransport()

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        for name, value in self._headers.items():
            request.headers[name] = value
        return self._base.handle_request(request)

    def close(self) -> None:
        self._base.close()


__all__ = ["HeaderTransport"]
