# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import HttpSettings, load_http_settings
from .client import HttpClient
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """
    Asynchronous httpx client wrapper.

    Without an injected ``client`` every request runs in its own short-lived
    ``httpx.AsyncClient``, so nothing needs closing. An injected client is
    used as-is and stays owned by the caller.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._client = client

    async def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)

        logger.debug("%s %s", request.method, request.url)
        if self._client is not None:
            resp = await self._send(self._client, request, headers)
        else:
            async with httpx.AsyncClient(
                follow_redirects=self.settings.allow_redirects,
                timeout=self.settings.timeout,
                verify=self.settings.verify_ssl,
            ) as client:
                resp = await self._send(client, request, headers)

        return HttpResponse(
            status_code=resp.status_code,
            headers=normalize_headers(resp.headers),
            text=resp.text,
            content=resp.content,
            url=str(resp.url),
        )

    async def _send(self, client: httpx.AsyncClient, request: HttpRequest, headers: dict[str, str]) -> httpx.Response:
        resp = await client.request(
            request.method,
            request.url,
            headers=headers,
            content=request.body,
            follow_redirects=self.settings.allow_redirects,
        )
        resp.raise_for_status()
        return resp
