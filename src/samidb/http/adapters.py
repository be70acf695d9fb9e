# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient for tests and offline use."""

from __future__ import annotations

import json
from typing import Any

import httpx

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient.

    Responses are keyed by ``(METHOD, url)``. A registered exception is raised
    instead of returned, and unknown requests fail like a 404 would.
    """

    def __init__(self, responses: dict[tuple[str, str], HttpResponse | Exception] | None = None):
        self._responses = dict(responses or {})
        self.requests: list[HttpRequest] = []

    def add(self, url: str, response: HttpResponse | Exception, *, method: str = "GET") -> None:
        self._responses[(method.upper(), url)] = response

    def add_json(self, url: str, payload: Any, *, method: str = "GET", status_code: int = 200) -> None:
        text = json.dumps(payload)
        self.add(
            url,
            HttpResponse(
                status_code=status_code,
                headers={"content-type": "application/json"},
                text=text,
                content=text.encode("utf-8"),
                url=url,
            ),
            method=method,
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        response = self._responses.get((request.method.upper(), request.url))
        if isinstance(response, Exception):
            raise response
        if response is None:
            stub_request = httpx.Request(request.method, request.url)
            raise httpx.HTTPStatusError(
                "No stubbed response configured",
                request=stub_request,
                response=httpx.Response(404, request=stub_request),
            )
        return response
