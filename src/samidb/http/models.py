# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the SamiDB client."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None


@dataclass
class HttpResponse:
    """Normalized HTTP response; only produced for successful (2xx) exchanges."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None

    def data(self) -> Any:
        """
        Decode the body: JSON when it parses as JSON, otherwise the raw text.

        The API does not always label JSON bodies, so the content type is not
        consulted.
        """
        if not self.text:
            return self.text
        try:
            return json.loads(self.text)
        except ValueError:
            return self.text
