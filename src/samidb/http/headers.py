# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110), so responses store
them with lowercased names.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def normalize_headers(headers: Mapping[Any, Any] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping (httpx.Headers included)."""
    if not headers:
        return {}
    out: dict[str, str] = {}
    for key, value in headers.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


__all__ = ["normalize_headers"]
