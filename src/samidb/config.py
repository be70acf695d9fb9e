# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for the SamiDB client."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any

from .version import __version__

DEFAULT_API_URL = "http://api.samidb.xyz"
DEFAULT_API_VERSION = 1
DEFAULT_USER_AGENT = f"samidb-python/{__version__}"

# camelCase keys of the documented configuration surface
_OPTION_ALIASES = {
    "apiURL": "api_url",
    "apiUrl": "api_url",
    "ignoreDefaultEndpoints": "ignore_default_endpoints",
}


def _float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP transport defaults. A timeout of None disables httpx timeouts."""

    timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> HttpSettings:
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("SAMIDB_HTTP_TIMEOUT", cls.timeout)
        if timeout is not None and timeout <= 0:
            timeout = None
        return cls(
            timeout=timeout,
            user_agent=os.getenv("SAMIDB_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("SAMIDB_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("SAMIDB_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


@dataclass(frozen=True)
class ApiOptions:
    """
    Client configuration, fixed for the lifetime of one SamiDBApi instance.

    ``endpoints`` maps a bucket name (``get`` / ``post``) to raw endpoint
    descriptors that are registered after the remote catalog. It is stored as a
    read-only mapping of tuples.
    """

    version: int = DEFAULT_API_VERSION
    api_url: str = DEFAULT_API_URL
    ignore_default_endpoints: bool = False
    endpoints: Mapping[str, Sequence[str]] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if isinstance(self.version, bool) or not isinstance(self.version, int) or self.version < 1:
            raise ValueError(f"API version must be an integer >= 1, got {self.version!r}")
        object.__setattr__(self, "api_url", str(self.api_url).rstrip("/"))
        object.__setattr__(
            self,
            "endpoints",
            MappingProxyType(
                {str(bucket): tuple(descriptors) for bucket, descriptors in dict(self.endpoints or {}).items()}
            ),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ApiOptions:
        """Build options from a camelCase or snake_case mapping; absent keys keep defaults."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in dict(data or {}).items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise TypeError(f"Unknown API option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_env(cls) -> ApiOptions:
        """Create options from environment variables (evaluated at call time)."""
        version = _int_env("SAMIDB_API_VERSION", DEFAULT_API_VERSION)
        if version < 1:
            version = DEFAULT_API_VERSION
        return cls(
            version=version,
            api_url=os.getenv("SAMIDB_API_URL", DEFAULT_API_URL),
            ignore_default_endpoints=_bool_env("SAMIDB_IGNORE_DEFAULT_ENDPOINTS", False),
        )

    def merged(self, overrides: Mapping[str, Any] | None = None) -> ApiOptions:
        """Return a copy with ``overrides`` (camelCase or snake_case) applied."""
        if not overrides:
            return self
        changes = {_OPTION_ALIASES.get(key, key): value for key, value in overrides.items()}
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise TypeError(f"Unknown API option(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes)


def load_api_options() -> ApiOptions:
    """Load API options from environment with the documented defaults."""
    return ApiOptions.from_env()


__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_API_VERSION",
    "DEFAULT_USER_AGENT",
    "ApiOptions",
    "HttpSettings",
    "load_api_options",
    "load_http_settings",
]
