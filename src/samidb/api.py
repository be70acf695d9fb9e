# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level SamiDB API client."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Generator, Mapping
from typing import Any

from .config import ApiOptions
from .endpoint import Endpoint, parse_endpoint
from .errors import (
    CatalogRetrievalError,
    ClientNotReadyError,
    UnknownEndpointError,
    UnknownEndpointTypeError,
    categorize_exception,
    error_category_to_reason,
)
from .http.client import HttpClient, create_default_http_client
from .http.models import HttpRequest
from .registry import EndpointRegistry

logger = logging.getLogger(__name__)

IMAGE_ENDPOINT = "img"
# Shortcut attribute -> subtype of the image endpoint.
IMAGE_SUBTYPES: dict[str, str] = {
    name: name
    for name in (
        "blush",
        "bonk",
        "boop",
        "cry",
        "cuddle",
        "grouphug",
        "hug",
        "kiss",
        "lick",
        "nom",
        "pat",
        "slap",
        "smile",
        "nuggies",
        "corn",
    )
}


class ImageRequest:
    """
    Awaitable returned by the image shortcuts.

    No coroutine exists until it is awaited, so attribute introspection
    (``hasattr``, ``dir``, ``inspect.getmembers``) never leaves one un-awaited.
    """

    __slots__ = ("_api", "subtype")

    def __init__(self, api: SamiDBApi, subtype: str):
        self._api = api
        self.subtype = subtype

    def __await__(self) -> Generator[Any, None, Any]:
        return self._api.get(IMAGE_ENDPOINT, self.subtype).__await__()

    def __repr__(self) -> str:
        return f"<ImageRequest {IMAGE_ENDPOINT}/{self.subtype}>"


class SamiDBApi:
    """
    Client for the SamiDB image API.

    Construction only validates configuration; the default endpoint catalog is
    fetched by ``initialize()``. Use ``await SamiDBApi.create(...)`` or
    ``async with SamiDBApi(...) as api`` to get a ready client::

        api = await SamiDBApi.create(version=1)
        url = await api.hug
    """

    def __init__(
        self,
        options: ApiOptions | Mapping[str, Any] | None = None,
        *,
        http_client: HttpClient | None = None,
        **overrides: Any,
    ):
        if not isinstance(options, ApiOptions):
            options = ApiOptions.from_mapping(options)
        self.options = options.merged(overrides)
        self.http_client = http_client or create_default_http_client()
        self.endpoints = EndpointRegistry()
        self._custom_endpoints = self._parse_custom_endpoints()
        self._ready = False

    @classmethod
    async def create(
        cls,
        options: ApiOptions | Mapping[str, Any] | None = None,
        *,
        http_client: HttpClient | None = None,
        **overrides: Any,
    ) -> SamiDBApi:
        """Build a client and wait for its endpoint registry to be populated."""
        api = cls(options, http_client=http_client, **overrides)
        await api.initialize()
        return api

    @property
    def ready(self) -> bool:
        return self._ready

    async def initialize(self) -> None:
        """Populate the registry: remote catalog first, then custom endpoints."""
        if self._ready:
            return

        registry = EndpointRegistry()
        if not self.options.ignore_default_endpoints:
            for bucket, endpoint in await self._get_default_endpoints():
                registry.add(bucket, endpoint)
        for bucket, endpoints in self._custom_endpoints:
            registry.extend(bucket, endpoints)

        self.endpoints = registry
        self._ready = True
        logger.debug("Registered %d endpoint(s): %s", len(registry), registry.as_dict())

    async def __aenter__(self) -> SamiDBApi:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, endpoint: str, subtype: str | None = None) -> Any:
        """
        Call a registered endpoint by name.

        Returns the ``url`` field of a JSON object body when it is set,
        otherwise the decoded body. HTTP errors propagate unchanged.
        """
        if not self._ready:
            raise ClientNotReadyError("Client is not initialized; await SamiDBApi.create() or initialize() first")

        match = self.endpoints.find(f"/{endpoint}", f"/v{self.options.version}/{endpoint}")
        if match is None:
            raise UnknownEndpointError(endpoint)

        url = self.get_url(endpoint)
        if subtype is not None:
            url = f"{url}/{subtype}"

        response = await self.http_client.request(HttpRequest(url=url, method=match.type.upper()))
        data = response.data()
        if isinstance(data, dict) and data.get("url"):
            return data["url"]
        return data

    def get_url(self, endpoint: str) -> str:
        """Return the absolute URL of an endpoint at the configured API version."""
        return f"{self.options.api_url}/v{self.options.version}/{endpoint}"

    def image(self, name: str) -> Awaitable[Any]:
        """Awaitable for a random image of one of the ``IMAGE_SUBTYPES`` categories."""
        try:
            subtype = IMAGE_SUBTYPES[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} has no image shortcut {name!r}") from None
        return ImageRequest(self, subtype)

    def __getattr__(self, name: str) -> Any:
        if name in IMAGE_SUBTYPES:
            return self.image(name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(IMAGE_SUBTYPES))

    def __str__(self) -> str:
        return "[SamiDBApi]"

    def _parse_custom_endpoints(self) -> list[tuple[str, list[Endpoint]]]:
        parsed = []
        for bucket, descriptors in self.options.endpoints.items():
            if bucket not in self.endpoints:
                raise UnknownEndpointTypeError(bucket)
            parsed.append((bucket, [parse_endpoint(descriptor) for descriptor in descriptors]))
        return parsed

    async def _get_default_endpoints(self) -> list[tuple[str, Endpoint]]:
        try:
            response = await self.http_client.request(HttpRequest(url=self.get_url("endpoints")))
        except Exception as exc:
            category = categorize_exception(exc)
            logger.warning("Endpoint catalog request failed (%s): %s", error_category_to_reason(category), exc)
            raise CatalogRetrievalError() from exc

        try:
            data = response.data()
            if not isinstance(data, list):
                raise TypeError(f"expected a list of descriptors, got {type(data).__name__}")
            entries = []
            for descriptor in data:
                bucket = descriptor.split(",")[0].lower()
                if bucket not in self.endpoints:
                    raise KeyError(bucket)
                entries.append((bucket, parse_endpoint(descriptor)))
        except (TypeError, AttributeError, KeyError) as exc:
            logger.warning("Endpoint catalog is malformed: %r", exc)
            raise CatalogRetrievalError() from exc
        return entries


__all__ = ["IMAGE_ENDPOINT", "IMAGE_SUBTYPES", "ImageRequest", "SamiDBApi"]
