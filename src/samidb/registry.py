# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Registry of known endpoints, partitioned by HTTP verb."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .endpoint import Endpoint

BUCKETS: tuple[str, ...] = ("get", "post")


class EndpointRegistry:
    """
    Ordered ``get`` and ``post`` buckets of parsed endpoints.

    Nothing is deduplicated: when two endpoints share a url, lookups return
    the one registered first.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, list[Endpoint]] = {bucket: [] for bucket in BUCKETS}

    def __contains__(self, bucket: object) -> bool:
        return bucket in self._buckets

    def __iter__(self) -> Iterator[Endpoint]:
        for bucket in BUCKETS:
            yield from self._buckets[bucket]

    def __len__(self) -> int:
        return sum(len(endpoints) for endpoints in self._buckets.values())

    def bucket(self, name: str) -> tuple[Endpoint, ...]:
        return tuple(self._buckets[name])

    def add(self, bucket: str, endpoint: Endpoint) -> None:
        """Append ``endpoint`` to ``bucket``; raises KeyError for unknown buckets."""
        self._buckets[bucket].append(endpoint)

    def extend(self, bucket: str, endpoints: Iterable[Endpoint]) -> None:
        self._buckets[bucket].extend(endpoints)

    def find(self, *urls: str) -> Endpoint | None:
        """Return the first endpoint whose url is one of ``urls``."""
        for endpoint in self:
            if endpoint.url in urls:
                return endpoint
        return None

    def as_dict(self) -> dict[str, list[str]]:
        return {bucket: [endpoint.url for endpoint in endpoints] for bucket, endpoints in self._buckets.items()}


__all__ = ["BUCKETS", "EndpointRegistry"]
