# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Endpoint descriptor parsing.

The API advertises its routes as compact descriptors such as::

    GET,OPTIONS,HEAD /v1/img/<blush,bonk,boop>

i.e. the allowed verbs, the path and an optional ``<...>`` list of subtypes.
``parse_endpoint`` is deliberately lenient: it never rejects a string and
degrades to a best-effort Endpoint instead. ``parse_endpoint_strict`` is the
validating variant for callers that want malformed descriptors to fail.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import DescriptorError

VERB_LIST_SUFFIX = ",OPTIONS,HEAD"
HTTP_METHODS = frozenset({"get", "post", "put", "patch", "delete", "head", "options"})

_SUBTYPE_SECTION_RE = re.compile(r"<(.+)")


def _verb_list_pattern(type_: str) -> str:
    return re.escape(f"{type_.upper()}{VERB_LIST_SUFFIX}") + r"\s*"


@dataclass(frozen=True)
class Endpoint:
    """Parsed endpoint descriptor."""

    type: str
    url: str
    subtypes: tuple[str, ...] | None = None

    @classmethod
    def parse(cls, descriptor: str) -> Endpoint:
        return parse_endpoint(descriptor)

    def to_descriptor(self) -> str:
        """Rebuild a descriptor that parses back to this endpoint."""
        descriptor = f"{self.type.upper()}{VERB_LIST_SUFFIX}{self.url}"
        if self.subtypes is not None:
            names = ",".join(subtype[:-1] if subtype.endswith("/") else subtype for subtype in self.subtypes)
            descriptor += f"/<{names}>"
        return descriptor

    def __str__(self) -> str:
        return self.url


def parse_endpoint(descriptor: str) -> Endpoint:
    """Best-effort parse of a raw descriptor; never raises for string input."""
    type_ = descriptor.split(",")[0].lower()
    prefix = _verb_list_pattern(type_)

    url = re.sub(rf"{prefix}|/<.+", "", descriptor, flags=re.IGNORECASE)

    subtypes = None
    if _SUBTYPE_SECTION_RE.search(descriptor):
        names = re.sub(rf"{prefix}|<|>|'|.+(?=<)", "", descriptor, flags=re.IGNORECASE)
        subtypes = tuple(f"{names.replace(',', '/,')}/".split(","))

    return Endpoint(type=type_, url=url, subtypes=subtypes)


def parse_endpoint_strict(descriptor: str) -> Endpoint:
    """Parse a descriptor, raising DescriptorError instead of degrading."""
    if not isinstance(descriptor, str) or not descriptor.strip():
        raise DescriptorError(str(descriptor), "descriptor is empty")

    endpoint = parse_endpoint(descriptor)
    if endpoint.type not in HTTP_METHODS:
        raise DescriptorError(descriptor, f"unknown HTTP method {endpoint.type!r}")
    if not endpoint.url.startswith("/"):
        raise DescriptorError(descriptor, "path must start with '/'")
    if "<" in descriptor:
        if not descriptor.rstrip().endswith(">") or descriptor.count("<") != 1:
            raise DescriptorError(descriptor, "unterminated subtype list")
        if endpoint.subtypes is None or any(subtype.strip("/ ") == "" for subtype in endpoint.subtypes):
            raise DescriptorError(descriptor, "empty subtype name")
    return endpoint


__all__ = ["Endpoint", "HTTP_METHODS", "parse_endpoint", "parse_endpoint_strict"]
