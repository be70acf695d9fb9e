# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx


class SamiDBError(Exception):
    """Base class for every error raised by the SamiDB client."""


class UnknownEndpointTypeError(SamiDBError, ValueError):
    """A custom endpoint bucket is neither ``get`` nor ``post``."""

    def __init__(self, bucket: str):
        super().__init__(f"Unknown endpoint type: {bucket!r}")
        self.bucket = bucket


class CatalogRetrievalError(SamiDBError):
    """The default endpoint catalog could not be fetched or understood."""

    def __init__(self, message: str = "Could not retrieve default endpoints (likely an issue with the API itself)"):
        super().__init__(message)


class UnknownEndpointError(SamiDBError, LookupError):
    """No registered endpoint matches a logical name."""

    def __init__(self, name: str):
        super().__init__(f"Unknown endpoint: {name!r}")
        self.name = name


class ClientNotReadyError(SamiDBError, RuntimeError):
    """The client was used before its endpoint catalog finished loading."""


class DescriptorError(SamiDBError, ValueError):
    """Raised by the strict descriptor parser for malformed descriptors."""

    def __init__(self, descriptor: str, reason: str):
        super().__init__(f"Malformed endpoint descriptor {descriptor!r}: {reason}")
        self.descriptor = descriptor
        self.reason = reason


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    HTTP_ERROR = "HTTP_ERROR"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCategory.HTTP_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout",
        ErrorCategory.HTTP_ERROR: "API returned an error status",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Unexpected error",
        None: "",
    }
    return mapping.get(category, "Request failed")


__all__ = [
    "CatalogRetrievalError",
    "ClientNotReadyError",
    "DescriptorError",
    "ErrorCategory",
    "SamiDBError",
    "UnknownEndpointError",
    "UnknownEndpointTypeError",
    "categorize_exception",
    "error_category_to_reason",
]
