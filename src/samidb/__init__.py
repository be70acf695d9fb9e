# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
SamiDB API client.

An async client for the SamiDB image API. Endpoints are discovered from the
remote catalog and/or caller-supplied descriptors, HTTP behavior is abstracted
behind an injectable client interface, and parsed endpoints are modeled as
frozen dataclasses.
"""

from .api import IMAGE_SUBTYPES, ImageRequest, SamiDBApi
from .config import ApiOptions, HttpSettings, load_api_options, load_http_settings
from .endpoint import Endpoint, parse_endpoint, parse_endpoint_strict
from .errors import (
    CatalogRetrievalError,
    ClientNotReadyError,
    DescriptorError,
    ErrorCategory,
    SamiDBError,
    UnknownEndpointError,
    UnknownEndpointTypeError,
)
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .registry import EndpointRegistry
from .version import __version__

__all__ = [
    "ApiOptions",
    "CatalogRetrievalError",
    "ClientNotReadyError",
    "DescriptorError",
    "Endpoint",
    "EndpointRegistry",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "IMAGE_SUBTYPES",
    "ImageRequest",
    "SamiDBApi",
    "SamiDBError",
    "StubHttpClient",
    "UnknownEndpointError",
    "UnknownEndpointTypeError",
    "create_default_http_client",
    "load_api_options",
    "load_http_settings",
    "parse_endpoint",
    "parse_endpoint_strict",
    "setup_logging",
    "__version__",
]
