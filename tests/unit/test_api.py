# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import inspect

import httpx
import pytest

from samidb.api import IMAGE_SUBTYPES, ImageRequest, SamiDBApi
from samidb.config import ApiOptions
from samidb.errors import (
    CatalogRetrievalError,
    ClientNotReadyError,
    UnknownEndpointError,
    UnknownEndpointTypeError,
)
from samidb.http.adapters import StubHttpClient
from samidb.http.models import HttpResponse

API = "http://x"
CATALOG = [
    "GET,OPTIONS,HEAD /v1/endpoints",
    "GET,OPTIONS,HEAD /v1/img/<blush,bonk,hug>",
    "POST,OPTIONS,HEAD /v1/upload",
]


def _stub_with_catalog(catalog=CATALOG, version=1) -> StubHttpClient:
    stub = StubHttpClient()
    stub.add_json(f"{API}/v{version}/endpoints", catalog)
    return stub


def test_get_url_formats_version_and_base():
    api = SamiDBApi(version=2, api_url="http://x", http_client=StubHttpClient())
    assert api.get_url("foo") == "http://x/v2/foo"
    assert api.get_url("foo") == api.get_url("foo")


def test_get_url_strips_trailing_slash_from_base():
    api = SamiDBApi(api_url="http://x/", http_client=StubHttpClient())
    assert api.get_url("img") == "http://x/v1/img"


def test_defaults_and_str():
    api = SamiDBApi(http_client=StubHttpClient())
    assert api.options == ApiOptions()
    assert api.options.api_url == "http://api.samidb.xyz"
    assert str(api) == "[SamiDBApi]"
    assert api.ready is False


def test_accepts_camel_case_configuration_mapping():
    api = SamiDBApi(
        {"version": 3, "apiURL": "http://x", "ignoreDefaultEndpoints": True, "endpoints": {"get": ["GET,OPTIONS,HEAD/foo"]}},
        http_client=StubHttpClient(),
    )
    assert api.options.version == 3
    assert api.options.api_url == "http://x"
    assert api.options.ignore_default_endpoints is True


def test_unknown_custom_bucket_fails_before_any_request():
    stub = StubHttpClient()
    with pytest.raises(UnknownEndpointTypeError) as excinfo:
        SamiDBApi(api_url=API, endpoints={"put": ["PUT,OPTIONS,HEAD/foo"]}, http_client=stub)
    assert excinfo.value.bucket == "put"
    assert stub.requests == []


@pytest.mark.asyncio
async def test_ignore_default_endpoints_skips_catalog_fetch():
    stub = StubHttpClient()
    stub.add_json(f"{API}/v1/foo", {"url": "http://cdn/foo.gif"})
    api = await SamiDBApi.create(
        api_url=API,
        ignore_default_endpoints=True,
        endpoints={"get": ["GET,OPTIONS,HEAD/foo"]},
        http_client=stub,
    )

    assert await api.get("foo") == "http://cdn/foo.gif"
    assert [request.url for request in stub.requests] == [f"{API}/v1/foo"]


@pytest.mark.asyncio
async def test_catalog_populates_buckets_then_custom_endpoints():
    stub = _stub_with_catalog()
    api = await SamiDBApi.create(api_url=API, endpoints={"post": ["POST,OPTIONS,HEAD/extra"]}, http_client=stub)

    assert api.ready is True
    assert stub.requests[0].url == f"{API}/v1/endpoints"
    assert [endpoint.url for endpoint in api.endpoints.bucket("get")] == ["/v1/endpoints", "/v1/img"]
    assert [endpoint.url for endpoint in api.endpoints.bucket("post")] == ["/v1/upload", "/extra"]
    assert api.endpoints.bucket("get")[1].subtypes == ("blush/", "bonk/", "hug/")


@pytest.mark.asyncio
async def test_get_with_subtype_returns_url_field():
    stub = _stub_with_catalog()
    stub.add_json(f"{API}/v1/img/hug", {"url": "http://cdn/hug.gif"})
    api = await SamiDBApi.create(api_url=API, http_client=stub)

    assert await api.get("img", "hug") == "http://cdn/hug.gif"
    assert stub.requests[-1].method == "GET"


@pytest.mark.asyncio
async def test_get_uses_the_endpoint_verb():
    stub = _stub_with_catalog()
    stub.add_json(f"{API}/v1/upload", {"ok": True}, method="POST")
    api = await SamiDBApi.create(api_url=API, http_client=stub)

    assert await api.get("upload") == {"ok": True}
    assert stub.requests[-1].method == "POST"


@pytest.mark.asyncio
async def test_get_returns_raw_body_without_url_field():
    stub = _stub_with_catalog()
    stub.add_json(f"{API}/v1/img/blush", {"url": ""})
    stub.add(f"{API}/v1/img/bonk", HttpResponse(status_code=200, text="plain body", content=b"plain body"))
    api = await SamiDBApi.create(api_url=API, http_client=stub)

    assert await api.get("img", "blush") == {"url": ""}
    assert await api.get("img", "bonk") == "plain body"


@pytest.mark.asyncio
async def test_unknown_endpoint_raises():
    api = await SamiDBApi.create(api_url=API, http_client=_stub_with_catalog())
    with pytest.raises(UnknownEndpointError) as excinfo:
        await api.get("doesNotExist")
    assert excinfo.value.name == "doesNotExist"


@pytest.mark.asyncio
async def test_endpoints_of_other_versions_do_not_resolve():
    api = await SamiDBApi.create(
        api_url=API,
        ignore_default_endpoints=True,
        endpoints={"get": ["GET,OPTIONS,HEAD/v2/img"]},
        http_client=StubHttpClient(),
    )
    with pytest.raises(UnknownEndpointError):
        await api.get("img")


@pytest.mark.asyncio
async def test_get_before_initialize_raises():
    api = SamiDBApi(api_url=API, ignore_default_endpoints=True, http_client=StubHttpClient())
    with pytest.raises(ClientNotReadyError):
        await api.get("foo")


@pytest.mark.asyncio
async def test_initialize_is_idempotent():
    stub = _stub_with_catalog()
    api = SamiDBApi(api_url=API, http_client=stub)
    await api.initialize()
    await api.initialize()
    assert len(stub.requests) == 1
    assert len(api.endpoints) == 3


@pytest.mark.asyncio
async def test_async_context_manager_initializes():
    async with SamiDBApi(api_url=API, http_client=_stub_with_catalog()) as api:
        assert api.ready is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "catalog",
    [
        ["GET,OPTIONS,HEAD /v1/img", "PUT,OPTIONS,HEAD /v1/nope"],
        {"not": "a list"},
        [42],
        "GET,OPTIONS,HEAD /v1/img",
    ],
)
async def test_malformed_catalog_raises_catalog_error(catalog):
    api = SamiDBApi(api_url=API, http_client=_stub_with_catalog(catalog))
    with pytest.raises(CatalogRetrievalError):
        await api.initialize()
    assert api.ready is False
    assert len(api.endpoints) == 0


@pytest.mark.asyncio
async def test_catalog_transport_failure_is_wrapped():
    stub = StubHttpClient()
    stub.add(f"{API}/v1/endpoints", httpx.ConnectError("refused"))
    with pytest.raises(CatalogRetrievalError) as excinfo:
        await SamiDBApi.create(api_url=API, http_client=stub)
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_transport_failure_during_get_propagates_unwrapped():
    stub = _stub_with_catalog()
    stub.add(f"{API}/v1/img/hug", httpx.ReadTimeout("slow"))
    api = await SamiDBApi.create(api_url=API, http_client=stub)
    with pytest.raises(httpx.ReadTimeout):
        await api.get("img", "hug")


@pytest.mark.asyncio
async def test_image_shortcuts_dispatch_to_img_endpoint():
    stub = _stub_with_catalog()
    stub.add_json(f"{API}/v1/img/hug", {"url": "http://cdn/hug.gif"})
    stub.add_json(f"{API}/v1/img/blush", {"url": "http://cdn/blush.gif"})
    api = await SamiDBApi.create(api_url=API, http_client=stub)

    assert await api.hug == "http://cdn/hug.gif"
    assert await api.image("blush") == "http://cdn/blush.gif"
    assert "slap" in dir(api)
    assert set(IMAGE_SUBTYPES) >= {"hug", "kiss", "slap", "corn", "nuggies"}


def test_unknown_shortcut_is_attribute_error():
    api = SamiDBApi(http_client=StubHttpClient())
    with pytest.raises(AttributeError):
        api.dance  # noqa: B018
    with pytest.raises(AttributeError):
        api.image("dance")


@pytest.mark.asyncio
async def test_concurrent_gets_are_independent():
    stub = _stub_with_catalog()
    for name in ("blush", "bonk", "hug"):
        stub.add_json(f"{API}/v1/img/{name}", {"url": f"http://cdn/{name}.gif"})
    api = await SamiDBApi.create(api_url=API, http_client=stub)

    results = await asyncio.gather(api.blush, api.bonk, api.hug)
    assert results == ["http://cdn/blush.gif", "http://cdn/bonk.gif", "http://cdn/hug.gif"]


def test_shortcut_lookup_does_not_start_a_request():
    stub = StubHttpClient()
    api = SamiDBApi(api_url=API, ignore_default_endpoints=True, http_client=stub)

    assert hasattr(api, "hug")
    shortcut = api.hug
    assert isinstance(shortcut, ImageRequest)
    assert shortcut.subtype == "hug"
    assert inspect.isawaitable(shortcut)
    assert not inspect.iscoroutine(shortcut)
    members = dict(inspect.getmembers(api))
    assert isinstance(members["slap"], ImageRequest)
    assert "slap" in dir(api)
    assert stub.requests == []


@pytest.mark.asyncio
async def test_shortcut_can_be_awaited_more_than_once():
    stub = _stub_with_catalog()
    stub.add_json(f"{API}/v1/img/hug", {"url": "http://cdn/hug.gif"})
    api = await SamiDBApi.create(api_url=API, http_client=stub)

    shortcut = api.hug
    assert await shortcut == "http://cdn/hug.gif"
    assert await shortcut == "http://cdn/hug.gif"
    assert [request.url for request in stub.requests[1:]] == [f"{API}/v1/img/hug"] * 2


def test_client_options_cannot_be_mutated():
    api = SamiDBApi(endpoints={"get": ["GET,OPTIONS,HEAD/foo"]}, http_client=StubHttpClient())
    with pytest.raises(TypeError):
        api.options.endpoints["put"] = ("PUT,OPTIONS,HEAD/x",)  # type: ignore[index]
    assert dict(api.options.endpoints) == {"get": ("GET,OPTIONS,HEAD/foo",)}
