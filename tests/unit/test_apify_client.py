"""Unit tests for the Apify actor client."""

import httpx
import pytest

from src.core.exceptions import ProviderResponseError
from src.services.providers.apify_client import ApifyClient

ACTOR = "pintostudio~youtube-transcript-scraper"
BASE = "https://api.apify.com/v2"


@pytest.mark.asyncio
async def test_run_actor_returns_dataset_items(test_settings, http_stub):
    http_stub.apify_actor(test_settings, ACTOR, items=[{"transcript": "hi"}, "junk"])
    apify = ApifyClient(test_settings, http_stub.client())

    items = await apify.run_actor(ACTOR, {"videoUrl": "x"}, wait_seconds=120, timeout_margin=10)

    assert items == [{"transcript": "hi"}]
    run_request = http_stub.requests[0]
    assert run_request.url.params["waitForFinish"] == "120"
    assert run_request.headers["Authorization"] == "Bearer test-apify-token"
    assert http_stub.json_bodies("POST", f"{BASE}/acts/{ACTOR}/runs") == [{"videoUrl": "x"}]


@pytest.mark.asyncio
async def test_missing_dataset_id(test_settings, http_stub):
    http_stub.on("POST", f"{BASE}/acts/{ACTOR}/runs", httpx.Response(201, json={"data": {"id": "run-1"}}))
    apify = ApifyClient(test_settings, http_stub.client())

    with pytest.raises(ProviderResponseError):
        await apify.run_actor(ACTOR, {}, wait_seconds=1, timeout_margin=1)


@pytest.mark.asyncio
async def test_dataset_not_a_list(test_settings, http_stub):
    http_stub.apify_actor(test_settings, ACTOR)
    # dataset 라우트보다 먼저 매칭되도록 앞에 등록
    http_stub.routes.insert(0, ("GET", f"{BASE}/datasets/", httpx.Response(200, json={"error": "x"})))
    apify = ApifyClient(test_settings, http_stub.client())

    with pytest.raises(ProviderResponseError):
        await apify.run_actor(ACTOR, {}, wait_seconds=1, timeout_margin=1)


@pytest.mark.asyncio
async def test_http_error_propagates(test_settings, http_stub):
    http_stub.on("POST", f"{BASE}/acts/{ACTOR}/runs", httpx.Response(500))
    apify = ApifyClient(test_settings, http_stub.client())

    with pytest.raises(httpx.HTTPStatusError):
        await apify.run_actor(ACTOR, {}, wait_seconds=1, timeout_margin=1)


@pytest.mark.asyncio
async def test_requires_token(unconfigured_settings, http_stub):
    apify = ApifyClient(unconfigured_settings, http_stub.client())

    assert apify.is_configured() is False
    with pytest.raises(ProviderResponseError):
        await apify.run_actor(ACTOR, {}, wait_seconds=1, timeout_margin=1)
    assert http_stub.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("run_body", [[], {"data": "run-1"}, {"data": None}, "SUCCEEDED"])
async def test_malformed_run_response(test_settings, http_stub, run_body):
    http_stub.on("POST", f"{BASE}/acts/{ACTOR}/runs", httpx.Response(201, json=run_body))
    apify = ApifyClient(test_settings, http_stub.client())

    with pytest.raises(ProviderResponseError):
        await apify.run_actor(ACTOR, {}, wait_seconds=1, timeout_margin=1)
    assert http_stub.count("GET", f"{BASE}/datasets/") == 0
