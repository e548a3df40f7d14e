"""Shared pytest fixtures for the place extraction tests."""

import json
from types import SimpleNamespace
from typing import Callable, Union
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.core.config import Settings

Responder = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class HttpStub:
    """
    httpx.MockTransport 기반 라우팅 스텁.

    URL prefix + method로 응답을 등록하고, 받은 요청을 모두 기록합니다.
    responder가 callable이면 요청을 받아 응답을 만들거나 httpx 예외를 던질 수 있습니다.
    """

    def __init__(self):
        self.routes: list[tuple[str, str, Responder]] = []
        self.requests: list[httpx.Request] = []

    def on(self, method: str, url_prefix: str, responder: Responder) -> None:
        self.routes.append((method, url_prefix, responder))

    def apify_actor(self, config: Settings, actor_id: str, items=None, run_status: int = 201) -> None:
        """Actor 실행 요청과 dataset 조회 응답을 함께 등록합니다."""
        base = config.APIFY_API_BASE.rstrip("/")
        dataset_id = f"ds-{actor_id}"
        self.on(
            "POST",
            f"{base}/acts/{actor_id}/runs",
            httpx.Response(
                run_status,
                json={"data": {"id": f"run-{actor_id}", "status": "SUCCEEDED", "defaultDatasetId": dataset_id}},
            ),
        )
        self.on("GET", f"{base}/datasets/{dataset_id}/items", httpx.Response(200, json=items or []))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        for method, prefix, responder in self.routes:
            if request.method == method and url.startswith(prefix):
                if callable(responder):
                    return responder(request)
                # 같은 응답이 여러 번 사용될 수 있으므로 요청마다 복사
                return httpx.Response(
                    responder.status_code,
                    headers=responder.headers,
                    content=responder.read(),
                )
        return httpx.Response(404, json={"error": f"no route for {request.method} {url}"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))

    def count(self, method: str, url_prefix: str) -> int:
        return sum(
            1 for request in self.requests
            if request.method == method and str(request.url).startswith(url_prefix)
        )

    def json_bodies(self, method: str, url_prefix: str) -> list[dict]:
        return [
            json.loads(request.content)
            for request in self.requests
            if request.method == method and str(request.url).startswith(url_prefix)
        ]


@pytest.fixture
def test_settings() -> Settings:
    """모든 외부 서비스가 설정된 테스트용 Settings (.env 무시)."""
    return Settings(
        _env_file=None,
        GOOGLE_API_KEY="test-google-key",
        GOOGLE_MAPS_API_KEY="test-maps-key",
        APIFY_TOKEN="test-apify-token",
        AI_SERVER_API_KEY="test-server-key",
        BACKEND_CALLBACK_URL="http://backend.test/api/ai/callback",
        BACKEND_API_KEY="test-backend-key",
        GEOCODING_DELAY_SECONDS=0,
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """인증 정보가 하나도 없는 Settings."""
    return Settings(
        _env_file=None,
        GOOGLE_API_KEY="",
        GOOGLE_MAPS_API_KEY="",
        APIFY_TOKEN="",
        BACKEND_CALLBACK_URL="",
        GEOCODING_DELAY_SECONDS=0,
    )


@pytest.fixture
def http_stub() -> HttpStub:
    return HttpStub()


@pytest.fixture
def fake_genai():
    """
    google-genai Client 대역.

    fake_genai(text)로 aio.models.generate_content가 text를 반환하는 클라이언트를 만듭니다.
    """

    def factory(*texts: str):
        client = MagicMock()
        responses = [SimpleNamespace(text=text) for text in texts]
        client.aio.models.generate_content = AsyncMock(side_effect=responses)
        return client

    return factory


@pytest.fixture
def sample_classification_json() -> str:
    return json.dumps({
        "video_type": "places",
        "summary": "Quick Tokyo food and sightseeing tour",
        "destination": "Tokyo",
        "destination_country": "Japan",
        "places": [
            {
                "name": "Shibuya Crossing",
                "category": "place",
                "description": "Famous scramble crossing",
                "location": "Tokyo",
            },
            {
                "name": "Ichiran Ramen",
                "category": "food",
                "description": "Solo-booth tonkotsu ramen",
                "location": "Shibuya, Tokyo",
                "cuisine_type": "ramen",
                "tags": ["late-night"],
            },
        ],
    })
