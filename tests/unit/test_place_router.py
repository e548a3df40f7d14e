"""Unit tests for the HTTP API layer."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from src.core.config import settings
from src.core.exceptions import ClassifierResponseError, InvalidUrlError
from src.main import app
from src.models.content_classification import ContentClassification
from src.models.pipeline_result import MetadataOnlyContent
from src.models.place_extraction_result import PlaceExtractionResult

API_KEY = "test-server-key"
CONTENT_ID = "550e8400-e29b-41d4-a716-446655440000"
YOUTUBE_URL = "https://www.youtube.com/watch?v=VcuM9JvZrp4"


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(settings, "AI_SERVER_API_KEY", API_KEY)
    return TestClient(app)


def sample_result() -> PlaceExtractionResult:
    return PlaceExtractionResult(
        content=MetadataOnlyContent(sourceId="VcuM9JvZrp4", sourceUrl=YOUTUBE_URL, title="Tokyo"),
        classification=ContentClassification(summary="Tokyo"),
    )


class TestExtractPlaces:
    def test_requires_api_key(self, client):
        response = client.post("/api/extract-places", json={"snsUrl": YOUTUBE_URL})
        assert response.status_code == 401

    def test_wrong_api_key(self, client):
        response = client.post("/api/extract-places", json={"snsUrl": YOUTUBE_URL}, headers={"X-API-Key": "nope"})
        assert response.status_code == 401

    def test_success(self, client):
        with patch("src.apis.place_router.run_place_workflow", AsyncMock(return_value=sample_result())):
            response = client.post("/api/extract-places", json={"snsUrl": YOUTUBE_URL}, headers={"X-API-Key": API_KEY})

        assert response.status_code == 200
        body = response.json()
        assert body["content"]["resultType"] == "metadata"
        assert body["places"] == []

    @pytest.mark.parametrize(
        "error, status",
        [
            (InvalidUrlError("bad url"), 400),
            (ClassifierResponseError("bad json"), 422),
            (RuntimeError("boom"), 500),
        ],
    )
    def test_error_mapping(self, client, error, status):
        with patch("src.apis.place_router.run_place_workflow", AsyncMock(side_effect=error)):
            response = client.post("/api/extract-places", json={"snsUrl": YOUTUBE_URL}, headers={"X-API-Key": API_KEY})

        assert response.status_code == status


class TestExtractPlacesAsync:
    def test_accepts_and_schedules(self, client):
        background = AsyncMock(return_value=True)
        with patch("src.apis.place_router.process_extraction_in_background", background):
            response = client.post(
                "/api/extract-places-async",
                json={"contentId": CONTENT_ID, "snsUrl": YOUTUBE_URL},
                headers={"X-API-Key": API_KEY},
            )

        assert response.status_code == 200
        assert response.json() == {"received": True, "message": "Processing started"}
        assert background.call_args.args[0].snsUrl == YOUTUBE_URL

    def test_requires_content_id(self, client):
        response = client.post("/api/extract-places-async", json={"snsUrl": YOUTUBE_URL}, headers={"X-API-Key": API_KEY})
        assert response.status_code == 422


class TestVideoContent:
    def test_invalid_url(self, client):
        response = client.post(
            "/api/video-content", json={"url": "https://example.com/x"}, headers={"X-API-Key": API_KEY}
        )
        assert response.status_code == 400


class TestTestRouter:
    def test_health(self, client):
        response = client.get("/api/test/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_classify_url(self, client):
        response = client.post("/api/test/classify-url", json={"url": "https://youtu.be/VcuM9JvZrp4"})
        assert response.json()["identifier"] == "VcuM9JvZrp4"

    def test_classify_url_rejects_unknown(self, client):
        response = client.post("/api/test/classify-url", json={"url": "https://example.com"})
        assert response.status_code == 400

    def test_classify_requires_text(self, client):
        response = client.post("/api/test/classify", json={"title": "only a title"})
        assert response.status_code == 400
