"""Unit tests for the asynchronous callback hand-off."""

from unittest.mock import AsyncMock, patch
from uuid import UUID

import pytest

from src.core.exceptions import ClassifierResponseError
from src.models.callback_request import AiCallbackRequest
from src.models.pipeline_result import MetadataOnlyContent
from src.models.place_extraction_request import PlaceExtractionRequest
from src.models.place_extraction_result import PlaceExtractionResult
from src.services.background_tasks import (
    detect_platform,
    process_extraction_in_background,
    send_callback,
)

CONTENT_ID = UUID("550e8400-e29b-41d4-a716-446655440000")
YOUTUBE_URL = "https://www.youtube.com/watch?v=VcuM9JvZrp4"


@pytest.fixture
def request_model():
    return PlaceExtractionRequest(contentId=CONTENT_ID, snsUrl=YOUTUBE_URL)


@pytest.mark.asyncio
async def test_success_callback(test_settings, request_model):
    result = PlaceExtractionResult(
        content=MetadataOnlyContent(sourceId="VcuM9JvZrp4", sourceUrl=YOUTUBE_URL, title="Tokyo"),
        failedPlaces=["Shibuya Crossing"],
    )
    with patch("src.services.background_tasks.run_place_workflow", AsyncMock(return_value=result)), \
            patch("src.services.background_tasks.send_callback", AsyncMock(return_value=True)) as callback:
        assert await process_extraction_in_background(request_model, test_settings) is True

    payload: AiCallbackRequest = callback.await_args.args[0]
    assert payload.resultStatus == "SUCCESS"
    assert payload.snsPlatform == "YOUTUBE"
    assert payload.contentId == CONTENT_ID
    assert payload.failedPlaces == ["Shibuya Crossing"]


@pytest.mark.asyncio
async def test_failure_sends_failed_callback(test_settings, request_model):
    error = ClassifierResponseError("LLM 응답에 JSON 객체가 없습니다")
    with patch("src.services.background_tasks.run_place_workflow", AsyncMock(side_effect=error)), \
            patch("src.services.background_tasks.send_callback", AsyncMock(return_value=True)) as callback:
        assert await process_extraction_in_background(request_model, test_settings) is False

    payload: AiCallbackRequest = callback.await_args.args[0]
    assert payload.resultStatus == "FAILED"
    assert payload.content is None
    assert payload.errorMessage == "LLM 응답에 JSON 객체가 없습니다"


def test_failed_payload_drops_places():
    payload = AiCallbackRequest(contentId=CONTENT_ID, resultStatus="FAILED", snsPlatform="UNKNOWN")
    assert payload.places == []


def test_success_payload_requires_content():
    with pytest.raises(ValueError):
        AiCallbackRequest(contentId=CONTENT_ID, resultStatus="SUCCESS", snsPlatform="YOUTUBE")


def test_detect_platform():
    assert detect_platform(YOUTUBE_URL) == "YOUTUBE"
    assert detect_platform("https://example.com") == "UNKNOWN"


@pytest.mark.asyncio
async def test_send_callback_without_url(unconfigured_settings):
    payload = AiCallbackRequest(contentId=CONTENT_ID, resultStatus="FAILED", snsPlatform="UNKNOWN")
    assert await send_callback(payload, unconfigured_settings) is False
