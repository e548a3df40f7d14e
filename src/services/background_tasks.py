"""src.services.background_tasks.py
비동기로 장소 추출 파이프라인을 실행하고 완료 결과를 백엔드에 callback으로 전달하는 모듈입니다.
"""

import logging

import httpx

from src.core.config import Settings, settings
from src.core.exceptions import CustomError
from src.models.callback_request import AiCallbackRequest
from src.models.place_extraction_request import PlaceExtractionRequest
from src.services.workflow import run_place_workflow
from src.utils.url_classifier import classify_url

logger = logging.getLogger(__name__)


# 콜백 함수
async def send_callback(payload: AiCallbackRequest, config: Settings = settings) -> bool:
    """
    백엔드 콜백 API로 최종 결과를 전송합니다.

    Returns:
        bool: 전송 성공 여부 (2xx 응답 시 True)

    - API Key는 X-API-Key 헤더로 전달됩니다.
    - content는 SUCCESS 시에만 필수입니다.
    """
    url = config.BACKEND_CALLBACK_URL
    if not url:
        logger.warning("[Callback] BACKEND_CALLBACK_URL 미설정 - 전송 건너뜀")
        return False

    logger.info(f"[Callback] 전송 준비: {url} (Status: {payload.resultStatus})")
    headers = {"X-API-Key": config.BACKEND_API_KEY}

    try:
        async with httpx.AsyncClient(timeout=10) as client:
            response = await client.post(
                url,
                json=payload.model_dump(mode="json"),
                headers=headers,
            )
    except httpx.TimeoutException:
        logger.error("[Callback] 전송 실패: HTTP 요청 타임아웃 발생")
        return False
    except httpx.HTTPError as e:
        logger.error(f"[Callback] 전송 중 예외 발생: {type(e).__name__} - {str(e)}")
        return False

    if 200 <= response.status_code < 300:
        logger.info(f"[Callback] 완료: {response.status_code}")
        return True
    logger.error(f"[Callback] 전송 실패 (HTTP {response.status_code}): {response.text}")
    return False


def detect_platform(url: str) -> str:
    try:
        return classify_url(url).platform.value
    except CustomError:
        return "UNKNOWN"


# FAILED 콜백 전송을 위한 헬퍼 함수
async def send_failed_callback(request: PlaceExtractionRequest, exc: Exception, config: Settings = settings) -> bool:
    failed_payload = AiCallbackRequest(
        contentId=request.contentId,
        resultStatus="FAILED",
        snsPlatform=detect_platform(request.snsUrl),
        errorMessage=str(exc),
    )
    return await send_callback(failed_payload, config)


# 메인 비동기 처리 함수
async def process_extraction_in_background(request: PlaceExtractionRequest, config: Settings = settings) -> bool:
    """
    장소 추출 요청을 처리하고, 완료되면 BACKEND_CALLBACK_URL 로 결과를 전송합니다.
    실패 시에도 FAILED 콜백을 전송하며 예외를 밖으로 전파하지 않습니다.
    """
    logger.info(f"[Pipeline] 시작: {request.snsUrl}")
    try:
        result = await run_place_workflow(request.snsUrl, config)
    except Exception as e:
        logger.exception("[Background] 예외 발생")
        await send_failed_callback(request, e, config)
        return False

    logger.info(f"[Pipeline] 완료: 총 {len(result.places)}개 장소 추출됨 (resultType={result.content.resultType})")

    callback_payload = AiCallbackRequest(
        contentId=request.contentId,
        resultStatus="SUCCESS",
        snsPlatform=result.content.platform.value,
        content=result.content,
        classification=result.classification,
        places=result.places,
        failedPlaces=result.failedPlaces,
    )
    return await send_callback(callback_payload, config)
