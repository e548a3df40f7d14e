"""src.apis.place_router
장소 추출 API 라우터 (Spring의 PlaceController와 유사한 역할)
"""
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from src.core.config import settings
from src.core.exceptions import CustomError, InvalidUrlError
from src.models import PlaceExtractionRequest, PlaceExtractionResult, VideoContentRequest
from src.models.pipeline_result import PipelineResult
from src.services.background_tasks import process_extraction_in_background
from src.services.video_content_service import VideoContentService
from src.services.workflow import run_place_workflow
from src.utils.common import verify_api_key

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["AI 서버 API"])

# 실행 중인 백그라운드 작업 참조 (GC 방지)
_background_tasks: set[asyncio.Task] = set()


def to_http_exception(error: Exception) -> HTTPException:
    """InvalidUrlError -> 400, CustomError -> 422, 그 외 -> 500"""
    if isinstance(error, InvalidUrlError):
        return HTTPException(status_code=400, detail=error.message)
    if isinstance(error, CustomError):
        return HTTPException(status_code=422, detail=error.message)
    return HTTPException(status_code=500, detail="서버 내부 오류가 발생했습니다")


@router.post("/extract-places", status_code=200, response_model=PlaceExtractionResult)
async def extract_places(
    request: PlaceExtractionRequest,
    api_key: str = Depends(verify_api_key)
):
    """
    인증(API Key): 필요

    기능
    SNS 콘텐츠 URL을 입력받아 콘텐츠 해석 -> LLM 분류 -> Geocoding 을 동기 방식으로 실행합니다.

    ------------------------------------------------------------
    요청 파라미터 (PlaceExtractionRequest)
    - contentId (UUID, 선택): 콘텐츠 고유 식별자
    - snsUrl (string): SNS 원본 URL (YouTube, Instagram, Reddit, TikTok)

    ------------------------------------------------------------
    반환값 (PlaceExtractionResult)
    - content: resultType(transcript / video / metadata)에 따른 콘텐츠 정보
    - classification: LLM 분류 결과 (분류할 텍스트가 없으면 null)
    - places: 좌표가 확인된 장소 리스트
    - failedPlaces: Geocoding에 실패한 장소명

    ------------------------------------------------------------
    에러 코드
    - 400 BAD REQUEST: 지원하지 않는 URL
    - 401 UNAUTHORIZED: API Key 누락 또는 불일치
    - 422 UNPROCESSABLE ENTITY: LLM 응답 해석 실패 등 처리 오류
    - 500 INTERNAL SERVER ERROR: 그 외 오류
    """
    logger.info(f"extract-places 요청 수신: contentId={request.contentId}, url={request.snsUrl}")
    try:
        return await run_place_workflow(request.snsUrl, settings)
    except CustomError as e:
        logger.error(f"장소 추출 실패: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("장소 추출 중 예상하지 못한 오류")
        raise to_http_exception(e)


@router.post("/extract-places-async", status_code=200)
async def extract_places_async(
    request: PlaceExtractionRequest,
    api_key: str = Depends(verify_api_key)
):
    """
    인증(API Key): 필요

    기능
    장소 추출 파이프라인을 Background Task로 실행합니다.
    요청은 즉시 200 OK를 반환하며, 처리 결과는 BACKEND_CALLBACK_URL로 전송됩니다.

    반환값 (즉시 응답)
    ```json
    {
      "received": true,
      "message": "Processing started"
    }
    ```
    에러 코드
    - 401 UNAUTHORIZED: API Key 누락 또는 불일치
    - 422 UNPROCESSABLE ENTITY: contentId 누락
    """
    if request.contentId is None:
        raise HTTPException(status_code=422, detail="비동기 처리에는 contentId가 필요합니다")

    logger.info(f"extract-places-async 요청 수신: contentId={request.contentId}, url={request.snsUrl}")

    # 1. 비동기 백그라운드 처리 시작
    task = asyncio.create_task(process_extraction_in_background(request, settings))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)

    # 2. 즉시 응답 반환
    return {
        "received": True,
        "message": "Processing started"
    }


@router.post("/video-content", status_code=200, response_model=PipelineResult)
async def get_video_content(
    request: VideoContentRequest,
    api_key: str = Depends(verify_api_key)
):
    """
    YouTube URL의 콘텐츠를 해석합니다 (자막 -> 영상 URL -> 메타데이터).

    - 400: YouTube video id를 추출할 수 없는 URL
    """
    logger.info(f"video-content 요청 수신: url={request.url}")
    try:
        return await VideoContentService(settings).get_video_content(request.url)
    except CustomError as e:
        raise to_http_exception(e)
