"""src.services.workflow
URL 하나에 대한 전체 장소 추출 흐름

URL 분류 -> 콘텐츠 해석 (YouTube: VideoContentService / 그 외: SnsContentFetcher)
        -> LLM 분류 (자막 / 본문 / 영상 직접 분석)
        -> Geocoding (장소별 실패 격리)
"""
import logging

import httpx

from src.core.config import Settings, settings
from src.models.content_classification import ContentClassification
from src.models.pipeline_result import (
    MetadataOnlyContent,
    PipelineResult,
    TranscriptContent,
    VideoAssetContent,
)
from src.models.place_extraction_result import PlaceExtractionResult
from src.models.source_reference import SnsPlatform
from src.services.geocoding_service import GeocodingService
from src.services.modules.llm import ContentClassifier
from src.services.preprocess.sns import SnsContentFetcher
from src.services.providers.oembed import youtube_watch_url
from src.services.video_content_service import VideoContentService
from src.utils.url_classifier import classify_url

logger = logging.getLogger(__name__)


class PlaceExtractionWorkflow:
    def __init__(
        self,
        config: Settings,
        video_service: VideoContentService | None = None,
        sns_fetcher: SnsContentFetcher | None = None,
        classifier: ContentClassifier | None = None,
        geocoder: GeocodingService | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._config = config
        self.video_service = video_service or VideoContentService(config, client=client)
        self.sns_fetcher = sns_fetcher or SnsContentFetcher(config, client=client)
        self.classifier = classifier or ContentClassifier(config)
        self.geocoder = geocoder or GeocodingService(config, client=client)

    async def resolve_content(self, url: str) -> PipelineResult:
        """
        Raises:
            InvalidUrlError: 지원하지 않는 URL
        """
        source = classify_url(url)
        logger.info(f"[Workflow] URL 분류: {source.platform.value} ({source.identifier})")
        if source.platform == SnsPlatform.YOUTUBE:
            return await self.video_service.get_video_content(url)
        return await self.sns_fetcher.fetch(source)

    async def classify_content(self, content: PipelineResult) -> ContentClassification | None:
        """분류할 입력이 없거나 LLM이 설정되지 않았으면 None을 반환합니다."""
        if not self.classifier.is_configured():
            logger.warning("[Workflow] GOOGLE_API_KEY 미설정 - 분류 건너뜀")
            return None

        if isinstance(content, TranscriptContent):
            return await self.classifier.classify(
                content.title, transcript=content.transcript, description=content.description
            )

        if isinstance(content, VideoAssetContent):
            # Gemini는 YouTube URL을 영상 입력으로 직접 받을 수 있음
            return await self.classifier.classify_video(
                youtube_watch_url(content.sourceId),
                title=content.title,
                caption=content.description,
            )

        if isinstance(content, MetadataOnlyContent) and (content.description or "").strip():
            return await self.classifier.classify(content.title, description=content.description)

        logger.info(f"[Workflow] [{content.sourceId}] 분류할 텍스트 없음")
        return None

    async def run(self, url: str) -> PlaceExtractionResult:
        """
        Raises:
            InvalidUrlError: 지원하지 않는 URL
            ClassifierResponseError: LLM 응답을 해석할 수 없는 경우
        """
        content = await self.resolve_content(url)
        classification = await self.classify_content(content)

        if classification is None or not classification.places:
            return PlaceExtractionResult(content=content, classification=classification)

        geocoded = await self.geocoder.geocode_places(classification.places)
        places = [place for place in geocoded if place is not None]
        failed = [
            candidate.name
            for candidate, place in zip(classification.places, geocoded)
            if place is None
        ]
        if failed:
            logger.warning(f"[Workflow] Geocoding 실패 장소: {failed}")

        logger.info(f"[Workflow] 완료: 장소 {len(places)}개, 실패 {len(failed)}개")
        return PlaceExtractionResult(
            content=content,
            classification=classification,
            places=places,
            failedPlaces=failed,
        )


async def run_place_workflow(url: str, config: Settings = settings) -> PlaceExtractionResult:
    async with httpx.AsyncClient(timeout=config.METADATA_TIMEOUT_SECONDS) as client:
        workflow = PlaceExtractionWorkflow(config, client=client)
        return await workflow.run(url)
