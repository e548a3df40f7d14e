"""src.services.video_content_service
YouTube 콘텐츠 해석 진입점

흐름 (호출마다 독립적, 상태 저장 없음)
START -> 메타데이터 -> 자막 시도 -> (자막 확보) transcript 결과
                               -> (자막 없음) 영상 URL 시도 -> (확보) video 결과
                                                         -> (실패) metadata 결과

"찾지 못함"은 예외가 아니라 결과 타입으로 전달합니다.
잘못된 URL만 InvalidUrlError로 전파됩니다.
"""
import logging

import httpx

from src.core.config import Settings
from src.models.content_payload import ContentPayload
from src.models.pipeline_result import (
    MetadataOnlyContent,
    PipelineResult,
    TranscriptContent,
    VideoAssetContent,
)
from src.models.source_reference import SnsPlatform
from src.models.video_asset import VideoAsset
from src.services.providers.base import ContentProvider
from src.services.providers.oembed import YouTubeOEmbedProvider, youtube_thumbnail_url
from src.services.transcript_resolver import TranscriptResolver
from src.services.video_asset_resolver import VideoAssetResolver
from src.utils.url_classifier import require_youtube_id

logger = logging.getLogger(__name__)


class VideoContentService:
    def __init__(
        self,
        config: Settings,
        transcript_resolver: TranscriptResolver | None = None,
        video_asset_resolver: VideoAssetResolver | None = None,
        metadata_provider: ContentProvider | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._config = config
        self.metadata_provider = metadata_provider or YouTubeOEmbedProvider(config, client)
        self.transcript_resolver = transcript_resolver or TranscriptResolver(
            config, metadata_provider=self.metadata_provider, client=client
        )
        self.video_asset_resolver = video_asset_resolver or VideoAssetResolver(config, client=client)

    def is_configured(self) -> bool:
        """네트워크 호출 전에 Apify 인증 정보가 있는지 확인합니다."""
        return self._config.is_apify_configured()

    async def get_video_transcript(self, url: str) -> ContentPayload | None:
        return await self.transcript_resolver.resolve(url)

    async def download_video(self, url: str) -> VideoAsset | None:
        return await self.video_asset_resolver.resolve(url)

    async def get_video_content(self, url: str) -> PipelineResult:
        """
        자막 -> 영상 -> 메타데이터 순서로 콘텐츠를 해석합니다.

        Raises:
            InvalidUrlError: YouTube video id를 추출할 수 없는 경우
        """
        video_id = require_youtube_id(url)

        # 1. 메타데이터 (빠름, 무료)
        metadata = await self.metadata_provider.try_extract(url, video_id)
        base = {
            "platform": SnsPlatform.YOUTUBE,
            "sourceId": video_id,
            "sourceUrl": url,
            "title": (metadata.title if metadata else None) or "YouTube Video",
            "channelName": (metadata.channelName if metadata else None) or "Unknown",
            "thumbnailUrl": (metadata.thumbnailUrl if metadata else None) or youtube_thumbnail_url(video_id),
        }

        # 2. 자막
        transcript_payload, partials = await self.transcript_resolver.try_providers(url, video_id)
        if transcript_payload is not None:
            logger.info(f"[VideoContent] [{video_id}] 자막 확보: {len(transcript_payload.transcript)}자")
            return TranscriptContent(
                **{
                    **base,
                    "title": transcript_payload.title or base["title"],
                    "channelName": transcript_payload.channelName or base["channelName"],
                    "thumbnailUrl": transcript_payload.thumbnailUrl or base["thumbnailUrl"],
                },
                transcript=transcript_payload.transcript,
                description=transcript_payload.description,
            )

        fallback = self.transcript_resolver.merge_fallback(video_id, metadata, partials)
        description = fallback.description if fallback else None

        # 3. 자막 없음 -> 영상 URL
        logger.info(f"[VideoContent] [{video_id}] 자막 없음, 영상 다운로드 시도")
        asset = await self.video_asset_resolver.resolve(url)
        if asset is not None:
            has_metadata_title = bool(metadata and metadata.title)
            return VideoAssetContent(
                **{**base, "title": base["title"] if has_metadata_title else asset.title},
                description=description,
                videoDownloadUrl=asset.downloadUrl,
                duration=asset.duration,
                fileSize=asset.fileSize,
            )

        # 4. 모두 실패 -> 메타데이터만
        logger.warning(f"[VideoContent] [{video_id}] 모든 추출 방법 실패 - 메타데이터만 반환")
        return MetadataOnlyContent(**base, description=description)
