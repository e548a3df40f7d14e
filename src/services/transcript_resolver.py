"""src.services.transcript_resolver
YouTube 자막 해석기

Provider를 우선순위대로 시도하여 처음으로 충분한 길이의 자막을 반환한 결과를 사용합니다.
1. Apify 자막 전용 Actor
2. Apify 범용 영상 스크래핑 Actor
3. oEmbed 메타데이터 (자막 없음)

TRANSCRIPT_MIN_LENGTH 이하의 자막은 노이즈로 보고 다음 Provider로 넘어갑니다.
"""
import logging

import httpx

from src.core.config import Settings
from src.models.content_payload import ContentPayload
from src.services.providers.apify_client import ApifyClient
from src.services.providers.apify_transcript import ApifyTranscriptProvider
from src.services.providers.base import ContentProvider
from src.services.providers.oembed import YouTubeOEmbedProvider, youtube_thumbnail_url
from src.utils.common import normalize_whitespace
from src.utils.url_classifier import require_youtube_id

logger = logging.getLogger(__name__)


def default_transcript_providers(config: Settings, apify: ApifyClient) -> list[ContentProvider]:
    return [
        ApifyTranscriptProvider("transcript-actor", config.APIFY_TRANSCRIPT_ACTOR, config, apify),
        ApifyTranscriptProvider("fallback-actor", config.APIFY_FALLBACK_TRANSCRIPT_ACTOR, config, apify),
    ]


class TranscriptResolver:
    def __init__(
        self,
        config: Settings,
        providers: list[ContentProvider] | None = None,
        metadata_provider: ContentProvider | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._config = config
        if providers is None:
            providers = default_transcript_providers(config, ApifyClient(config, client))
        self.providers = providers
        self.metadata_provider = metadata_provider or YouTubeOEmbedProvider(config, client)

    def is_usable(self, transcript: str | None) -> bool:
        return len(normalize_whitespace(transcript)) > self._config.TRANSCRIPT_MIN_LENGTH

    async def try_providers(
        self, url: str, video_id: str
    ) -> tuple[ContentPayload | None, list[ContentPayload]]:
        """
        자막 Provider를 순서대로 한 번씩 시도합니다.

        Returns:
            (충분한 자막을 가진 payload 또는 None, 자막이 부족했던 payload 리스트)
        """
        partials: list[ContentPayload] = []
        for provider in self.providers:
            logger.info(f"[Transcript] [{video_id}] Provider 시도: {provider.name}")
            payload = await provider.try_extract(url, video_id)
            if payload is None:
                continue
            if self.is_usable(payload.transcript):
                logger.info(f"[Transcript] [{video_id}] {provider.name} 자막 사용 ({len(payload.transcript)}자)")
                return payload, partials
            logger.warning(
                f"[Transcript] [{video_id}] {provider.name} 자막 부족 "
                f"({len(payload.transcript or '')}자 <= {self._config.TRANSCRIPT_MIN_LENGTH}자)"
            )
            partials.append(payload)
        return None, partials

    def merge_fallback(
        self,
        video_id: str,
        metadata: ContentPayload | None,
        partials: list[ContentPayload],
    ) -> ContentPayload | None:
        """
        자막 없이 메타데이터와 부분 결과를 합칩니다.

        Provider description이 없으면 가장 긴 짧은 자막을 description으로 남깁니다.
        """
        if metadata is None and not partials:
            return None

        sources = ([metadata] if metadata else []) + partials

        def pick(field: str):
            for source in sources:
                value = getattr(source, field)
                if value:
                    return value
            return None

        description = next((p.description for p in partials if p.description), None)
        if description is None:
            short_texts = [p.transcript for p in partials if p.transcript]
            description = max(short_texts, key=len) if short_texts else None

        return ContentPayload(
            sourceId=video_id,
            title=pick("title"),
            channelName=pick("channelName"),
            thumbnailUrl=pick("thumbnailUrl") or youtube_thumbnail_url(video_id),
            description=description,
            provider=metadata.provider if metadata else partials[0].provider,
        )

    async def resolve(self, url: str) -> ContentPayload | None:
        """
        자막을 해석합니다. 모든 자막 Provider가 실패하면 메타데이터만 반환합니다.

        Raises:
            InvalidUrlError: YouTube video id를 추출할 수 없는 경우
        """
        video_id = require_youtube_id(url)

        payload, partials = await self.try_providers(url, video_id)
        if payload is not None:
            return payload

        logger.warning(f"[Transcript] [{video_id}] 모든 자막 Provider 실패 - 메타데이터로 대체")
        metadata = await self.metadata_provider.try_extract(url, video_id)
        return self.merge_fallback(video_id, metadata, partials)
