"""src.services.providers.apify_transcript
Apify 자막 스크래핑 Actor 어댑터

Actor마다 입력 필드명이 달라서, 알려진 별칭을 모두 담은 입력을 한 번에 보냅니다.
(startUrls, urls, videoUrls, videoUrl)
"""
import logging

import httpx

from src.core.config import Settings
from src.core.exceptions import ProviderResponseError
from src.models.content_payload import ContentPayload
from src.services.providers.apify_client import ApifyClient
from src.services.providers.base import ContentProvider
from src.services.providers.field_strategies import (
    TRANSCRIPT_STRATEGIES,
    resolve_channel,
    resolve_description,
    resolve_thumbnail,
    resolve_title,
    resolve_transcript,
)

logger = logging.getLogger(__name__)


def build_transcript_input(url: str, language: str) -> dict:
    return {
        "startUrls": [{"url": url}],
        "urls": [url],
        "videoUrls": [url],
        "videoUrl": url,
        "language": language,
        "maxResults": 1,
    }


class ApifyTranscriptProvider(ContentProvider):
    """Apify Actor 하나를 자막 Provider로 감쌉니다."""

    def __init__(
        self,
        name: str,
        actor_id: str,
        config: Settings,
        apify: ApifyClient,
        strategies=TRANSCRIPT_STRATEGIES,
    ):
        self.name = name
        self.actor_id = actor_id
        self._config = config
        self._apify = apify
        self._strategies = strategies

    def is_configured(self) -> bool:
        return self._apify.is_configured()

    async def try_extract(self, url: str, video_id: str) -> ContentPayload | None:
        if not self.is_configured():
            logger.warning(f"[Transcript:{self.name}] APIFY_TOKEN 미설정 - 건너뜀")
            return None

        try:
            items = await self._apify.run_actor(
                self.actor_id,
                build_transcript_input(url, self._config.TRANSCRIPT_LANGUAGE),
                wait_seconds=self._config.TRANSCRIPT_WAIT_SECONDS,
                timeout_margin=self._config.TRANSCRIPT_TIMEOUT_MARGIN_SECONDS,
            )
        except (httpx.HTTPError, ValueError, ProviderResponseError) as error:
            logger.error(f"[Transcript:{self.name}] Actor 호출 실패: {type(error).__name__} - {error}")
            return None

        if not items:
            logger.warning(f"[Transcript:{self.name}] [{video_id}] 결과 없음")
            return None

        item = items[0]
        transcript, strategy = resolve_transcript(item, self._strategies)
        logger.info(
            f"[Transcript:{self.name}] [{video_id}] 자막 {len(transcript)}자 (field={strategy})"
        )

        return ContentPayload(
            sourceId=video_id,
            title=resolve_title(item),
            channelName=resolve_channel(item),
            transcript=transcript or None,
            thumbnailUrl=resolve_thumbnail(item),
            description=resolve_description(item),
            provider=self.name,
        )
