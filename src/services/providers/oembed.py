"""src.services.providers.oembed
YouTube oEmbed 메타데이터 Provider (인증 불필요, 자막 없음)
"""
import logging

import httpx

from src.core.config import Settings
from src.models.content_payload import ContentPayload
from src.services.providers.base import ContentProvider
from src.utils.common import open_http_client

logger = logging.getLogger(__name__)

YOUTUBE_OEMBED_URL = "https://www.youtube.com/oembed"


def youtube_watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def youtube_thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"


class YouTubeOEmbedProvider(ContentProvider):
    name = "youtube-oembed"

    def __init__(self, config: Settings, client: httpx.AsyncClient | None = None):
        self._config = config
        self._client = client

    async def try_extract(self, url: str, video_id: str) -> ContentPayload | None:
        params = {"url": youtube_watch_url(video_id), "format": "json"}
        timeout = self._config.METADATA_TIMEOUT_SECONDS

        try:
            async with open_http_client(self._client, timeout=timeout) as client:
                response = await client.get(YOUTUBE_OEMBED_URL, params=params, timeout=timeout)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as error:
            logger.error(f"[oEmbed] [{video_id}] 메타데이터 요청 실패: {error}")
            return None

        if not isinstance(data, dict):
            logger.error(f"[oEmbed] [{video_id}] 예상하지 못한 응답 형식")
            return None

        logger.info(f"[oEmbed] [{video_id}] 메타데이터 확보 완료")
        return ContentPayload(
            sourceId=video_id,
            title=data.get("title"),
            channelName=data.get("author_name"),
            thumbnailUrl=data.get("thumbnail_url"),
            provider=self.name,
        )
