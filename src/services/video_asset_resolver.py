"""src.services.video_asset_resolver
자막이 없는 영상(주로 Shorts)을 분석하기 위한 다운로드 URL 확보

비용과 분석 시간을 줄이기 위해 가장 낮은 화질을 요청합니다.
"""
import logging

import httpx

from src.core.config import Settings
from src.core.exceptions import ProviderResponseError
from src.models.video_asset import VideoAsset
from src.services.providers.apify_client import ApifyClient
from src.utils.common import first_present
from src.utils.url_classifier import require_youtube_id

logger = logging.getLogger(__name__)

# Actor마다 다운로드 URL 필드명이 다름
DOWNLOAD_URL_FIELDS = (
    "videoUrl",
    "downloadUrl",
    "url",
    "video_url",
    "mediaUrl",
    "media_url",
    "fileUrl",
    "file_url",
)


def _as_number(value, default=None):
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


class VideoAssetResolver:
    def __init__(
        self,
        config: Settings,
        apify: ApifyClient | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._config = config
        self._apify = apify or ApifyClient(config, client)

    def is_configured(self) -> bool:
        return self._apify.is_configured()

    async def resolve(self, url: str) -> VideoAsset | None:
        """
        Apify 다운로드 Actor로 영상 URL을 요청합니다.

        Returns:
            VideoAsset 또는 None (결과 없음, URL 필드 없음, Provider 오류, 토큰 미설정)

        Raises:
            InvalidUrlError: YouTube video id를 추출할 수 없는 경우
        """
        video_id = require_youtube_id(url)

        if not self.is_configured():
            logger.warning(f"[VideoAsset] [{video_id}] APIFY_TOKEN 미설정 - 건너뜀")
            return None

        run_input = {
            "startUrls": [{"url": url}],
            "urls": [url],
            "downloadVideo": True,
            "quality": "lowest",
            "maxVideos": 1,
        }

        try:
            logger.info(f"[VideoAsset] [{video_id}] 영상 다운로드 요청")
            items = await self._apify.run_actor(
                self._config.APIFY_VIDEO_DOWNLOAD_ACTOR,
                run_input,
                wait_seconds=self._config.VIDEO_DOWNLOAD_WAIT_SECONDS,
                timeout_margin=self._config.VIDEO_DOWNLOAD_TIMEOUT_MARGIN_SECONDS,
            )
        except (httpx.HTTPError, ValueError, ProviderResponseError) as error:
            logger.error(f"[VideoAsset] [{video_id}] 다운로드 Actor 오류: {type(error).__name__} - {error}")
            return None

        if not items:
            logger.warning(f"[VideoAsset] [{video_id}] 다운로드 결과 없음")
            return None

        item = items[0]
        download_url = first_present(item, DOWNLOAD_URL_FIELDS)
        if not isinstance(download_url, str):
            logger.warning(f"[VideoAsset] [{video_id}] 다운로드 URL 필드 없음. 필드 목록: {list(item.keys())}")
            return None

        file_size = _as_number(item.get("fileSize"))
        asset = VideoAsset(
            downloadUrl=download_url,
            title=item.get("title") or "YouTube Video",
            duration=_as_number(item.get("duration"), 0),
            fileSize=int(file_size) if file_size is not None else None,
        )
        logger.info(f"[VideoAsset] [{video_id}] 다운로드 URL 확보: {download_url[:50]}...")
        return asset
