"""src.services.preprocess.sns
YouTube 이외 SNS 게시물의 텍스트(캡션/본문)를 수집합니다.

- Instagram: Apify instagram-scraper (캡션 + 위치 태그)
- Reddit: 공개 JSON API (제목 + 본문 + 상위 댓글)
- TikTok: oEmbed (캡션 + 작성자)

모든 수집 실패는 예외 대신 기본 제목만 채운 metadata 결과로 반환됩니다.
"""
import logging

import httpx

from src.core.config import Settings
from src.core.exceptions import ProviderResponseError
from src.models.pipeline_result import MetadataOnlyContent
from src.models.source_reference import SnsPlatform, SourceReference
from src.services.providers.apify_client import ApifyClient
from src.services.providers.field_strategies import join_segments
from src.utils.common import first_present, normalize_whitespace, open_http_client

logger = logging.getLogger(__name__)

REDDIT_JSON_URL = "https://www.reddit.com/comments/{post_id}.json"
TIKTOK_OEMBED_URL = "https://www.tiktok.com/oembed"
REDDIT_USER_AGENT = "yori-place-extractor/1.0"

REDDIT_TOP_COMMENTS = 5
REDDIT_MIN_COMMENT_LENGTH = 10


def _join_description(parts: list[str | None]) -> str | None:
    text = "\n\n".join(part.strip() for part in parts if part and part.strip())
    return text or None


# =============================================
# Instagram
# =============================================
def build_instagram_input(url: str) -> dict:
    return {
        "directUrls": [url],
        "resultsType": "posts",
        "resultsLimit": 1,
    }


def parse_instagram_item(source: SourceReference, item: dict) -> MetadataOnlyContent:
    caption = item.get("caption")
    if not isinstance(caption, str):
        caption = join_segments(caption)
    location_name = item.get("locationName")

    return MetadataOnlyContent(
        platform=SnsPlatform.INSTAGRAM,
        sourceId=source.identifier,
        sourceUrl=source.url,
        title=f"Instagram Post - {source.identifier}",
        channelName=first_present(item, ("ownerUsername", "ownerFullName")) or "Unknown",
        thumbnailUrl=first_present(item, ("displayUrl", "thumbnailUrl")),
        description=_join_description([caption, f"Location: {location_name}" if location_name else None]),
    )


# =============================================
# Reddit
# =============================================
def parse_reddit_listing(source: SourceReference, data) -> MetadataOnlyContent:
    """
    Reddit 게시물 JSON([게시물 listing, 댓글 listing])을 변환합니다.

    Raises:
        ProviderResponseError: listing 구조가 예상과 다른 경우
    """
    if not isinstance(data, list) or not data:
        raise ProviderResponseError("Reddit 응답이 listing 배열이 아닙니다")

    try:
        post = data[0]["data"]["children"][0]["data"]
    except (KeyError, IndexError, TypeError) as error:
        raise ProviderResponseError(f"Reddit 게시물 데이터 누락: {error}") from error

    comments = []
    if len(data) > 1 and isinstance(data[1], dict):
        children = (data[1].get("data") or {}).get("children") or []
        for child in children[:REDDIT_TOP_COMMENTS]:
            body = normalize_whitespace((child.get("data") or {}).get("body"))
            if len(body) > REDDIT_MIN_COMMENT_LENGTH:
                comments.append(body)

    comment_block = "Top comments:\n" + "\n".join(f"- {c}" for c in comments) if comments else None
    thumbnail = post.get("thumbnail")

    return MetadataOnlyContent(
        platform=SnsPlatform.REDDIT,
        sourceId=source.identifier,
        sourceUrl=source.url,
        title=post.get("title") or "Untitled Post",
        channelName=post.get("author") or "Unknown",
        thumbnailUrl=thumbnail if isinstance(thumbnail, str) and thumbnail.startswith("http") else None,
        description=_join_description([post.get("selftext"), comment_block]),
    )


class SnsContentFetcher:
    def __init__(
        self,
        config: Settings,
        apify: ApifyClient | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._config = config
        self._client = client
        self.apify = apify or ApifyClient(config, client)

    async def fetch(self, source: SourceReference) -> MetadataOnlyContent:
        if source.platform == SnsPlatform.INSTAGRAM:
            return await self.fetch_instagram(source)
        if source.platform == SnsPlatform.REDDIT:
            return await self.fetch_reddit(source)
        if source.platform == SnsPlatform.TIKTOK:
            return await self.fetch_tiktok(source)
        raise ValueError(f"SNS 수집 대상이 아닌 플랫폼입니다: {source.platform}")

    def _empty(self, source: SourceReference, title: str) -> MetadataOnlyContent:
        return MetadataOnlyContent(
            platform=source.platform,
            sourceId=source.identifier,
            sourceUrl=source.url,
            title=title,
        )

    async def fetch_instagram(self, source: SourceReference) -> MetadataOnlyContent:
        fallback_title = f"Instagram Post - {source.identifier}"
        if not self.apify.is_configured():
            logger.warning("[Instagram] APIFY_TOKEN 미설정 - 캡션 수집 건너뜀")
            return self._empty(source, fallback_title)

        try:
            items = await self.apify.run_actor(
                self._config.APIFY_INSTAGRAM_ACTOR,
                build_instagram_input(source.url),
                wait_seconds=self._config.INSTAGRAM_WAIT_SECONDS,
                timeout_margin=self._config.TRANSCRIPT_TIMEOUT_MARGIN_SECONDS,
            )
        except (httpx.HTTPError, ValueError, ProviderResponseError) as error:
            logger.error(f"[Instagram] [{source.identifier}] 수집 실패: {error}")
            return self._empty(source, fallback_title)

        if not items:
            logger.warning(f"[Instagram] [{source.identifier}] 결과 없음")
            return self._empty(source, fallback_title)

        logger.info(f"[Instagram] [{source.identifier}] 캡션 수집 완료")
        return parse_instagram_item(source, items[0])

    async def fetch_reddit(self, source: SourceReference) -> MetadataOnlyContent:
        timeout = self._config.METADATA_TIMEOUT_SECONDS
        try:
            async with open_http_client(self._client, timeout=timeout) as client:
                response = await client.get(
                    REDDIT_JSON_URL.format(post_id=source.identifier),
                    headers={"User-Agent": REDDIT_USER_AGENT},
                    timeout=timeout,
                    follow_redirects=True,
                )
                response.raise_for_status()
                content = parse_reddit_listing(source, response.json())
        except (httpx.HTTPError, ValueError, ProviderResponseError) as error:
            logger.error(f"[Reddit] [{source.identifier}] 수집 실패: {error}")
            return self._empty(source, "Untitled Post")

        logger.info(f"[Reddit] [{source.identifier}] 게시물 수집 완료: {content.title}")
        return content

    async def fetch_tiktok(self, source: SourceReference) -> MetadataOnlyContent:
        fallback_title = f"TikTok Video - {source.identifier}"
        timeout = self._config.METADATA_TIMEOUT_SECONDS
        try:
            async with open_http_client(self._client, timeout=timeout) as client:
                response = await client.get(
                    TIKTOK_OEMBED_URL,
                    params={"url": source.url},
                    timeout=timeout,
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as error:
            logger.error(f"[TikTok] [{source.identifier}] oEmbed 요청 실패: {error}")
            return self._empty(source, fallback_title)

        if not isinstance(data, dict):
            return self._empty(source, fallback_title)

        # TikTok oEmbed의 title은 게시물 캡션 전체
        caption = normalize_whitespace(data.get("title"))
        return MetadataOnlyContent(
            platform=SnsPlatform.TIKTOK,
            sourceId=source.identifier,
            sourceUrl=source.url,
            title=caption[:100] or fallback_title,
            channelName=data.get("author_name") or "Unknown",
            thumbnailUrl=data.get("thumbnail_url"),
            description=caption or None,
        )
