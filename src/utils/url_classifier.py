"""src.utils.url_classifier
공유된 URL에서 플랫폼과 고유 식별자를 추출합니다.
네트워크 요청 없이 정규식만 사용하며, 인식하지 못한 URL은 실패로 처리합니다.
"""
import logging
import re

from src.core.exceptions import InvalidUrlError
from src.models.source_reference import SnsPlatform, SourceReference

logger = logging.getLogger(__name__)


# =============================================
# 플랫폼별 URL 패턴
# =============================================
# YouTube video id는 정확히 11자의 [a-zA-Z0-9_-]
_YOUTUBE_ID = r"([a-zA-Z0-9_-]{11})(?![a-zA-Z0-9_-])"
YOUTUBE_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?(?:[^#\s]*&)?v=|youtu\.be/|youtube\.com/shorts/)" + _YOUTUBE_ID),
    re.compile(r"youtube\.com/embed/" + _YOUTUBE_ID),
]
INSTAGRAM_PATTERN = re.compile(r"instagram\.com/(?:[\w.]+/)?(p|reels?|tv)/([A-Za-z0-9_-]+)")
REDDIT_PATTERNS = [
    re.compile(r"reddit\.com/r/[^/\s]+/comments/([A-Za-z0-9]+)"),
    re.compile(r"reddit\.com/comments/([A-Za-z0-9]+)"),
    re.compile(r"redd\.it/([A-Za-z0-9]+)"),
]
TIKTOK_PATTERNS = [
    re.compile(r"tiktok\.com/@[\w.-]+/video/(\d+)"),
    re.compile(r"(?:vm|vt)\.tiktok\.com/([A-Za-z0-9]+)"),
]


# =============================================
# 식별자 추출 함수
# =============================================
def extract_youtube_id(url: str) -> str | None:
    """
    유튜브 URL로부터 video_id를 추출합니다.
    watch?v=, youtu.be/, /shorts/ 패턴을 먼저 확인하고 /embed/ 패턴을 확인합니다.
    """
    if not url:
        return None
    for pattern in YOUTUBE_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def extract_instagram_id(url: str) -> str | None:
    """/p/, /reel/, /reels/, /tv/ 패턴의 shortcode를 추출합니다."""
    match = INSTAGRAM_PATTERN.search(url or "")
    return match.group(2) if match else None


def extract_reddit_post_id(url: str) -> str | None:
    for pattern in REDDIT_PATTERNS:
        match = pattern.search(url or "")
        if match:
            return match.group(1)
    return None


def extract_tiktok_id(url: str) -> str | None:
    for pattern in TIKTOK_PATTERNS:
        match = pattern.search(url or "")
        if match:
            return match.group(1)
    return None


# =============================================
# URL 분류
# =============================================
def classify_url(url: str) -> SourceReference:
    """
    URL을 분석하여 플랫폼과 식별자를 반환합니다.

    Raises:
        InvalidUrlError: 지원하지 않는 플랫폼이거나 식별자를 추출할 수 없는 경우
    """
    url = (url or "").strip()

    video_id = extract_youtube_id(url)
    if video_id:
        return SourceReference(platform=SnsPlatform.YOUTUBE, url=url, identifier=video_id, contentType="video")

    instagram_match = INSTAGRAM_PATTERN.search(url)
    if instagram_match:
        content_type = "post" if instagram_match.group(1) == "p" else "video"
        return SourceReference(
            platform=SnsPlatform.INSTAGRAM,
            url=url,
            identifier=instagram_match.group(2),
            contentType=content_type,
        )

    post_id = extract_reddit_post_id(url)
    if post_id:
        return SourceReference(platform=SnsPlatform.REDDIT, url=url, identifier=post_id, contentType="post")

    tiktok_id = extract_tiktok_id(url)
    if tiktok_id:
        return SourceReference(platform=SnsPlatform.TIKTOK, url=url, identifier=tiktok_id, contentType="video")

    logger.warning(f"[URL] 지원하지 않는 URL 형식: {url}")
    raise InvalidUrlError(f"지원하지 않는 URL 형식입니다: {url}")


def require_youtube_id(url: str) -> str:
    """YouTube video id를 추출하고, 실패하면 InvalidUrlError를 발생시킵니다."""
    video_id = extract_youtube_id(url)
    if not video_id:
        raise InvalidUrlError(f"유효한 유튜브 URL이 아닙니다: {url}")
    return video_id
