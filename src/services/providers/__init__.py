"""src.services.providers
외부 스크래핑 서비스 어댑터 모음
"""
from src.services.providers.base import ContentProvider
from src.services.providers.apify_client import ApifyClient
from src.services.providers.apify_transcript import ApifyTranscriptProvider
from src.services.providers.oembed import YouTubeOEmbedProvider

__all__ = ["ContentProvider", "ApifyClient", "ApifyTranscriptProvider", "YouTubeOEmbedProvider"]
