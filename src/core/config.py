"""src.core.config.py
.env 파일에서 API키와 파이프라인 설정값을 할당합니다.

각 서비스는 모듈 전역 settings를 직접 읽지 않고,
생성 시점에 Settings 인스턴스를 전달받습니다.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # 인증 정보 (미설정 시 빈 문자열 -> is_configured()에서 False)
    GOOGLE_API_KEY: str = ""
    GOOGLE_MAPS_API_KEY: str = ""
    APIFY_TOKEN: str = ""
    AI_SERVER_API_KEY: str = ""
    BACKEND_CALLBACK_URL: str = ""
    BACKEND_API_KEY: str = ""

    # LLM
    GEMINI_MODEL: str = "gemini-2.5-flash"
    CLASSIFIER_MAX_INPUT_CHARS: int = 30000

    # Apify
    APIFY_API_BASE: str = "https://api.apify.com/v2"
    APIFY_TRANSCRIPT_ACTOR: str = "pintostudio~youtube-transcript-scraper"
    APIFY_FALLBACK_TRANSCRIPT_ACTOR: str = "starvibe~youtube-video-transcript"
    APIFY_VIDEO_DOWNLOAD_ACTOR: str = "streamers~youtube-video-downloader"
    APIFY_INSTAGRAM_ACTOR: str = "apify~instagram-scraper"
    TRANSCRIPT_WAIT_SECONDS: int = 120
    VIDEO_DOWNLOAD_WAIT_SECONDS: int = 180
    INSTAGRAM_WAIT_SECONDS: int = 120
    TRANSCRIPT_TIMEOUT_MARGIN_SECONDS: int = 10
    VIDEO_DOWNLOAD_TIMEOUT_MARGIN_SECONDS: int = 20

    # 메타데이터 (oEmbed, Reddit JSON)
    METADATA_TIMEOUT_SECONDS: float = 10.0

    # 파이프라인 정책
    TRANSCRIPT_MIN_LENGTH: int = 50  # 이 길이 이하의 자막은 노이즈로 취급
    TRANSCRIPT_LANGUAGE: str = "en"

    # Geocoding
    GEOCODING_API_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    GEOCODING_DELAY_SECONDS: float = 0.05
    GEOCODING_TIMEOUT_SECONDS: float = 10.0

    ENVIRONMENT: str = "dev"  # dev: 로컬, prod: 서버환경
    LOG_LEVEL: str = "INFO"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def is_apify_configured(self) -> bool:
        return bool(self.APIFY_TOKEN)


settings = Settings()
