"""src.services.providers.base
콘텐츠 Provider 공통 인터페이스
"""
from abc import ABC, abstractmethod

from src.models.content_payload import ContentPayload


class ContentProvider(ABC):
    """
    외부 서비스 하나를 감싸는 어댑터

    응답 스키마 차이는 각 어댑터 안에서만 처리하고,
    밖으로는 ContentPayload 또는 None만 반환합니다.
    """

    name: str = "provider"

    @abstractmethod
    async def try_extract(self, url: str, video_id: str) -> ContentPayload | None:
        """
        콘텐츠를 가져옵니다.

        네트워크 오류, 타임아웃, 빈 결과는 모두 None으로 반환하며 예외를 던지지 않습니다.
        """

    def is_configured(self) -> bool:
        """인증 정보가 필요한 Provider는 재정의합니다."""
        return True
