"""src.models.content_payload
Provider로부터 정규화된 콘텐츠 스키마
"""
from typing import Optional

from pydantic import BaseModel, Field


class ContentPayload(BaseModel):
    """
    Transcript Resolver 및 SNS 수집기가 반환하는 정규화된 콘텐츠

    transcript 또는 description 중 하나 이상이 있어야 분류 단계가 의미를 가집니다.
    """
    sourceId: Optional[str] = Field(default=None, description="플랫폼 고유 식별자")
    title: Optional[str] = Field(default=None, description="제목")
    channelName: Optional[str] = Field(default=None, description="채널명 / 작성자")
    transcript: Optional[str] = Field(default=None, description="자막 텍스트")
    thumbnailUrl: Optional[str] = Field(default=None, description="썸네일 URL")
    description: Optional[str] = Field(default=None, description="본문 / 설명 텍스트")
    provider: Optional[str] = Field(default=None, description="데이터를 제공한 Provider 이름")
