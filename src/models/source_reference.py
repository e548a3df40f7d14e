"""src.models.source_reference
공유된 URL의 플랫폼 / 식별자 스키마
"""
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SnsPlatform(str, Enum):
    YOUTUBE = "YOUTUBE"
    INSTAGRAM = "INSTAGRAM"
    REDDIT = "REDDIT"
    TIKTOK = "TIKTOK"


class SourceReference(BaseModel):
    """
    URL 분류 결과

    Snippet
    {
        "platform": "YOUTUBE",
        "url": "https://www.youtube.com/watch?v=VcuM9JvZrp4",
        "identifier": "VcuM9JvZrp4",
        "contentType": "video"
    }
    """
    model_config = ConfigDict(frozen=True)

    platform: SnsPlatform = Field(..., description="SNS 플랫폼")
    url: str = Field(..., description="원본 URL")
    identifier: str = Field(..., description="플랫폼 고유 식별자 (예: 11자리 YouTube video id)")
    contentType: Literal["video", "post"] = Field(default="video", description="콘텐츠 유형")
