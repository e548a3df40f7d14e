"""src.models.pipeline_result
콘텐츠 해석 파이프라인의 최종 결과 스키마

resultType 값에 따라 정확히 하나의 변형만 채워집니다.
- transcript: 자막 확보 -> 텍스트 분류로 진행
- video: 자막 없음, 영상 URL 확보 -> 영상 분석으로 진행
- metadata: 자막/영상 모두 실패 -> 제목/작성자/썸네일만 반환
"""
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from src.models.source_reference import SnsPlatform


class _ContentBase(BaseModel):
    platform: SnsPlatform = Field(default=SnsPlatform.YOUTUBE, description="SNS 플랫폼")
    sourceId: str = Field(..., description="플랫폼 고유 식별자")
    sourceUrl: str = Field(..., description="원본 URL")
    title: str = Field(..., description="제목")
    channelName: str = Field(default="Unknown", description="채널명 / 작성자")
    thumbnailUrl: Optional[str] = Field(default=None, description="썸네일 URL")
    description: Optional[str] = Field(default=None, description="본문 / 설명 텍스트")


class TranscriptContent(_ContentBase):
    resultType: Literal["transcript"] = "transcript"
    transcript: str = Field(..., description="정규화된 자막 텍스트")


class VideoAssetContent(_ContentBase):
    resultType: Literal["video"] = "video"
    videoDownloadUrl: str = Field(..., description="분석용 영상 다운로드 URL")
    duration: float = Field(default=0, description="영상 길이 (초)")
    fileSize: Optional[int] = Field(default=None, description="파일 크기 (bytes)")


class MetadataOnlyContent(_ContentBase):
    resultType: Literal["metadata"] = "metadata"


PipelineResult = Annotated[
    Union[TranscriptContent, VideoAssetContent, MetadataOnlyContent],
    Field(discriminator="resultType"),
]
