"""src.models.video_asset
다운로드 가능한 영상 URL 스키마
"""
from typing import Optional

from pydantic import BaseModel, Field


class VideoAsset(BaseModel):
    downloadUrl: str = Field(..., description="영상 다운로드 URL")
    title: str = Field(default="YouTube Video", description="영상 제목")
    duration: float = Field(default=0, description="영상 길이 (초)")
    fileSize: Optional[int] = Field(default=None, description="파일 크기 (bytes)")
