"""src.models.place_extraction_request
장소 추출 요청 DTO
"""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class PlaceExtractionRequest(BaseModel):
    """
    장소 추출 요청 DTO
    백엔드(또는 앱)로부터 받는 요청 데이터 구조
    """
    contentId: Optional[UUID] = Field(default=None, description="Content UUID (비동기 콜백 시 필수)")
    snsUrl: str = Field(..., min_length=1, description="공유된 SNS URL (YouTube, Instagram, Reddit, TikTok)")

    class Config:
        json_schema_extra = {
            "example": {
                "contentId": "550e8400-e29b-41d4-a716-446655440000",
                "snsUrl": "https://www.youtube.com/watch?v=VcuM9JvZrp4"
            }
        }


class VideoContentRequest(BaseModel):
    url: str = Field(..., min_length=1, description="YouTube URL")
