"""src.models.candidate_place
LLM이 추출한 장소 후보 / Geocoding 결과 스키마
"""
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlaceCategory(str, Enum):
    FOOD = "food"
    ACCOMMODATION = "accommodation"
    PLACE = "place"
    SHOPPING = "shopping"
    ACTIVITY = "activity"
    TIP = "tip"


class CandidatePlace(BaseModel):
    """
    장소 후보 (Geocoding 이전)

    Snippet
    {
        "name": "Ichiran Ramen Shibuya",
        "category": "food",
        "description": "Solo-booth tonkotsu ramen",
        "location": "Shibuya, Tokyo"
    }
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="장소명")
    category: PlaceCategory = Field(default=PlaceCategory.PLACE, description="카테고리")
    description: str = Field(default="", description="장소 설명")
    location: Optional[str] = Field(default=None, description="도시/지역 힌트 (Geocoding 보정용)")
    parentLocation: Optional[str] = Field(default=None, description="상위 장소 (예: 쇼핑몰 안의 식당)")
    placeType: Optional[str] = Field(default=None, description="장소 유형 (zoo, mall 등)")
    cuisineType: Optional[str] = Field(default=None, description="음식 종류 (식당인 경우)")
    tags: list[str] = Field(default_factory=list, description="태그")

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, value):
        # LLM이 정의되지 않은 카테고리를 반환하면 place로 취급
        if isinstance(value, PlaceCategory):
            return value
        normalized = str(value or "").strip().lower()
        if normalized in {c.value for c in PlaceCategory}:
            return normalized
        return PlaceCategory.PLACE

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, value):
        return value or ""


class GeocodedPlace(CandidatePlace):
    """CandidatePlace + 좌표 / 정규화된 주소"""
    latitude: float = Field(..., description="위도")
    longitude: float = Field(..., description="경도")
    formattedAddress: str = Field(..., description="Geocoding API가 반환한 주소")
    confidence: Literal["high", "medium", "low"] = Field(default="low", description="신뢰도 등급")
    confidenceScore: int = Field(default=0, ge=0, le=100, description="신뢰도 점수 (참고용)")
