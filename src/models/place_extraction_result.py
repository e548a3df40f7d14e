"""src.models.place_extraction_result
장소 추출 워크플로우 결과 DTO
"""
from typing import Optional

from pydantic import BaseModel, Field

from src.models.candidate_place import GeocodedPlace
from src.models.content_classification import ContentClassification
from src.models.pipeline_result import PipelineResult


class PlaceExtractionResult(BaseModel):
    """
    콘텐츠 해석 + LLM 분류 + Geocoding 결과

    분류할 텍스트가 없으면 classification은 None 입니다.
    """
    content: PipelineResult = Field(..., description="콘텐츠 해석 결과")
    classification: Optional[ContentClassification] = Field(default=None, description="LLM 분류 결과")
    places: list[GeocodedPlace] = Field(default_factory=list, description="좌표가 확인된 장소 리스트")
    failedPlaces: list[str] = Field(default_factory=list, description="Geocoding에 실패한 장소명")
