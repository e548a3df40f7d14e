"""src.models.callback_request.py
AI -> 백엔드 요청 DTO
"""

from pydantic import BaseModel, Field, model_validator
from typing import List, Literal, Optional
from uuid import UUID

from src.models.candidate_place import GeocodedPlace
from src.models.content_classification import ContentClassification
from src.models.pipeline_result import PipelineResult


class AiCallbackRequest(BaseModel):
    contentId: UUID = Field(..., description="Content UUID")
    resultStatus: Literal["SUCCESS", "FAILED"] = Field(..., description="처리 결과 상태")
    snsPlatform: Literal["INSTAGRAM", "YOUTUBE", "REDDIT", "TIKTOK", "UNKNOWN"] = Field(
        ..., description="SNS 플랫폼"
    )
    content: Optional[PipelineResult] = Field(default=None, description="콘텐츠 정보 (SUCCESS 시 필수)")
    classification: Optional[ContentClassification] = Field(default=None, description="LLM 분류 결과")
    places: List[GeocodedPlace] = Field(default_factory=list, description="장소 정보 리스트")
    failedPlaces: List[str] = Field(default_factory=list, description="Geocoding 실패 장소명")
    errorMessage: Optional[str] = Field(default=None, description="FAILED 시 오류 메시지")

    @model_validator(mode="after")
    def validate_success_payload(self) -> "AiCallbackRequest":
        if self.resultStatus == "SUCCESS":
            if self.content is None:
                raise ValueError("content is required when resultStatus is SUCCESS")
        else:
            self.places = []
        return self
