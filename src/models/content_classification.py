"""src.models.content_classification
LLM 콘텐츠 분류 결과 스키마
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from src.models.candidate_place import CandidatePlace


class ContentClassification(BaseModel):
    """
    LLM 분류 결과

    howto 영상은 장소 목록을 갖지 않습니다. (LLM이 채워 보내도 비움)
    """
    videoType: Literal["places", "howto"] = Field(default="places", description="영상 의도 분류")
    summary: str = Field(default="", description="콘텐츠 요약")
    places: list[CandidatePlace] = Field(default_factory=list, description="장소 후보 리스트")
    destination: Optional[str] = Field(default=None, description="주요 여행지 (도시)")
    destinationCountry: Optional[str] = Field(default=None, description="주요 여행지 (국가)")

    @model_validator(mode="after")
    def clear_places_for_howto(self) -> "ContentClassification":
        if self.videoType == "howto":
            self.places = []
        return self
