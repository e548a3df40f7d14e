"""src.models
API 요청/응답 및 파이프라인에 사용되는 Pydantic 스키마 정의
"""
from src.models.source_reference import SnsPlatform, SourceReference
from src.models.content_payload import ContentPayload
from src.models.candidate_place import PlaceCategory, CandidatePlace, GeocodedPlace
from src.models.content_classification import ContentClassification
from src.models.video_asset import VideoAsset
from src.models.pipeline_result import (
    PipelineResult,
    TranscriptContent,
    VideoAssetContent,
    MetadataOnlyContent,
)
from src.models.place_extraction_request import PlaceExtractionRequest, VideoContentRequest
from src.models.place_extraction_result import PlaceExtractionResult

__all__ = [
    "SnsPlatform",
    "SourceReference",
    "ContentPayload",
    "PlaceCategory",
    "CandidatePlace",
    "GeocodedPlace",
    "ContentClassification",
    "VideoAsset",
    "PipelineResult",
    "TranscriptContent",
    "VideoAssetContent",
    "MetadataOnlyContent",
    "PlaceExtractionRequest",
    "VideoContentRequest",
    "PlaceExtractionResult",
]
