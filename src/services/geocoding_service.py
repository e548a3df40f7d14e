"""src.services.geocoding_service
Google Geocoding API로 장소 후보를 좌표로 변환합니다.

- 장소 단위로 실패를 격리합니다 (한 장소의 실패가 다른 장소에 영향 없음)
- 첫 번째 결과를 채택하며, 신뢰도 점수는 참고용으로만 기록합니다
- 호출 사이에 짧은 지연을 두어 rate limit을 회피합니다
"""
import asyncio
import logging

import httpx
from pydantic import ValidationError

from src.core.config import Settings
from src.models.candidate_place import CandidatePlace, GeocodedPlace
from src.utils.common import open_http_client

logger = logging.getLogger(__name__)

# =============================================
# 신뢰도 점수 기준
# =============================================
PRECISE_TYPES = {"establishment", "point_of_interest"}
ADDRESS_TYPES = {"street_address", "route"}
AREA_TYPES = {"locality", "neighborhood"}

HIGH_CONFIDENCE_SCORE = 75
MEDIUM_CONFIDENCE_SCORE = 50


def build_query(place: CandidatePlace) -> str:
    if place.location:
        return f"{place.name}, {place.location}"
    return place.name


def calculate_confidence(place_name: str, result: dict, total_results: int) -> int:
    """
    Geocoding 결과의 정밀도를 0~100 점수로 환산합니다.

    - 결과 타입 (최대 40)
    - 장소명 단어가 주소에 포함되는 비율 (최대 30)
    - 주소 구성요소 개수 (최대 20)
    - 결과의 유일성 (최대 10)
    """
    score = 0

    raw_types = result.get("types")
    types = {t for t in raw_types if isinstance(t, str)} if isinstance(raw_types, list) else set()
    if types & PRECISE_TYPES:
        score += 40
    elif types & ADDRESS_TYPES:
        score += 25
    elif types & AREA_TYPES:
        score += 10

    address = result.get("formatted_address")
    formatted = address.lower() if isinstance(address, str) else ""
    words = [word for word in place_name.lower().split() if len(word) > 2]
    if words:
        matched = sum(1 for word in words if word in formatted)
        score += round(matched / len(words) * 30)

    components = result.get("address_components")
    components = components if isinstance(components, list) else []
    if len(components) >= 5:
        score += 20
    elif len(components) >= 3:
        score += 10

    if total_results == 1:
        score += 10
    elif total_results <= 3:
        score += 5

    return min(score, 100)


def confidence_level(score: int) -> str:
    if score >= HIGH_CONFIDENCE_SCORE:
        return "high"
    if score >= MEDIUM_CONFIDENCE_SCORE:
        return "medium"
    return "low"


class GeocodingService:
    def __init__(self, config: Settings, client: httpx.AsyncClient | None = None):
        self._config = config
        self._client = client

    def is_configured(self) -> bool:
        return bool(self._config.GOOGLE_MAPS_API_KEY)

    async def geocode_place(self, place: CandidatePlace) -> GeocodedPlace | None:
        """
        장소 하나를 Geocoding 합니다.
        결과 없음, HTTP 오류, 잘못된 응답은 모두 None으로 처리합니다.
        """
        if not self.is_configured():
            logger.warning("[Geocoding] GOOGLE_MAPS_API_KEY 미설정 - 건너뜀")
            return None

        query = build_query(place)
        try:
            async with open_http_client(self._client, self._config.GEOCODING_TIMEOUT_SECONDS) as client:
                response = await client.get(
                    self._config.GEOCODING_API_URL,
                    params={"address": query, "key": self._config.GOOGLE_MAPS_API_KEY},
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as error:
            logger.warning(f"[Geocoding] 요청 실패 ({query}): {error}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"[Geocoding] 잘못된 응답 형식 ({query})")
            return None

        results = data.get("results") or []
        if data.get("status") != "OK" or not results:
            logger.info(f"[Geocoding] 결과 없음 ({query}): status={data.get('status')}")
            return None
        if not isinstance(results, list) or not isinstance(results[0], dict):
            logger.warning(f"[Geocoding] 잘못된 결과 형식 ({query})")
            return None

        first = results[0]
        geometry = first.get("geometry")
        location = geometry.get("location") if isinstance(geometry, dict) else None
        if not isinstance(location, dict) or "lat" not in location or "lng" not in location:
            logger.warning(f"[Geocoding] 좌표 누락 ({query})")
            return None

        score = calculate_confidence(place.name, first, len(results))
        formatted = first.get("formatted_address")
        try:
            geocoded = GeocodedPlace(
                **place.model_dump(),
                latitude=location["lat"],
                longitude=location["lng"],
                formattedAddress=formatted if isinstance(formatted, str) and formatted else query,
                confidence=confidence_level(score),
                confidenceScore=score,
            )
        except ValidationError as error:
            logger.warning(f"[Geocoding] 좌표 검증 실패 ({query}): {error}")
            return None
        logger.info(f"[Geocoding] {place.name} -> ({geocoded.latitude}, {geocoded.longitude}) [{geocoded.confidence}]")
        return geocoded

    async def geocode_places(self, places: list[CandidatePlace]) -> list[GeocodedPlace | None]:
        """입력 순서를 유지한 결과 리스트를 반환합니다 (실패한 자리는 None)."""
        results: list[GeocodedPlace | None] = []
        for index, place in enumerate(places):
            if index > 0 and self._config.GEOCODING_DELAY_SECONDS > 0:
                await asyncio.sleep(self._config.GEOCODING_DELAY_SECONDS)
            results.append(await self.geocode_place(place))

        succeeded = sum(1 for result in results if result is not None)
        logger.info(f"[Geocoding] {succeeded}/{len(places)}개 장소 좌표 변환 완료")
        return results
