"""src.services.modules.llm
콘텐츠의 텍스트(자막/본문)를 기반으로 LLM을 통해 영상 의도를 분류하고 장소 후보를 추출합니다.

- places: 방문 가능한 장소를 소개하는 콘텐츠 -> 장소 후보 리스트
- howto: 방법/정보 위주 콘텐츠 -> 장소 리스트는 항상 비어 있음

응답 파싱 실패는 복구하지 않고 ClassifierResponseError로 전파합니다.
"""
import json
import logging

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from src.core.config import Settings
from src.core.exceptions import ClassifierResponseError, CustomError
from src.models.content_classification import ContentClassification
from src.utils.common import truncate

logger = logging.getLogger(__name__)


# =============================================
# 프롬프트 템플릿
# =============================================
RESPONSE_FORMAT = """RESPOND ONLY WITH VALID JSON:
{
  "video_type": "places" or "howto",
  "summary": "Brief summary",
  "destination": "Tokyo",
  "destination_country": "Japan",
  "places": [
    {
      "name": "Safari World Bangkok",
      "category": "food" or "accommodation" or "place" or "shopping" or "activity" or "tip",
      "description": "Large open zoo. Highlights:\\n- Giraffe Terrace: feed giraffes (150 THB)",
      "location": "Bangkok",
      "parent_location": null,
      "place_type": "zoo",
      "cuisine_type": null,
      "tags": ["family"]
    }
  ]
}"""

CLASSIFICATION_PROMPT = """Analyze this travel content and extract only the MAJOR geographical locations (Hero Places) it recommends or visits.

RULES FOR EXTRACTION:
1. CLASSIFY first: use "places" when the content visits or recommends specific places, "howto" when it explains how to do something (packing, visas, budgeting) without recommending places. For "howto", return an empty "places" list.
2. Identify the "HERO" locations: the main destinations the creator actually spent time at or recommends.
3. ONE PIN PER COMPLEX: if several spots sit inside one complex (restaurants inside a mall), create ONE entry for the parent place and list the spots in its description.
4. IGNORE TRANSIT POINTS: skip pickup points, meeting spots and airports unless they are a destination.
5. "location" must be the city or area of the place, so it can be found on a map.

Title: {title}

{content}

{response_format}"""

VIDEO_PROMPT = """Analyze this {platform} travel video and extract only the MAJOR geographical locations (Hero Places) visited.

RULES FOR EXTRACTION:
1. CLASSIFY first: "places" or "howto". For "howto", return an empty "places" list.
2. ONE PIN PER COMPLEX: create ONE entry for a parent place and list the spots inside it in its description.
3. Read ALL on-screen text carefully: restaurant names, shop signs, logos and storefront text.
{title_info}{caption_info}

{response_format}"""


def build_classification_prompt(
    title: str | None,
    transcript: str | None,
    description: str | None,
    max_chars: int,
) -> str:
    if transcript and transcript.strip():
        content = f"Transcript:\n{truncate(transcript, max_chars)}"
    else:
        content = f"Description:\n{truncate(description or '', max_chars)}"
    return CLASSIFICATION_PROMPT.format(
        title=title or "Untitled",
        content=content,
        response_format=RESPONSE_FORMAT,
    )


# =============================================
# 응답 파싱
# =============================================
def strip_code_fences(text: str) -> str:
    """```json ... ``` 형태의 Markdown 코드 펜스를 제거합니다."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        first_newline = cleaned.find("\n")
        cleaned = cleaned[first_newline + 1:] if first_newline != -1 else cleaned[3:]
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
    return cleaned.strip()


def extract_first_json_object(text: str) -> str:
    """
    문자열 리터럴을 고려한 중괄호 매칭으로 첫 번째 최상위 JSON 객체를 잘라냅니다.

    Raises:
        ClassifierResponseError: 객체 시작이 없거나 중괄호가 닫히지 않은 경우
    """
    start = text.find("{")
    if start == -1:
        raise ClassifierResponseError("LLM 응답에 JSON 객체가 없습니다")

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]

    raise ClassifierResponseError("LLM 응답의 JSON 객체가 닫히지 않았습니다")


def _to_model_fields(data: dict) -> dict:
    """LLM 응답(snake_case)을 ContentClassification 필드로 변환합니다."""
    video_type = str(data.get("video_type") or data.get("videoType") or "places").strip().lower()
    places = data.get("places") or []
    if not isinstance(places, list):
        raise ClassifierResponseError("places 필드가 리스트가 아닙니다")

    return {
        # guide 등 정의되지 않은 값은 장소 소개 콘텐츠로 취급
        "videoType": "howto" if video_type == "howto" else "places",
        "summary": data.get("summary") or "",
        "destination": data.get("destination"),
        "destinationCountry": data.get("destination_country") or data.get("destinationCountry"),
        "places": [
            {
                "name": place.get("name"),
                "category": place.get("category"),
                "description": place.get("description"),
                "location": place.get("location"),
                "parentLocation": place.get("parent_location") or place.get("parentLocation"),
                "placeType": place.get("place_type") or place.get("placeType"),
                "cuisineType": place.get("cuisine_type") or place.get("cuisineType"),
                "tags": place.get("tags") or [],
            }
            for place in places
            if isinstance(place, dict)
        ],
    }


def parse_classification(text: str | None) -> ContentClassification:
    """
    LLM 응답 텍스트를 ContentClassification으로 변환합니다.

    Raises:
        ClassifierResponseError: 빈 응답, JSON 파싱 실패, 스키마 검증 실패
    """
    if not text or not text.strip():
        raise ClassifierResponseError("LLM 응답이 비어 있습니다")

    body = extract_first_json_object(strip_code_fences(text))
    try:
        data = json.loads(body)
    except json.JSONDecodeError as error:
        raise ClassifierResponseError(f"JSON 파싱 실패: {error}") from error

    try:
        return ContentClassification.model_validate(_to_model_fields(data))
    except ValidationError as error:
        raise ClassifierResponseError(f"LLM 응답 스키마 검증 실패: {error}") from error


# =============================================
# LLM 호출
# =============================================
class ContentClassifier:
    def __init__(self, config: Settings, client: genai.Client | None = None):
        self._config = config
        self._client = client

    def is_configured(self) -> bool:
        return self._client is not None or bool(self._config.GOOGLE_API_KEY)

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._config.GOOGLE_API_KEY)
        return self._client

    async def _generate(self, contents) -> str:
        try:
            response = await self._get_client().aio.models.generate_content(
                model=self._config.GEMINI_MODEL,
                contents=contents,
                config={
                    "response_mime_type": "application/json",
                    "temperature": 0.1,
                },
            )
        except genai_errors.APIError as error:
            logger.error(f"[LLM] Gemini 호출 실패: {error}")
            raise CustomError(f"LLM 응답 생성에 실패했습니다: {error}") from error
        logger.info("[LLM] 응답 수신 완료")
        return response.text

    async def classify(
        self,
        title: str | None,
        transcript: str | None = None,
        description: str | None = None,
    ) -> ContentClassification:
        """
        제목 + (자막 또는 본문)을 분류합니다.

        Raises:
            ClassifierResponseError: 응답을 파싱할 수 없는 경우
            CustomError: Gemini 호출 자체가 실패한 경우
        """
        prompt = build_classification_prompt(
            title, transcript, description, self._config.CLASSIFIER_MAX_INPUT_CHARS
        )
        result = parse_classification(await self._generate(prompt))
        logger.info(f"[LLM] 분류 결과: {result.videoType}, 장소 {len(result.places)}개")
        return result

    async def classify_video(
        self,
        video_url: str,
        title: str | None = None,
        caption: str | None = None,
        platform: str = "youtube",
        mime_type: str = "video/youtube",
    ) -> ContentClassification:
        """자막이 없는 영상을 Gemini 영상 입력(file URI)으로 직접 분석합니다."""
        prompt = VIDEO_PROMPT.format(
            platform=platform,
            title_info=f'\nVideo title: "{title}"' if title else "",
            caption_info=f'\nAdditional context: "{truncate(caption, self._config.CLASSIFIER_MAX_INPUT_CHARS)}"' if caption else "",
            response_format=RESPONSE_FORMAT,
        )
        logger.info(f"[LLM] 영상 직접 분석 요청: {video_url}")
        contents = [
            types.Part.from_uri(file_uri=video_url, mime_type=mime_type),
            prompt,
        ]
        result = parse_classification(await self._generate(contents))
        logger.info(f"[LLM] 영상 분류 결과: {result.videoType}, 장소 {len(result.places)}개")
        return result
