"""src.services.providers.field_strategies
Provider 응답 항목에서 자막/메타데이터를 꺼내는 추출 전략

Provider마다 필드명이 달라서, 이름 붙은 전략을 고정된 순서로 시도합니다.
"""
from typing import Callable

from src.utils.common import first_present, normalize_whitespace

TranscriptStrategy = Callable[[dict], str | None]


def join_segments(value) -> str | None:
    """
    문자열은 그대로, 리스트는 각 세그먼트의 text(또는 문자열 자체)를 공백으로 이어 붙입니다.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        parts = []
        for segment in value:
            if isinstance(segment, dict):
                text = segment.get("text")
                if isinstance(text, str):
                    parts.append(text)
            elif isinstance(segment, str):
                parts.append(segment)
        return " ".join(parts)
    return None


# =============================================
# 자막 추출 전략
# =============================================
def from_transcript(item: dict) -> str | None:
    return join_segments(item.get("transcript"))


def from_subtitles(item: dict) -> str | None:
    return join_segments(item.get("subtitles"))


def from_text(item: dict) -> str | None:
    value = item.get("text")
    return value if isinstance(value, str) else None


def from_captions(item: dict) -> str | None:
    return join_segments(item.get("captions"))


TRANSCRIPT_STRATEGIES: tuple[tuple[str, TranscriptStrategy], ...] = (
    ("transcript", from_transcript),
    ("subtitles", from_subtitles),
    ("text", from_text),
    ("captions", from_captions),
)


def resolve_transcript(
    item: dict,
    strategies: tuple[tuple[str, TranscriptStrategy], ...] = TRANSCRIPT_STRATEGIES,
) -> tuple[str, str | None]:
    """
    전략을 순서대로 시도하여 공백 정규화 후 비어있지 않은 첫 결과를 반환합니다.

    Returns:
        (transcript, 사용된 전략 이름) - 실패 시 ("", None)
    """
    for name, strategy in strategies:
        text = normalize_whitespace(strategy(item))
        if text:
            return text, name
    return "", None


# =============================================
# 메타데이터 추출
# =============================================
def resolve_title(item: dict) -> str | None:
    value = first_present(item, ("title", "videoTitle"))
    return value if isinstance(value, str) else None


def resolve_channel(item: dict) -> str | None:
    value = first_present(item, ("channelName", "channel", "author"))
    if isinstance(value, dict):
        value = value.get("name")
    return value if isinstance(value, str) else None


def resolve_thumbnail(item: dict) -> str | None:
    value = first_present(item, ("thumbnailUrl", "thumbnail"))
    return value if isinstance(value, str) else None


def resolve_description(item: dict) -> str | None:
    value = item.get("description")
    return value if isinstance(value, str) and value.strip() else None
