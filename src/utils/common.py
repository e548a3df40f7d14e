"""src.utils.common
공용 유틸리티 (API Key 검증, HTTP 클라이언트, 텍스트 정규화)
"""
import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

import httpx
from fastapi import Header, HTTPException

from src.core.config import settings

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


# =============================================
# API Key 검증
# =============================================
def verify_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> str:
    """
    X-API-Key 헤더를 검증합니다.

    Raises:
        HTTPException: 401 (API Key 누락 또는 불일치)
    """
    if not x_api_key or x_api_key != settings.AI_SERVER_API_KEY:
        logger.warning("API Key 검증 실패")
        raise HTTPException(status_code=401, detail="유효하지 않은 API Key 입니다")
    return x_api_key


# =============================================
# HTTP 클라이언트
# =============================================
@asynccontextmanager
async def open_http_client(
    client: httpx.AsyncClient | None,
    timeout: float,
) -> AsyncIterator[httpx.AsyncClient]:
    """
    주입된 클라이언트가 있으면 그대로 사용하고, 없으면 호출 단위로 생성합니다.
    주입된 클라이언트는 닫지 않습니다.
    """
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned_client:
        yield owned_client


# =============================================
# 텍스트 정규화
# =============================================
def normalize_whitespace(text: str | None) -> str:
    """연속된 공백/개행을 하나의 공백으로 합치고 양끝을 제거합니다."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def first_present(item: dict, keys: Iterable[str]):
    """item에서 keys 순서대로 확인하여 비어있지 않은 첫 번째 값을 반환합니다."""
    for key in keys:
        value = item.get(key)
        if value:
            return value
    return None


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    logger.info(f"텍스트 길이 제한 적용: {len(text)}자 -> {limit}자")
    return text[:limit]
