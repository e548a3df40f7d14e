"""src.services.providers.apify_client
Apify Actor 실행 클라이언트

Actor 실행(run) 요청 시 waitForFinish로 동기 대기한 뒤,
기본 dataset의 결과 항목을 가져옵니다.
"""
import logging

import httpx

from src.core.config import Settings
from src.core.exceptions import ProviderResponseError
from src.utils.common import open_http_client

logger = logging.getLogger(__name__)


class ApifyClient:
    """Apify REST API (acts/{actor}/runs, datasets/{id}/items) 래퍼"""

    def __init__(self, config: Settings, client: httpx.AsyncClient | None = None):
        self._config = config
        self._client = client

    def is_configured(self) -> bool:
        return self._config.is_apify_configured()

    async def run_actor(
        self,
        actor_id: str,
        run_input: dict,
        wait_seconds: int,
        timeout_margin: int,
    ) -> list[dict]:
        """
        Actor를 실행하고 dataset 항목 리스트를 반환합니다.

        Args:
            actor_id: Actor 식별자 (예: "pintostudio~youtube-transcript-scraper")
            run_input: Actor 입력 JSON
            wait_seconds: Apify 서버 측 대기 시간 (waitForFinish)
            timeout_margin: HTTP 요청 타임아웃 = wait_seconds + timeout_margin

        Raises:
            httpx.HTTPError: 네트워크 오류, 타임아웃, 4xx/5xx 응답
            ProviderResponseError: 응답 형식이 예상과 다른 경우
        """
        if not self.is_configured():
            raise ProviderResponseError("APIFY_TOKEN이 설정되지 않았습니다")

        base = self._config.APIFY_API_BASE.rstrip("/")
        headers = {"Authorization": f"Bearer {self._config.APIFY_TOKEN}"}
        timeout = float(wait_seconds + timeout_margin)

        async with open_http_client(self._client, timeout=timeout) as client:
            logger.info(f"[Apify] Actor 실행 요청: {actor_id} (최대 {wait_seconds}초 대기)")
            run_response = await client.post(
                f"{base}/acts/{actor_id}/runs",
                json=run_input,
                params={"waitForFinish": wait_seconds},
                headers=headers,
                timeout=timeout,
            )
            run_response.raise_for_status()

            run_body = run_response.json()
            run_data = run_body.get("data") if isinstance(run_body, dict) else None
            if not isinstance(run_data, dict):
                raise ProviderResponseError(f"Actor 실행 응답 형식이 올바르지 않습니다: {actor_id}")
            dataset_id = run_data.get("defaultDatasetId")
            if not dataset_id:
                raise ProviderResponseError(f"Actor 응답에 defaultDatasetId가 없습니다: {actor_id}")
            logger.info(f"[Apify] Run 완료: {run_data.get('id')} (status={run_data.get('status')})")

            items_response = await client.get(
                f"{base}/datasets/{dataset_id}/items",
                headers=headers,
                timeout=timeout,
            )
            items_response.raise_for_status()
            items = items_response.json()

        if not isinstance(items, list):
            raise ProviderResponseError(f"dataset 응답이 리스트가 아닙니다: {type(items).__name__}")
        return [item for item in items if isinstance(item, dict)]
