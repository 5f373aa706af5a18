import asyncio

import httpx
import structlog

from rxguard.schemas.drug import DrugId
from rxguard.schemas.interaction import PairVerdict
from rxguard.services.interaction_engine import degraded_verdict

logger = structlog.get_logger(__name__)

SERVICE_UNAVAILABLE_MESSAGE = "Interaction service unavailable (fallback)."


class InteractionClient:
    """
    远程 interaction-service 客户端

    GET {base_url}/interactions/analyze?drugA=..&drugB=..
    远端不可达、超时、非 2xx 或响应体非法时返回固定降级结论。
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str, timeout: float = 5.0):
        self._client = client
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _request(self, drug_a_id: DrugId, drug_b_id: DrugId) -> PairVerdict:
        response = await self._client.get(
            f"{self.base_url}/interactions/analyze",
            params={"drugA": drug_a_id, "drugB": drug_b_id},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return PairVerdict.model_validate(response.json())

    async def analyze(self, drug_a_id: DrugId, drug_b_id: DrugId) -> PairVerdict:
        try:
            return await asyncio.wait_for(self._request(drug_a_id, drug_b_id), timeout=self.timeout)
        except (httpx.HTTPError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(
                "interaction_service_fallback",
                drug_a_id=drug_a_id,
                drug_b_id=drug_b_id,
                error=str(e) or type(e).__name__,
            )
            return degraded_verdict(message=SERVICE_UNAVAILABLE_MESSAGE)
