import structlog
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from rxguard.core.config import settings

logger = structlog.get_logger(__name__)


class InfrastructureManager:
    """
    全局基础设施管理器 (Infrastructure Manager).
    管理对外 HTTP 连接池 (Drug Database Service / interaction-service) 的生命周期。
    """
    _http_client: Optional[httpx.AsyncClient] = None

    @classmethod
    def get_http_client(cls) -> httpx.AsyncClient:
        if cls._http_client is None or cls._http_client.is_closed:
            cls._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(settings.EXTERNAL_CALL_TIMEOUT_SECONDS),
                limits=httpx.Limits(max_connections=50, max_keepalive_connections=10),
            )
            logger.info("infra_http_client_created", timeout_s=settings.EXTERNAL_CALL_TIMEOUT_SECONDS)
        return cls._http_client

    @classmethod
    async def close_resources(cls):
        if cls._http_client is not None and not cls._http_client.is_closed:
            await cls._http_client.aclose()
        cls._http_client = None
        logger.info("infrastructure_shutdown_complete")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "service_starting",
        drug_source=settings.DRUG_SOURCE,
        interaction_mode=settings.INTERACTION_MODE,
    )
    if settings.DRUG_SOURCE == "http" or settings.INTERACTION_MODE == "remote":
        InfrastructureManager.get_http_client()
    yield
    await InfrastructureManager.close_resources()
