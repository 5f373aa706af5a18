from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog
import time

from rxguard.core.config import settings
from rxguard.core.logging.setup import setup_logging
from rxguard.core.infra import lifespan
from rxguard.core.exceptions import AppException
from rxguard.core.handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
)
from rxguard.core.middleware.error_handler import RequestLogMiddleware, GlobalExceptionHandlerMiddleware
from rxguard.core.middleware.instrumentation import PrometheusMiddleware, metrics
from rxguard.api.v1.api import api_router

# 1. 初始化全局日志系统 (Setup Global Logging)
setup_logging()
logger = structlog.get_logger()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

# 2. 注册中间件 (后注册的先执行)
app.add_middleware(GlobalExceptionHandlerMiddleware)
app.add_middleware(RequestLogMiddleware)
app.add_middleware(PrometheusMiddleware)
app.add_route("/metrics", metrics)

# 3. 注册特定异常处理器
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check():
    """
    健康检查接口 (Health Check)
    """
    logger.info("health_check_called", status="ok")
    return {
        "status": "ok",
        "project": settings.PROJECT_NAME,
        "drug_source": settings.DRUG_SOURCE,
        "interaction_mode": settings.INTERACTION_MODE,
        "timestamp": time.time()
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8082)
