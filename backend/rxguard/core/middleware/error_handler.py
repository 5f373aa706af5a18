import time
import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = structlog.get_logger("request_logger")

REQUEST_ID_HEADER = "X-Request-ID"


def _internal_error_response(request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": 500,
                "slug": "internal_server_error",
                "message": "An unexpected error occurred while assessing interactions.",
                "details": {"request_id": request_id},
            }
        },
    )


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    请求日志中间件 (Request Logging Middleware)
    唯一生成 Request ID 的地方：写入 request.state、绑定 structlog 上下文、回写响应头。
    """
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            "request_completed",
            method=request.method,
            status_code=response.status_code,
            duration_s=round(elapsed, 4),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class GlobalExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """
    兜底异常中间件 (Global Exception Handler)
    未被业务异常处理器接住的异常统一转为 500 错误包，details 中带上 request_id。
    必须注册在 RequestLogMiddleware 内层。
    """
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            request_id = getattr(request.state, "request_id", "")
            logger.error(
                "uncaught_exception",
                error=str(exc),
                error_type=type(exc).__name__,
                method=request.method,
                exc_info=True,
            )
            return _internal_error_response(request_id)
