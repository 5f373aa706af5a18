from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from rxguard.core.exceptions import AppException

logger = structlog.get_logger(__name__)


def _error_body(code: int, slug: str, message: str, details: dict) -> dict:
    return {
        "error": {
            "code": code,
            "slug": slug,
            "message": message,
            "details": details
        }
    }


async def app_exception_handler(request: Request, exc: AppException):
    """
    处理自定义业务异常
    """
    logger.warning("app_exception", slug=exc.slug, code=exc.code, error=exc.msg)
    return JSONResponse(
        status_code=exc.code,
        content=_error_body(exc.code, exc.slug, exc.msg, exc.details),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    处理 Pydantic 校验异常 (422)
    """
    return JSONResponse(
        status_code=422,
        content=_error_body(
            422,
            "validation_error",
            "Input validation failed",
            {"errors": jsonable_encoder(exc.errors())},
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    处理 FastAPI/Starlette 内置 HTTP 异常 (404, 405 etc)
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, "http_error", str(exc.detail), {}),
    )
