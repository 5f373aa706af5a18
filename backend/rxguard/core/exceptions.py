from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base class for all application exceptions.
    Ensures that all raised errors have a consistent structure.
    """
    def __init__(
        self,
        code: int = 400,
        slug: str = "bad_request",
        msg: str = "Bad Request",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.slug = slug
        self.msg = msg
        self.details = details or {}
        super().__init__(self.msg)


class ResourceNotFoundException(AppException):
    def __init__(self, msg: str = "Resource not found", details: dict = None):
        super().__init__(
            code=404,
            slug="resource_not_found",
            msg=msg,
            details=details
        )


class UpstreamUnavailableException(AppException):
    """Dependent service unreachable, timed out, or answered with garbage"""
    def __init__(self, msg: str = "Upstream service unavailable", details: dict = None):
        super().__init__(
            code=503,
            slug="upstream_unavailable",
            msg=msg,
            details=details
        )
