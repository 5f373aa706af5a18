from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
import time

# 定义指标
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "handler", "status"]
)

REQUEST_TIME = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "handler"]
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Prometheus 监控中间件 (Prometheus Monitoring Middleware)

    采集 HTTP 请求的吞吐量、延迟与状态码分布。
    """
    async def dispatch(self, request, call_next):
        method = request.method
        handler = request.url.path

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        status = str(response.status_code)

        REQUEST_COUNT.labels(method=method, handler=handler, status=status).inc()
        REQUEST_TIME.labels(method=method, handler=handler).observe(process_time)

        return response


def metrics(request):
    """
    暴露 Prometheus 指标端点 (/metrics)
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
