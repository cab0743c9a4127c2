"""
Request logging middleware.
Times every request, keeps a bounded in-memory log of recent requests for the
monitoring endpoints and adds request id and timing headers.
"""

from typing import Callable, Dict, Any, List, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from collections import deque
from datetime import datetime, timezone
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestLog:
    """
    Bounded ring of recent request entries shared between the middleware and the monitoring routes.
    """

    def __init__(self, max_entries: int = 1000):
        self.entries: deque = deque(maxlen=max_entries)
        self.started_at = time.time()

    def record(self, entry: Dict[str, Any]) -> None:
        self.entries.append(entry)

    def recent(self, limit: int = 100, errors_only: bool = False) -> List[Dict[str, Any]]:
        """Newest entries first."""
        entries = [e for e in reversed(self.entries) if not errors_only or e["status_code"] >= 400]
        return entries[:limit]

    def clear(self) -> None:
        self.entries.clear()

    def summary(self) -> Dict[str, Any]:
        """
        Aggregate metrics over the entries currently held.

        Returns:
            Request count, error count and rate, mean duration and status class histogram
        """
        entries = list(self.entries)
        total = len(entries)
        errors = sum(1 for e in entries if e["status_code"] >= 400)

        status_codes: Dict[str, int] = {}
        for entry in entries:
            bucket = f"{entry['status_code'] // 100}xx"
            status_codes[bucket] = status_codes.get(bucket, 0) + 1

        return {
            "total_requests": total,
            "error_count": errors,
            "error_rate": round(errors / total * 100, 2) if total else 0.0,
            "avg_response_time_ms": round(sum(e["duration_ms"] for e in entries) / total, 2) if total else 0.0,
            "status_codes": status_codes,
            "uptime_seconds": int(time.time() - self.started_at),
        }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware recording method, path, status, duration, client ip and user agent per request.
    """

    def __init__(
        self,
        app: ASGIApp,
        request_log: RequestLog,
        slow_request_threshold: float = 2.0  # seconds
    ):
        super().__init__(app)
        self.request_log = request_log
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request through the logging middleware.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response object with X-Request-ID and X-Processing-Time headers
        """
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as exc:
            processing_time = time.time() - start_time
            logger.error(
                f"Request error [{request_id}]: {type(exc).__name__} - {exc} "
                f"(processing_time: {processing_time:.3f}s)",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                },
                exc_info=True
            )
            self._record(request, request_id, 500, processing_time)
            raise

        processing_time = time.time() - start_time
        self._record(request, request_id, response.status_code, processing_time)

        endpoint = f"{request.method} {request.url.path}"
        if processing_time > self.slow_request_threshold:
            logger.warning(f"SLOW REQUEST [{request_id}]: {endpoint} - {processing_time:.3f}s")
        else:
            logger.info(f"Request [{request_id}]: {endpoint} {response.status_code} - {processing_time:.3f}s")

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"
        return response

    def _record(self, request: Request, request_id: str, status_code: int, processing_time: float) -> None:
        self.request_log.record({
            "request_id": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(processing_time * 1000, 2),
            "ip": _client_ip(request),
            "user_agent": request.headers.get("user-agent"),
        })


def _client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None
