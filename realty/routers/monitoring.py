"""
Health check and request monitoring endpoints.
Logs and metrics come from the in-memory request log filled by the logging middleware.
"""

from fastapi import APIRouter, Depends, Query, Request
from datetime import datetime, timezone
from typing import Dict, Any, Optional
import logging

from realty.config import Settings
from realty.middleware.logging import RequestLog
from realty.storage import Storage
from realty.utils.dependencies import get_app_settings, get_storage, require_session_user

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["Monitoring"])
router = APIRouter(tags=["Monitoring"])


def get_request_log(request: Request) -> RequestLog:
    return request.app.state.request_log


async def _health(storage: Storage, settings: Settings, request_log: RequestLog) -> Dict[str, Any]:
    connected = await storage.ping()
    if not connected:
        logger.warning(f"Health check: {storage.backend} storage unreachable")
    return {
        "status": "healthy" if connected else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version,
        "environment": settings.environment,
        "uptime_seconds": request_log.summary()["uptime_seconds"],
        "database": {
            "backend": storage.backend,
            "connected": connected
        }
    }


@health_router.get("/health", response_model=Dict[str, Any], summary="Health check")
async def health_check(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    request_log: RequestLog = Depends(get_request_log)
) -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        Health status information
    """
    return await _health(storage, settings, request_log)


@router.get("/health", response_model=Dict[str, Any], summary="Health check")
async def api_health_check(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    request_log: RequestLog = Depends(get_request_log)
) -> Dict[str, Any]:
    return await _health(storage, settings, request_log)


@router.get(
    "/logs",
    response_model=Dict[str, Any],
    summary="Recent request logs",
    dependencies=[Depends(require_session_user)]
)
async def get_logs(
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of entries"),
    type: Optional[str] = Query(None, pattern="^(all|errors)$", description="'errors' for 4xx/5xx only"),
    request_log: RequestLog = Depends(get_request_log)
) -> Dict[str, Any]:
    """
    Get the most recent requests, newest first.

    Args:
        limit: Maximum number of entries to return
        type: 'errors' to only return failed requests
    """
    logs = request_log.recent(limit=limit, errors_only=type == "errors")
    return {"count": len(logs), "logs": logs}


@router.post(
    "/logs/clear",
    response_model=Dict[str, Any],
    summary="Clear request logs",
    dependencies=[Depends(require_session_user)]
)
async def clear_logs(request_log: RequestLog = Depends(get_request_log)) -> Dict[str, Any]:
    request_log.clear()
    logger.info("Request log cleared")
    return {"success": True, "message": "Logs cleared"}


@router.get(
    "/metrics",
    response_model=Dict[str, Any],
    summary="Request metrics",
    dependencies=[Depends(require_session_user)]
)
async def get_metrics(request_log: RequestLog = Depends(get_request_log)) -> Dict[str, Any]:
    """
    Aggregate request metrics over the retained request log.

    Returns:
        Totals, error rate, mean response time and status class counts
    """
    metrics = request_log.summary()
    metrics["timestamp"] = datetime.now(timezone.utc).isoformat()
    return metrics
