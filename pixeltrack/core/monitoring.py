"""
Monitoring utilities for metrics and error tracking
"""
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import inspect
import logging
import time
from functools import wraps

logger = logging.getLogger(__name__)


def track_error(
    error_type: str,
    app_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None
):
    """
    Track error for monitoring.

    Args:
        error_type: Type of error
        app_id: Public app id (optional)
        metadata: Additional metadata
    """
    error_data = {
        "error_type": error_type,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "app_id": app_id,
        "metadata": metadata or {},
    }

    logger.error(f"Error tracked: {error_data}")


def track_metric(
    metric_name: str,
    value: float,
    app_id: Optional[str] = None,
    tags: Optional[Dict[str, str]] = None
):
    """
    Track metric for monitoring.

    Args:
        metric_name: Name of metric
        value: Metric value
        app_id: Public app id (optional)
        tags: Additional tags
    """
    metric_data = {
        "metric": metric_name,
        "value": value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "app_id": app_id,
        "tags": tags or {},
    }

    logger.info(f"Metric: {metric_data}")


def monitor_performance(func):
    """
    Decorator to monitor function performance.

    Usage:
        @monitor_performance
        async def track_event(...):
            ...
    """
    def _finish(started: float, status: str, error: Optional[Exception] = None):
        duration = time.time() - started
        if error is not None:
            track_error(
                f"{func.__name__}.error",
                metadata={"error": str(error), "duration": duration}
            )
        track_metric(f"{func.__name__}.duration", duration, tags={"status": status})

    @wraps(func)
    async def async_wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            _finish(start_time, "error", e)
            raise
        _finish(start_time, "success")
        return result

    @wraps(func)
    def sync_wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            _finish(start_time, "error", e)
            raise
        _finish(start_time, "success")
        return result

    if inspect.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper
