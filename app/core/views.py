"""
Core views providing infrastructure endpoints.

This module contains views that are not part of the business domain but are
essential for application infrastructure, such as health checks.
"""

from channels.layers import get_channel_layer
from django.db import connection
from django.http import JsonResponse


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"
        - channel_layer: "configured" or "missing"

    HTTP Status Codes:
        200: All systems operational
        503: Database unreachable

    Example Response:
        {
            "status": "healthy",
            "database": "connected",
            "channel_layer": "configured"
        }
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
        "channel_layer": "unknown",
    }
    is_healthy = True

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except Exception:
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        is_healthy = False

    # Realtime push is best-effort; a missing layer degrades but is not fatal
    health_status["channel_layer"] = (
        "configured" if get_channel_layer() is not None else "missing"
    )

    status_code = 200 if is_healthy else 503

    return JsonResponse(health_status, status=status_code)
