"""
DRF exception handler for application errors.

Renders BaseApplicationError subclasses raised by the service layer using
their to_dict() payload and http_status. Everything else falls through to
DRF's default handler.

Configured in settings:
    REST_FRAMEWORK = {
        "EXCEPTION_HANDLER": "core.exception_handlers.application_exception_handler",
    }
"""

from __future__ import annotations

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

logger = logging.getLogger(__name__)


def application_exception_handler(exc, context):
    """Convert application errors into JSON responses."""
    if isinstance(exc, BaseApplicationError):
        view = context.get("view")
        logger.info(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: "
            f"{exc}"
        )
        return Response(exc.to_dict(), status=exc.http_status)

    return exception_handler(exc, context)
