# filehub/exception_handler.py

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .errors import ServiceError

logger = logging.getLogger(__name__)


def error_response(exc: ServiceError) -> Response:
    """Converts a pipeline error into the JSON body every route answers with."""
    return Response(exc.to_dict(), status=exc.status_code)


def _flatten_detail(detail):
    if isinstance(detail, dict):
        if list(detail) == ['detail']:
            return _flatten_detail(detail['detail'])
        parts = []
        for field, value in detail.items():
            parts.append(f"{field}: {_flatten_detail(value)}")
        return "; ".join(parts)
    if isinstance(detail, list):
        return " ".join(_flatten_detail(item) for item in detail)
    return str(detail)


def service_exception_handler(exc, context):
    """
    DRF exception handler. Service errors and DRF's own API exceptions
    (parse errors, unsupported media type, method not allowed) are rendered as
    `{"message": ..., "error": ...}`. Anything else is logged and turned into
    a generic 500 so no internal detail leaks to the client.
    """
    if isinstance(exc, ServiceError):
        return error_response(exc)

    response = exception_handler(exc, context)
    if response is not None:
        code = getattr(exc, 'default_code', 'error')
        response.data = {"message": _flatten_detail(response.data), "error": code}
        return response

    view = context.get('view')
    logger.error(f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}", exc_info=exc)
    return Response(
        {"message": "An unexpected error occurred.", "error": "internal_error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
