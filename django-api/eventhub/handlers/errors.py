"""Maps domain errors to HTTP responses.

Registered as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Every error body has the
shape {"error": {"code": ..., "message": ...}}.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from eventhub.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TICKET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NOTIFICATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.TICKET_INVALID: status.HTTP_409_CONFLICT,
    ErrorCode.REGISTRATION_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_KEY: status.HTTP_409_CONFLICT,
    ErrorCode.INSUFFICIENT_FUNDS: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.ISSUANCE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.STORE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

# Store messages can carry backend detail; these replace them.
OPAQUE_MESSAGES = {
    ErrorCode.STORE_FAILURE: "The service is temporarily unavailable",
    ErrorCode.DUPLICATE_KEY: "The record already exists",
}


def error_body(code: str, message: str, **extra) -> dict:
    error = {"code": code, "message": message}
    error.update(extra)
    return {"error": error}


def eventhub_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        http_status = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        if exc.code in OPAQUE_MESSAGES:
            logger.error("Store failure in %s: %s", context.get("view").__class__.__name__, exc)
            message = OPAQUE_MESSAGES[exc.code]
        else:
            message = exc.message
        extra = {}
        if getattr(exc, "fields", ()):
            extra["fields"] = list(exc.fields)
        return Response(error_body(exc.code.value, message, **extra), status=http_status)

    response = exception_handler(exc, context)
    if response is None:
        return None
    code = getattr(exc, "default_code", "error")
    detail = getattr(exc, "detail", None)
    message = str(detail) if isinstance(detail, str) else str(getattr(exc, "default_detail", ""))
    response.data = error_body(code.upper(), message)
    return response
