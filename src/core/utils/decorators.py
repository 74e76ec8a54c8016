"""
Common decorators for API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import ImageServiceError
from core.utils.response import ResponseBuilder

logger = Logger(UTC=True)

JsonDict = dict[str, Any]

UNEXPECTED_ERROR_MESSAGE = "The picture service failed unexpectedly. Please retry later."
MALFORMED_EVENT_MESSAGE = "The request could not be understood. Check the payload and retry."


def _report_failure(
    message: str,
    *,
    func: Callable[..., Any],
    request_id: str | None,
    exc: Exception,
    server_fault: bool,
) -> None:
    """Log a handler failure.

    Server faults are logged with the stack trace at error level; client
    faults only as a warning with the error code.
    """
    context: JsonDict = {
        "handler": func.__name__,
        "request_id": request_id,
        "exception": type(exc).__name__,
        "reason": str(exc),
    }

    if isinstance(exc, ImageServiceError):
        context["error_code"] = exc.error_code
        context["details"] = exc.details

    if server_fault:
        logger.exception(message, extra=context)
    else:
        logger.warning(message, extra=context)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Wrap a Lambda proxy handler with the shared HTTP error contract.

    - OPTIONS requests short-circuit to a CORS preflight response
    - ImageServiceError renders with its own status code and error code
    - ValueError, KeyError and TypeError from malformed events become 400
    - Anything else becomes an opaque 500

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"status": "ok"})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.preflight(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except ImageServiceError as exc:
            _report_failure(
                "Picture request failed",
                func=func,
                request_id=request_id,
                exc=exc,
                server_fault=not exc.is_client_error,
            )
            return ResponseBuilder.from_error(
                exc,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except (ValueError, KeyError, TypeError) as exc:
            _report_failure(
                "Malformed event",
                func=func,
                request_id=request_id,
                exc=exc,
                server_fault=False,
            )
            return ResponseBuilder.bad_request(
                MALFORMED_EVENT_MESSAGE,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception as exc:
            _report_failure(
                "Unhandled error in handler",
                func=func,
                request_id=request_id,
                exc=exc,
                server_fault=True,
            )
            return ResponseBuilder.internal_error(
                UNEXPECTED_ERROR_MESSAGE,
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
