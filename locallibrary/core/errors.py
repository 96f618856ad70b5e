import traceback
import uuid

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from locallibrary.core.config import get_settings
from locallibrary.logging.setup import get_logger

settings = get_settings()
logger = get_logger("locallibrary.errors")

GENERIC_MESSAGES = {
    404: "Not Found",
    501: "Not Implemented",
}


def _templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """
    Render HTTP exceptions (404 from a missing entity, 501 from an extension
    point, routing errors) as the error page.
    """
    code = getattr(exc, "code", None)
    log_data = {
        "path": request.url.path,
        "method": request.method,
        "status_code": exc.status_code,
        "code": code,
    }
    logger.warning(f"HTTP {exc.status_code} Error: {exc.detail}", extra=log_data)

    message = exc.detail if isinstance(exc.detail, str) else GENERIC_MESSAGES.get(
        exc.status_code, "Error"
    )
    return _templates(request).TemplateResponse(
        request,
        "error.html",
        {
            "title": GENERIC_MESSAGES.get(exc.status_code, "Error"),
            "message": message,
            "status_code": exc.status_code,
            "error": None,
        },
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def server_error_handler(request: Request, exc: Exception):
    """
    Last-resort handler for persistence failures and other unexpected errors.
    Internal details are only rendered when DEBUG is on.
    """
    error_id = uuid.uuid4().hex
    error_type = type(exc).__name__

    log_data = {
        "path": request.url.path,
        "method": request.method,
        "error_id": error_id,
        "error_type": error_type,
    }
    logger.exception(f"Server Error ({error_type}): {str(exc)}", extra=log_data)

    error = None
    if settings.DEBUG:
        error = {
            "error_id": error_id,
            "error_type": error_type,
            "error_message": str(exc),
            "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
        }

    return _templates(request).TemplateResponse(
        request,
        "error.html",
        {
            "title": "Error",
            "message": "Something went wrong.",
            "status_code": 500,
            "error": error,
        },
        status_code=500,
    )
