# stocktrack/core/error_handlers.py

import logging
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stocktrack.core.config import Settings
from stocktrack.core.exceptions import InventoryError, ValidationError

logger = logging.getLogger("stocktrack.errors")


def _request_context(request: Request) -> dict:
    return {
        "path": request.url.path,
        "method": request.method,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _validation_error(exc: RequestValidationError) -> ValidationError:
    details = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append({"field": field, "message": str(error.get("msg"))})

    message = "; ".join(
        f"{detail['field']}: {detail['message']}" if detail["field"] else detail["message"]
        for detail in details
    )
    return ValidationError(message or "Invalid request", details=details)


def setup_exception_handlers(app: FastAPI, settings: Settings):

    def _error_body(message: str, exc: Exception | None = None) -> dict:
        body = {"success": False, "message": message}
        if exc is not None and not settings.is_production:
            body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return body

    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError):
        if exc.status_code >= 500:
            logger.error("Error: %s %s", exc.message, _request_context(request), exc_info=exc)
            return JSONResponse(content=_error_body(exc.message, exc), status_code=exc.status_code)

        return JSONResponse(content=exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        error = _validation_error(exc)
        return JSONResponse(content=error.to_dict(), status_code=error.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse(
                content={
                    "success": False,
                    "message": "The requested resource does not exist",
                    "path": request.url.path,
                },
                status_code=404,
            )

        return JSONResponse(
            content={"success": False, "message": str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception %s", _request_context(request), exc_info=exc)

        response = JSONResponse(
            content=_error_body("Internal Server Error", exc),
            status_code=500,
        )

        response_time = getattr(request.state, "response_time", None)
        if response_time is not None:
            response.headers["X-Response-Time"] = response_time

        return response
