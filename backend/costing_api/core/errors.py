"""
Exception handlers mapping domain errors to HTTP responses.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.utils.exceptions import AppException


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render any AppException as {"detail": ...} with its status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
