# shared/errors.py
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class DirectoryError(Exception):
    """Error whose message is safe to return to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class DatabaseNotConnected(DirectoryError):
    message = "Database not connected"


class AdvocateQueryFailed(DirectoryError):
    message = "Failed to fetch advocates"


async def directory_error_handler(request: Request, exc: DirectoryError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DirectoryError, directory_error_handler)
