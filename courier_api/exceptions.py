"""
Custom exception classes and FastAPI exception handlers.

Service code raises domain errors without importing HTTP concepts; the
handlers registered here translate them into JSON responses. Every error body
shares the envelope used by successful responses:

    {"success": false, "message": "...", "error_type": "..."}

Exception hierarchy:
    CourierAPIError (base)
    ├── DuplicateEmailError         - registering an email that already exists
    ├── InvalidCredentialsError     - wrong email or password at login
    ├── MissingJWTSecretError       - JWT_SECRET unset when a token is needed
    └── InvalidTokenLifetimeError   - JWT_EXPIRES_IN cannot be parsed

Store-level failures (connection refused, bad SQL, ...) are not wrapped. They
reach the catch-all handler, which logs them and returns a generic 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class CourierAPIError(Exception):
    """Base exception for all Courier API domain errors."""

    status_code = 400
    error_type = "courier_api_error"

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class DuplicateEmailError(CourierAPIError):
    """Raised when attempting to register with an email that's already in use."""

    status_code = 409
    error_type = "duplicate_email"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email {email} is already registered")


class InvalidCredentialsError(CourierAPIError):
    """Raised when login credentials are incorrect."""

    status_code = 401
    error_type = "invalid_credentials"

    def __init__(self):
        super().__init__("Invalid email or password")


class MissingJWTSecretError(CourierAPIError):
    """Raised when a token must be signed or verified but JWT_SECRET is unset."""

    status_code = 500
    error_type = "configuration_error"

    def __init__(self):
        super().__init__("JWT_SECRET is not configured")


class InvalidTokenLifetimeError(CourierAPIError):
    """Raised when JWT_EXPIRES_IN is not a recognisable timespan."""

    status_code = 500
    error_type = "configuration_error"

    def __init__(self, raw_value: str):
        self.raw_value = raw_value
        super().__init__(f"JWT_EXPIRES_IN has an invalid value: {raw_value!r}")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the exception handlers with the FastAPI application.

    Called once by create_app() in main.py.
    """

    @app.exception_handler(CourierAPIError)
    async def courier_api_error_handler(
        request: Request, exc: CourierAPIError
    ) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", exc.error_type, request.method, request.url.path, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.detail, "error_type": exc.error_type},
        )

    @app.exception_handler(StarletteHTTPException)
    async def route_not_found_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Only the router's own "no such route" 404 is reshaped; everything
        # else (401 from auth, 404s raised by handlers) keeps FastAPI's format.
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse(
                status_code=404,
                content={"success": False, "message": f"Route not found: {request.url.path}"},
            )
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Internal server error"},
        )
