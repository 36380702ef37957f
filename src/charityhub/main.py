"""Main application entrypoint for the CharityHub media service."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from charityhub.api.v1 import routes_health
from charityhub.api.v1.routes_storage import router as storage_router
from charityhub.api.v1.routes_upload import router as upload_router
from charityhub.core.config import settings
from charityhub.core.logging import setup_logging
from charityhub.core.middleware import HTTPErrorLoggingMiddleware


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": <detail>}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request input as ``400 {"error": <summary>}``."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")

    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request - " + "; ".join(problems)},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    setup_logging()

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
    )

    app.add_middleware(HTTPErrorLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(upload_router)
    app.include_router(storage_router)

    return app


# Export app instance for ASGI servers
app = create_app()
