"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tinylink.errors import LinkError
from tinylink.health import ProcessInfo
from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


STATUS_BY_ERROR_TYPE = {
    "MissingField": status.HTTP_400_BAD_REQUEST,
    "InvalidUrl": status.HTTP_400_BAD_REQUEST,
    "InvalidCode": status.HTTP_400_BAD_REQUEST,
    "CodeTaken": status.HTTP_409_CONFLICT,
    "NotFound": status.HTTP_404_NOT_FOUND,
    "GenerationExhausted": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR = {"error": "Internal server error", "type": "InternalError"}

logger = logging.getLogger("tinylink.web")


async def link_error_handler(request: Request, exc: LinkError) -> JSONResponse:
    status_code = STATUS_BY_ERROR_TYPE.get(exc.error_type, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if exc.error_type == "InternalError":
        # Store detail was logged where it happened
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=status_code, content=INTERNAL_ERROR)

    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "type": exc.error_type},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "type": "InvalidRequest"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=INTERNAL_ERROR)


def create_app(
    store,
    resolver,
    registrar,
    config,
    process_info: ProcessInfo = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store: Link store (closed by whoever created it)
        resolver: LinkResolver serving redirects
        registrar: LinkRegistrar serving the API
        config: Configuration instance
        process_info: Start-time info for /healthz (captured now if omitted)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="TinyLink",
        description="URL shortening service with click counting",
        version=config.app_version,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.store = store
    app.state.resolver = resolver
    app.state.registrar = registrar
    app.state.config = config
    app.state.process_info = process_info or ProcessInfo.capture(config.app_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(LinkError, link_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
