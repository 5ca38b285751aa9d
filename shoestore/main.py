# shoestore/main.py
import logging
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .catalog import ShoeRepository, catalog_router
from .catalog.adapter import format_errors
from .catalog.outcomes import InternalError, ValidationFailed, render
from .config import Settings, configure_logging, get_settings


logger = logging.getLogger(__name__)
access_logger = logging.getLogger("shoestore.access")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
}


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[ShoeRepository] = None,
) -> FastAPI:
    """Build the API around a single repository.

    A fresh ``ShoeRepository`` with the seed catalogue is created unless
    one is passed in.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Shoe Store API",
        description="In-memory shoe catalogue with create, read, update, delete and simple filters.",
        version="1.0.0",
    )
    app.state.shoe_repository = repository if repository is not None else ShoeRepository()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_and_access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if settings.access_log:
            access_logger.info(
                "%s %s %s %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
        return response

    # Bodies that are not valid JSON never reach the adapter.
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return render(ValidationFailed(format_errors(exc.errors())))

    # Unknown routes, unsupported methods and other framework errors.
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return render(InternalError())

    @app.get("/health")
    def health_check():
        return {"status": "OK", "message": "Shoe Store API is running"}

    app.include_router(catalog_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("Shoe Store API server running on port %s", settings.port)
    logger.info("Health check: http://localhost:%s/health", settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    run()
