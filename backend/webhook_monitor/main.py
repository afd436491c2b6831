"""FastAPI application bootstrap with router wiring."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from webhook_monitor import __version__
from webhook_monitor.api.routers import health, master_server, producers, purge, requests
from webhook_monitor.core.config import get_settings
from webhook_monitor.core.logging import configure_logging
from webhook_monitor.db.session import init_db

logger = logging.getLogger(__name__)


async def body_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report unreadable or incomplete request bodies as 400 Bad Request.

    Query and path parameter errors keep FastAPI's default 422 response.
    """
    if any(error.get("loc", ("",))[0] == "body" for error in exc.errors()):
        logger.warning(f"Rejected malformed body for {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )
    return await request_validation_exception_handler(request, exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(master_server_url=settings.master_webhook_server_url)
    logger.info("Database ready")
    yield


def create_app() -> FastAPI:
    """Instantiate the FastAPI app and include top-level routers."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version=__version__, lifespan=lifespan)

    logger.info(f"[CORS] Allowed origins: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[purge.PURGED_COUNT_HEADER],
    )

    app.add_exception_handler(RequestValidationError, body_validation_exception_handler)

    app.include_router(health.router)
    app.include_router(master_server.router, tags=["master"])
    app.include_router(producers.router, prefix="/producer", tags=["producers"])
    app.include_router(requests.router, prefix="/request", tags=["requests"])
    app.include_router(purge.router, tags=["retention"])

    return app


app = create_app()
