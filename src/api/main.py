"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import auth, bookmarks, health, users
from core.config import get_settings
from db.session import engine
from services.exceptions import ServiceError, ValidationError


settings = get_settings()

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Attach a stream handler to the root logger and set its level."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # basicConfig is a no-op once handlers exist, so the level is applied separately
    logging.getLogger().setLevel(level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:  # noqa: ARG001
    """Configure logging on startup and dispose of pooled connections on shutdown."""
    configure_logging(settings.log_level)
    logger.info("Application starting")
    yield
    await engine.dispose()
    logger.info("Application stopped")


app = FastAPI(
    title="Bookmarks API",
    description="Email/password accounts with per-user bookmark management.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:  # noqa: ARG001
    """Render service-layer errors with the status code they carry."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request,  # noqa: ARG001
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies and parameters as 400 rather than 422."""
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"detail": jsonable_encoder(exc.errors())},
    )


app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(bookmarks.router)
