"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException

from app.api.router import api_router
from app.core.config import settings
from app.core.logger import setup_logger


def _validation_message(exc: RequestValidationError) -> str:
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        fields.append(".".join(loc) or "body")
    return f"Invalid request: {', '.join(sorted(set(fields)))}" if fields else "Invalid request"


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render ``HTTPException`` as ``{"error": ...}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors (400), not 422."""
    logger.info(f"{request.method} {request.url.path} rejected: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": _validation_message(exc), "details": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    setup_logger(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)

    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json")

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(HTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include API router
    application.include_router(api_router, prefix=settings.API_PREFIX)

    @application.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "message": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "status": "healthy"
        }

    @application.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": "training-load-tracker",
            "version": settings.VERSION,
            "store": settings.STORE_BACKEND,
        }

    @application.get("/info")
    async def info():
        return {
            "project name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "store backend": settings.STORE_BACKEND,
            "api prefix": settings.API_PREFIX,
        }

    return application


app = create_app()
