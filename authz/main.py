"""FastAPI main application module."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authz.config.settings import Settings, settings
from authz.middleware.exception_handler import register_exception_handlers
from authz.policies.store import MatrixStore
from authz.routers import authorization


def configure_logging(app_settings: Settings) -> None:
    """Apply the configured level to the package loggers."""
    logging.getLogger("authz").setLevel(app_settings.LOG_LEVEL)


def create_app(app_settings: Settings = settings, store: MatrixStore | None = None) -> FastAPI:
    """Build the application with its matrix store attached."""
    configure_logging(app_settings)

    app = FastAPI(
        title=app_settings.API_TITLE,
        version=app_settings.API_VERSION,
        description=app_settings.API_DESCRIPTION,
        openapi_url=f"{app_settings.API_PREFIX}/openapi.json",
        docs_url=f"{app_settings.API_PREFIX}/docs",
        redoc_url=f"{app_settings.API_PREFIX}/redoc",
    )

    app.state.settings = app_settings
    # Loaded once at startup; reloads go through the store
    app.state.matrix_store = store or MatrixStore(app_settings.AUTHORIZATION_MATRIX_PATH)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if app_settings.ENVIRONMENT == "development" else [],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        config = app.state.matrix_store.current
        return {
            "status": "healthy",
            "version": app_settings.API_VERSION,
            "environment": app_settings.ENVIRONMENT,
            "matrix_version": config.version,
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint."""
        return {
            "message": app_settings.API_TITLE,
            "version": app_settings.API_VERSION,
            "docs_url": f"{app_settings.API_PREFIX}/docs",
        }

    app.include_router(
        authorization.router,
        prefix=f"{app_settings.API_PREFIX}/authorization",
        tags=["Authorization"],
    )

    return app


app = create_app()
