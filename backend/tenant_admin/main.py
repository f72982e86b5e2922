"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenant_admin.application.services import RoleMappingConfig
from tenant_admin.config import get_settings
from tenant_admin.infrastructure.document_stores import open_document_store
from tenant_admin.infrastructure.logging.log_config import setup_logging
from tenant_admin.presentation.api.errors import register_exception_handlers
from tenant_admin.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]


def build_role_mappings() -> RoleMappingConfig:
    """Role mappings from the environment, the YAML file, or the defaults."""
    settings = get_settings()
    mappings_file = Path(settings.role_mappings_file)
    if not mappings_file.is_absolute():
        mappings_file = _BACKEND_DIR / mappings_file
    return RoleMappingConfig(env_json=settings.role_mappings_json, file_path=mappings_file).load()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, open the document store, load role mappings."""
    settings = get_settings()
    setup_logging(settings)

    app.state.role_mappings = build_role_mappings()

    async with open_document_store(settings) as store:
        app.state.document_store = store
        logger.info("%s %s started (%s)", settings.app_title, settings.app_version, settings.app_env)
        yield

    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tenant_admin.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
