"""FastAPI application for the Chalktalk playbook editor."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chalktalk import __version__
from chalktalk.api.routers import editor_router, playbooks_router, plays_router
from chalktalk.api.services import editor_session_manager
from chalktalk.config import configure_logging, get_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    logger.info(f"Chalktalk API starting up (store: {get_config().store_path})")
    yield
    # Shutdown
    logger.info("Chalktalk API shutting down...")
    editor_session_manager.set_session(None)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Chalktalk API",
        description="Football play diagram editor API",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",  # Vite dev server
            "http://localhost:5173",  # Alternative Vite port
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(playbooks_router, prefix="/api/v1")
    app.include_router(plays_router, prefix="/api/v1")
    app.include_router(editor_router, prefix="/api/v1")

    @app.get("/")
    async def root() -> dict:
        """Root endpoint - API info."""
        return {
            "name": "Chalktalk API",
            "version": __version__,
            "description": "Football play diagram editor",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "session_open": editor_session_manager.is_open,
        }

    return app


# Create app instance
app = create_app()


def run_api(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False) -> None:
    """Run the API server."""
    config = get_config()
    configure_logging(config)
    uvicorn.run(
        "chalktalk.api.main:app",
        host=host or config.api_host,
        port=port or config.api_port,
        reload=reload,
    )


if __name__ == "__main__":
    run_api(reload=True)
