"""
DrawGPX API - Entry Point

This module initializes the FastAPI application with strict configuration
validation and a routing engine health check on startup.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import load_config, ConfigurationError
from .clients.osrm import OSRMRouteClient
from .processing.pipeline import ShapeRoutePipeline
from .api.routes import router, set_pipeline

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown."""
    # Startup
    logger.info("=" * 60)
    logger.info("DRAWGPX API - STARTING")
    logger.info("=" * 60)

    try:
        # Load configuration (will fail fast if env vars missing)
        config = load_config()
        logger.info("Configuration loaded successfully")
        logger.info(f"  routing engine: {config.osrm_base_url}")
        logger.info(f"  chunk size: {config.chunk_size}")

        osrm = OSRMRouteClient(config.osrm_base_url, timeout=config.osrm_timeout_s)
        pipeline = ShapeRoutePipeline(osrm, chunk_size=config.chunk_size)
        set_pipeline(pipeline)
        logger.info("Pipeline initialized")

        # Test API connectivity
        logger.info("Testing routing engine connectivity...")
        if await pipeline.test_connection():
            logger.info("  osrm: OK")
        else:
            # Don't exit - matching falls back to straight lines
            logger.error("  osrm: FAILED")
            logger.error("Routes will be drawn as straight lines until OSRM responds.")

        logger.info("=" * 60)
        logger.info(f"Server ready on {config.backend_host}:{config.backend_port}")
        logger.info("=" * 60)

        # Store config and pipeline in app state
        app.state.config = config
        app.state.pipeline = pipeline

        yield

    except ConfigurationError as e:
        logger.error("=" * 60)
        logger.error("CONFIGURATION ERROR")
        logger.error("=" * 60)
        logger.error(str(e))
        logger.error("")
        logger.error("Please ensure all required environment variables are set.")
        logger.error("See .env.example for required variables.")
        logger.error("=" * 60)
        sys.exit(1)

    # Shutdown
    logger.info("Shutting down...")
    if hasattr(app.state, "pipeline"):
        await app.state.pipeline.close()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    # Load config early to get CORS origins
    try:
        config = load_config()
    except ConfigurationError:
        # Let lifespan handle the error with better messaging
        config = None

    app = FastAPI(
        title="DrawGPX API",
        description="Draw a shape, get a road-following route of a chosen length",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins if config else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Load config to get port
    config = load_config()

    uvicorn.run(
        "drawgpx.main:app",
        host=config.backend_host,
        port=config.backend_port,
        reload=False,
    )
