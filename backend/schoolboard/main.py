"""
SchoolBoard Backend - Main FastAPI Application

School management API with exam result ranking and leaderboards.
Version: 1.0
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient

from . import __version__, database
from .config.settings import settings
from .routes import (
    create_assessment_routes,
    create_feature_routes,
    create_organization_routes,
    create_result_routes,
)

# Setup logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup/shutdown."""

    # STARTUP
    logger.info("🚀 SchoolBoard Backend Starting Up...")

    try:
        settings.validate()
        logger.info("✅ Settings validated")

        client = AsyncIOMotorClient(
            settings.MONGODB_URL,
            maxPoolSize=50,
            serverSelectionTimeoutMS=5000
        )

        # Test connection
        await client.server_info()
        db = client[settings.DATABASE_NAME]
        database.init_database(db)
        logger.info(f"✅ Connected to MongoDB: {settings.DATABASE_NAME}")

        await database.create_indexes(db)
        logger.info("✅ Database indexes created")

        logger.info("✅ Application startup complete")

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    yield

    # SHUTDOWN
    logger.info("🛑 Shutting down...")
    database.close_database()


def create_app() -> FastAPI:
    """Build the FastAPI application with all routers registered."""
    app = FastAPI(
        title="SchoolBoard API",
        description="School management with exam ranking and leaderboards",
        version=__version__,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    routers = [
        *create_organization_routes(),
        *create_assessment_routes(),
        *create_result_routes(),
        create_feature_routes(),
    ]
    for router in routers:
        app.include_router(router)

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "database": "connected" if database.is_connected() else "disconnected"
        }

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "app": "SchoolBoard",
            "version": __version__,
            "docs": "/docs",
            "health": "/api/health"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "schoolboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
