# === mockapi/main.py ===
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncEngine
from typing import Optional
from mockapi.api.v1.api import api_router
from mockapi.api import mock
from mockapi.core.config import Settings, get_settings
from mockapi.core.logging_config import setup_logging
from mockapi.db.database import build_engine, build_sessionmaker, create_db_and_tables
from mockapi.models import project, endpoint, api_key  # noqa: F401
from mockapi.services.registry import EndpointRegistry
from mockapi.services.dispatcher import MockDispatcher
import time
import logging

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    engine = engine or build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    session_factory = build_sessionmaker(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up...")
        await create_db_and_tables(engine)
        yield
        logger.info("Shutting down...")
        await engine.dispose()

    app = FastAPI(
        lifespan=lifespan,
        title="Mock API Server",
        description="Serve canned responses for user-defined endpoints",
        version=VERSION
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.dispatcher = MockDispatcher(EndpointRegistry(session_factory))

    #middleware security
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=["*"])

    #CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
        max_age=86400,  # 24 hours
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        # Log slow requests
        if process_time > settings.SLOW_REQUEST_SECONDS:
            logger.warning(f"Slow request: {request.method} {request.url} took {process_time:.2f}s")

        return response

    #admin API
    app.include_router(api_router, prefix="/api/v1")

    #mock surface
    app.include_router(mock.router, prefix=settings.MOCK_PREFIX.rstrip("/"), tags=["Mock"])

    #health check
    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": VERSION
        }

    #root
    @app.get("/")
    async def root():
        return {
            "message": "Mock API Server",
            "version": VERSION,
            "docs": "/docs",
            "health": "/health",
            "mock_prefix": settings.MOCK_PREFIX
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "mockapi.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
