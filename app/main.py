"""
FastAPI application factory.

Creates and configures the FastAPI application instance.  The database
engine is owned by the application lifespan: created at startup, stored on
``app.state.engine`` and disposed at shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.router import api_router
from app.core.config import settings
from app.core.logging import setup_logging
from app.db.init_db import init_db
from app.db.session import build_engine


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": str(exc.detail)},
                        headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                        content={"success": False, "message": "Validation failed",
                                 "errors": jsonable_encoder(exc.errors())})


async def store_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Database unavailable while serving {} {}: {}", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                        content={"success": False, "message": "Database unavailable"})


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the application.

    Args:
        engine: Database engine to use; when omitted one is built from
            ``settings.DATABASE_URL`` at startup and disposed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = engine is None
        app.state.engine = engine if engine is not None else build_engine(settings.DATABASE_URL)
        init_db(app.state.engine)
        logger.info("{} {} started", settings.PROJECT_NAME, settings.VERSION)
        yield
        if owned:
            app.state.engine.dispose()
            logger.info("Database engine disposed")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan)

    if engine is not None:
        app.state.engine = engine

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(OperationalError, store_unavailable_handler)
    app.add_exception_handler(InterfaceError, store_unavailable_handler)

    # Include API router
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint - API overview."""
        return {
            "message": f"{settings.PROJECT_NAME} API is running",
            "version": settings.VERSION,
            "endpoints": {
                "users": {
                    "create": "POST /api/users",
                    "getAll": "GET /api/users",
                    "getStats": "GET /api/users/stats",
                    "getOne": "GET /api/users/:id",
                    "update": "PUT /api/users/:id",
                    "delete": "DELETE /api/users/:id",
                }
            },
            "health": "GET /api/health",
        }

    return app


setup_logging(settings.LOG_LEVEL, echo_sql=settings.DATABASE_ECHO)

app = create_app()
