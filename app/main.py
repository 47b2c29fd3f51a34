"""
CRM API - Main Application Entry Point
Companies, catalog, quotations, orders and the back office around them.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.database import init_db, close_db
from app.core.logging import setup_logging
from app.api.v1.router import api_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    setup_logging()
    logger.info("Starting %s v%s (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)

    # Initialize database tables (for development)
    if settings.is_development:
        await init_db()
        logger.info("Database tables initialized")

    yield

    # Shutdown
    await close_db()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## CRM API

Backend for a small B2B sales office.

* **Companies** - customers, partners and suppliers
* **Products** - catalog with properties, bundles and price matrices
* **Quotations** - line items, revisions, PDF export, conversion to orders
* **Orders**, **Exhibitions**, **Employees**, **Tasks**
* **Notes and documents** - free notes and uploaded files
* **Settings** - company, bank, terms and lookup tables
* **Dashboard** - counts and period totals
    """,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Flatten validation errors into field/message pairs."""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation error",
            "errors": errors,
        },
    )


def integrity_message(exc: IntegrityError) -> str:
    """First line of the driver error, without asyncpg's class prefix."""
    lines = str(exc.orig).strip().splitlines()
    message = lines[0] if lines else "Integrity error"
    # asyncpg errors read "<class '...UniqueViolationError'>: duplicate key ..."
    if message.startswith("<class ") and ">: " in message:
        message = message.split(">: ", 1)[1]
    return message


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    """Constraint violations that slipped past the services."""
    message = integrity_message(exc)
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message},
    )


# Include API router
app.include_router(api_router, prefix="/api/v1")


# Health check endpoint
@app.get(
    "/health",
    tags=["Health"],
    summary="Server health check",
)
async def health_check():
    """Check if the API is running."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# Root endpoint
@app.get(
    "/",
    tags=["Info"],
    summary="API information",
)
async def root():
    """Get API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.is_development else "Disabled in production",
        "health": "/health",
    }


# For running with uvicorn directly
if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.getenv("PORT", "8000"))

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=port,
        reload=settings.is_development,
    )
