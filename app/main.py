"""
FastAPI application entry point for the Property Marketplace API.
Wires settings, middleware, routers and exception handlers together.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.config import settings
from app.database import create_tables, test_database_connection, close_db_connection
from app.routers import (
    properties_router,
    orders_router,
    inquiries_router,
    favorites_router,
    cart_router
)
from app.utils.exceptions import APIException
from app.services.error_handler import ErrorHandlerService
from app.middleware.validation import ValidationMiddleware

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await test_database_connection()
    if db_connected:
        await create_tables()
    else:
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Backend for a property listing marketplace.

    ## Features

    * **Listings**: search and filter properties, with admin create/update/delete
    * **Cart and Favorites**: per-browser lists keyed by an opaque `userIdentifier`
    * **Inquiries**: contact messages about a listing
    * **Orders**: viewing, offer, information and financing requests created at checkout

    Every error is returned as `{"error": <message>, "code": <CODE>}`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Properties", "description": "Listing search and administration"},
        {"name": "Orders", "description": "Checkout requests"},
        {"name": "Inquiries", "description": "Contact messages about listings"},
        {"name": "Favorites", "description": "Per-user favorite listings"},
        {"name": "Cart", "description": "Per-user shopping cart"},
        {"name": "Health", "description": "System health endpoints"}
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(
    ValidationMiddleware,
    max_request_size=settings.max_request_size,
    api_prefix=settings.api_prefix,
    enable_request_logging=not settings.is_testing
)

app.include_router(properties_router, prefix=settings.api_prefix)
app.include_router(orders_router, prefix=settings.api_prefix)
app.include_router(inquiries_router, prefix=settings.api_prefix)
app.include_router(favorites_router, prefix=settings.api_prefix)
app.include_router(cart_router, prefix=settings.api_prefix)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors, including malformed JSON bodies."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors that escaped the service layer."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle routing and other plain HTTP exceptions."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint providing basic API information.
    """
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "status": "healthy",
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_prefix
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Liveness check including database connectivity.
    """
    if not await test_database_connection():
        raise HTTPException(status_code=503, detail="Database connection failed")

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected"
    }


@app.get("/health/db", tags=["Health"])
async def database_health_check():
    """
    Dedicated database health check endpoint.
    """
    if not await test_database_connection():
        raise HTTPException(status_code=503, detail="Database connection failed")

    return {
        "status": "healthy",
        "database": "connected",
        "database_url": settings.database_url.split("@")[1] if "@" in settings.database_url else "hidden"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
