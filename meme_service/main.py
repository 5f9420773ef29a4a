"""
FastAPI Application Entry Point

This is the main application module that configures the meme board
API server.

The API:
- Keeps every meme in an in-memory, lock-guarded store
- Accepts new memes as multipart forms, with an uploaded file or a URL
- Serves uploaded images from the upload directory
- Lists memes ordered by popularity

Run with: uvicorn meme_service.main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import MemeServiceError
from .core.utils import get_timestamp
from .api.routes import router
from .storage.memes import meme_store
from .storage.seed import initial_memes

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================================
# Application Lifespan Handler
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Seeds the store before the server starts accepting connections.
    Nothing needs tearing down; memes live only as long as the process.
    """
    # ---- Startup ----
    logger.info("=" * 60)
    logger.info("MEME BOARD API STARTING")
    logger.info("=" * 60)
    logger.info(f"Server Port: {settings.server_port}")
    logger.info(f"API Version: {settings.api_version}")
    logger.info(f"Upload Dir: {settings.upload.upload_dir.resolve()}")
    logger.info(f"Upload Prefix: {settings.upload.url_prefix}")

    meme_store.seed(initial_memes(settings.seed_demo_data))

    logger.info("=" * 60)
    logger.info(f"API ready to accept requests on port {settings.server_port}")
    logger.info("=" * 60)

    yield  # Application runs here

    # ---- Shutdown ----
    logger.info("API shutting down...")


# ============================================================
# FastAPI Application Instance
# ============================================================

app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)


# ============================================================
# Middleware Configuration
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.server.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(MemeServiceError)
async def meme_service_exception_handler(request: Request, exc: MemeServiceError):
    """
    Render store and ingestion errors as JSON.

    The status code comes from the exception class.
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "timestamp": get_timestamp()
        }
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Render framework HTTP errors (bad multipart bodies, unknown routes)
    in the same shape as the service's own errors.
    """
    logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": str(exc.detail),
            "timestamp": get_timestamp()
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
):
    """
    Handle validation errors with a clean response.

    Returns 422 with details about what failed validation.
    """
    logger.warning(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation failed",
            "detail": jsonable_errors(exc),
            "timestamp": get_timestamp()
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Strip non-serializable context (e.g. exception objects) from errors."""
    return jsonable_encoder(exc.errors(), exclude={"ctx"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler so unexpected failures still answer
    with JSON. The traceback goes to the log, not to the client.
    """
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred. Please try again.",
            "timestamp": get_timestamp()
        }
    )


# ============================================================
# Route Registration
# ============================================================

app.include_router(router, tags=["Memes"])

# Uploaded images; check_dir=False so the directory may be created lazily
app.mount(
    settings.upload.url_prefix,
    StaticFiles(directory=settings.upload.upload_dir, check_dir=False),
    name="uploads"
)


# ============================================================
# Root Endpoint
# ============================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint with API information.

    Provides basic info and links to documentation.
    """
    return {
        "service": settings.api_title,
        "version": settings.api_version,
        "description": settings.api_description,
        "endpoints": {
            "list_memes": "GET /memes",
            "create_meme": "POST /memes",
            "get_meme": "GET /memes/{id}",
            "like_meme": "POST /memes/{id}/like",
            "uploads": f"GET {settings.upload.url_prefix}/{{filename}}",
            "health": "GET /health",
            "docs": "GET /docs"
        },
        "timestamp": get_timestamp()
    }


def run():
    """Start uvicorn with the configured host and port."""
    import uvicorn

    logger.info(f"Starting meme board API on {settings.server.host}:{settings.server_port}...")
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server_port,
        log_level="info",
        access_log=True
    )


# ============================================================
# Run Configuration (for direct execution)
# ============================================================

if __name__ == "__main__":
    run()
