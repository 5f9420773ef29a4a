"""
API Routes - FastAPI endpoints for listing, creating and liking memes.

Handlers keep the store's critical sections short: a create request
parses and stores the upload first, then appends in one fast step.
"""

import logging
from fastapi import APIRouter, Depends, Request

from ..core.config import settings
from ..core.utils import truncate_string
from ..ingestion.pipeline import IngestionPipeline, ingestion_pipeline
from ..models.schemas import ErrorResponse, HealthResponse, MemeRecord
from ..storage.memes import MemeStore, meme_store
from ..storage.popularity import rank

# Configure logging
logger = logging.getLogger(__name__)

# Create the router
router = APIRouter()

# Upper bound on file parts per form; only one may be named "image"
MAX_FORM_FILES = 16


# ============================================================
# Dependencies
# ============================================================

def get_store() -> MemeStore:
    """The store handlers operate on; overridden in tests."""
    return meme_store


def get_pipeline() -> IngestionPipeline:
    """The ingestion pipeline for create requests; overridden in tests."""
    return ingestion_pipeline


# ============================================================
# Meme Endpoints
# ============================================================

@router.get(
    "/memes",
    response_model=list[MemeRecord],
    response_model_exclude_none=True,
    summary="List memes",
    description="All memes, most popular (likes + comments) first."
)
async def list_memes(store: MemeStore = Depends(get_store)) -> list[MemeRecord]:
    """Snapshot the store and rank the copy."""
    return rank(store.list())


@router.post(
    "/memes",
    response_model=MemeRecord,
    response_model_exclude_none=True,
    summary="Create a meme",
    description="""
    Create a meme from a multipart form.

    Fields:
    - **caption**: caption text
    - **tags**: comma separated tags
    - **image**: an image file to upload, or
    - **image_url**: a link to an external image
    - **evm_address**: optional wallet address of the submitter

    Unknown fields are ignored.
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed submission"},
        413: {"model": ErrorResponse, "description": "Image too large"},
        500: {"model": ErrorResponse, "description": "Image could not be stored"}
    }
)
async def create_meme(
    request: Request,
    store: MemeStore = Depends(get_store),
    pipeline: IngestionPipeline = Depends(get_pipeline)
) -> MemeRecord:
    """
    Ingest the submission, then append the draft to the store.

    Nothing is appended unless ingestion, including any file write,
    completed successfully.
    """
    async with request.form(max_files=MAX_FORM_FILES) as form:
        draft = await pipeline.ingest(form.multi_items())

    meme = store.append(draft)
    logger.info(
        f"Created meme {meme.id}: '{truncate_string(meme.caption, 60)}'"
    )
    return meme


@router.get(
    "/memes/{meme_id}",
    response_model=MemeRecord,
    response_model_exclude_none=True,
    summary="Get a meme",
    responses={404: {"model": ErrorResponse, "description": "Meme not found"}}
)
async def get_meme(
    meme_id: int,
    store: MemeStore = Depends(get_store)
) -> MemeRecord:
    """Return a single meme by id."""
    return store.get(meme_id)


@router.post(
    "/memes/{meme_id}/like",
    response_model=MemeRecord,
    response_model_exclude_none=True,
    summary="Like a meme",
    responses={404: {"model": ErrorResponse, "description": "Meme not found"}}
)
async def like_meme(
    meme_id: int,
    store: MemeStore = Depends(get_store)
) -> MemeRecord:
    """Add one like and return the updated meme."""
    meme = store.increment_likes(meme_id)
    logger.debug(f"Meme {meme_id} now has {meme.likes} likes")
    return meme


# ============================================================
# Utility Endpoints
# ============================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check that the API is up."
)
async def health_check(store: MemeStore = Depends(get_store)) -> HealthResponse:
    """Report liveness and how many memes are held."""
    return HealthResponse(
        status="ok",
        message=f"Meme service is running with {len(store)} memes",
        version=settings.api_version
    )
