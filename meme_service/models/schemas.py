"""
Pydantic models for meme records and API responses.

Defines the data contracts for the API. Field names follow the JSON
the browser client consumes (snake_case, ``evm_address`` for the
optional wallet).
"""

from pydantic import BaseModel, Field
from typing import Any, Optional


# ============================================================
# Domain Models
# ============================================================

class MemeDraft(BaseModel):
    """
    A validated meme that has not been stored yet.

    Produced by the ingestion pipeline and handed to the store,
    which assigns the id, timestamp and zeroed counters.
    """
    caption: str = Field(default="", description="Caption text, may be empty")
    tags: str = Field(
        default="",
        description="Free-form tags, comma separated by convention"
    )
    image: str = Field(
        ...,
        min_length=1,
        description="External URL or server-relative path of the image"
    )
    evm_address: Optional[str] = Field(
        default=None,
        description="Optional wallet address of the submitter"
    )


class MemeRecord(MemeDraft):
    """
    A stored meme.

    The id is assigned by the store and never changes; likes only grow
    through the like operation.
    """
    id: int = Field(..., gt=0, description="Unique id assigned by the store")
    likes: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    created_at: Optional[str] = Field(
        default=None,
        description="ISO timestamp when the store accepted the meme"
    )

    @property
    def popularity(self) -> int:
        """Display ranking score; never persisted."""
        return self.likes + self.comment_count

    class Config:
        json_schema_extra = {
            "example": {
                "id": 5,
                "caption": "hi",
                "tags": "classic, funny",
                "image": "/uploads/3f2a9c0d5b8e4e7f9a1b2c3d4e5f6a7b.png",
                "evm_address": "0x52908400098527886E0F7030069857D2E4169EE7",
                "likes": 0,
                "comment_count": 0,
                "created_at": "2026-01-01T12:00:00+00:00"
            }
        }


# ============================================================
# Response Models
# ============================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    message: str
    version: str


class ErrorResponse(BaseModel):
    """Generic error response."""
    error: str
    detail: Optional[Any] = None
    timestamp: str
