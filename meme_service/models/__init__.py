"""
Models module containing Pydantic schemas.
"""

from .schemas import (
    MemeDraft,
    MemeRecord,
    HealthResponse,
    ErrorResponse
)

__all__ = [
    "MemeDraft",
    "MemeRecord",
    "HealthResponse",
    "ErrorResponse"
]
