"""
Core module containing configuration, errors and utilities.
"""

from .config import settings
from .errors import (
    MemeServiceError,
    IngestionValidationError,
    UploadTooLargeError,
    UploadWriteError,
    MemeNotFoundError
)
from .utils import get_timestamp, generate_upload_name

__all__ = [
    "settings",
    "MemeServiceError",
    "IngestionValidationError",
    "UploadTooLargeError",
    "UploadWriteError",
    "MemeNotFoundError",
    "get_timestamp",
    "generate_upload_name"
]
