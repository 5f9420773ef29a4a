"""
Exception types raised by the store and the ingestion pipeline.

Each error carries the HTTP status it maps to so the application's
exception handler can render it without knowing every subclass.
"""

from fastapi import status


class MemeServiceError(Exception):
    """Base class for errors that are reported to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class IngestionValidationError(MemeServiceError):
    """A multipart submission could not be turned into a meme."""

    status_code = status.HTTP_400_BAD_REQUEST


class UploadTooLargeError(IngestionValidationError):
    """The uploaded image exceeded the configured size limit."""

    status_code = 413


class UploadWriteError(MemeServiceError):
    """Storing the uploaded image failed; no meme was created."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class MemeNotFoundError(MemeServiceError):
    """No meme with the requested id exists."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, meme_id: int):
        super().__init__("Meme not found")
        self.meme_id = meme_id
