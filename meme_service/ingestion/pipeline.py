"""
Ingestion Pipeline - turns a multipart submission into a meme draft.

The pipeline walks the submitted parts once, keeps the ones it knows
(caption, tags, image_url, evm_address, image) and ignores the rest.
An uploaded image is streamed into a staging directory and moved into
the served upload directory only once it is complete, so readers never
see a partial file. The store is not touched here at all; the caller
appends the returned draft once ingestion has fully succeeded.
"""

import logging
import os
from pathlib import Path
from typing import Any, Iterable, Optional

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from ..core.config import UploadConfig, settings
from ..core.errors import (
    IngestionValidationError,
    UploadTooLargeError,
    UploadWriteError
)
from ..core.utils import generate_upload_name, truncate_string
from ..models.schemas import MemeDraft

# Configure logging
logger = logging.getLogger(__name__)

TEXT_FIELDS = ("caption", "tags", "image_url", "evm_address")
IMAGE_FIELD = "image"


class IngestionPipeline:
    """
    Builds validated ``MemeDraft`` objects from form parts.

    All blocking file operations run in the threadpool so a large
    upload never stalls other requests.
    """

    def __init__(self, config: Optional[UploadConfig] = None):
        """Initialize the pipeline with the upload configuration."""
        self.config = config or settings.upload

    async def ingest(self, parts: Iterable[tuple[str, Any]]) -> MemeDraft:
        """
        Consume form parts and produce a draft meme.

        Args:
            parts: (name, value) pairs in arrival order; values are
                strings for text parts and ``UploadFile`` for files

        Returns:
            The validated draft, with ``image`` pointing at the stored
            upload when a file was sent

        Raises:
            IngestionValidationError: Malformed or incomplete submission
            UploadWriteError: The uploaded image could not be stored
        """
        text: dict[str, str] = {}
        upload: Optional[UploadFile] = None

        for name, value in parts:
            if name == IMAGE_FIELD:
                if not isinstance(value, UploadFile):
                    raise IngestionValidationError(
                        "The 'image' part must be a file upload; "
                        "send external images as 'image_url'"
                    )
                # Browsers send an empty, unnamed part when no file was chosen
                if value.filename or value.size:
                    if upload is not None:
                        raise IngestionValidationError(
                            "Only one 'image' file may be uploaded"
                        )
                    upload = value
            elif name in TEXT_FIELDS:
                if not isinstance(value, str):
                    raise IngestionValidationError(
                        f"The '{name}' part must be a text field"
                    )
                text[name] = value

        if upload is not None:
            image = await self.store_upload(upload)
        else:
            image = text.get("image_url", "").strip()
            if not image:
                raise IngestionValidationError(
                    "Either an 'image' file or an 'image_url' is required"
                )

        evm_address = text.get("evm_address", "").strip()

        return MemeDraft(
            caption=text.get("caption", ""),
            tags=text.get("tags", ""),
            image=image,
            evm_address=evm_address or None
        )

    async def store_upload(self, upload: UploadFile) -> str:
        """
        Persist an uploaded image under a server-generated name.

        The file is written to the staging directory and renamed into
        the upload directory after the last byte is flushed. Any failure
        or cancellation removes the staged file.

        Args:
            upload: The uploaded file part

        Returns:
            The reference clients use to fetch the stored image

        Raises:
            UploadTooLargeError: The upload exceeds ``max_bytes``
            UploadWriteError: The file system rejected the write
        """
        filename = generate_upload_name(upload.filename)
        staged = self.config.staging_dir / f"{filename}.part"
        final = self.config.upload_dir / filename

        committed = False
        written = 0
        try:
            await run_in_threadpool(self._prepare_dirs)
            # Opened on the loop so a cancellation can never orphan the handle
            handle = open(staged, "xb")
            try:
                while True:
                    chunk = await upload.read(self.config.chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.config.max_bytes:
                        raise UploadTooLargeError(
                            f"Image exceeds the maximum size of "
                            f"{self.config.max_bytes} bytes"
                        )
                    await run_in_threadpool(handle.write, chunk)
                await run_in_threadpool(self._flush, handle)
            finally:
                handle.close()

            # Inline so a cancellation cannot land between the rename and `committed`
            os.replace(staged, final)
            committed = True
        except OSError as e:
            logger.error(
                f"Failed to store upload "
                f"'{truncate_string(upload.filename or '')}': {e}"
            )
            raise UploadWriteError("Failed to store uploaded image") from e
        finally:
            if not committed:
                self._discard(staged)

        logger.info(f"Stored upload {filename} ({written} bytes)")
        return self.config.reference_for(filename)

    def _prepare_dirs(self) -> None:
        self.config.staging_dir.mkdir(parents=True, exist_ok=True)
        self.config.upload_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _flush(handle) -> None:
        handle.flush()
        os.fsync(handle.fileno())

    @staticmethod
    def _discard(path: Path) -> None:
        # Runs during cancellation too, so it must not await
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove staged upload {path}: {e}")


# Global pipeline instance for the application
ingestion_pipeline = IngestionPipeline()
