"""
Shared utility functions for the meme service.

Contains helpers used across modules: timestamps, upload file
naming and log-friendly string handling.
"""

import re
import uuid
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Optional


_EXTENSION_PATTERN = re.compile(r"^\.[a-z0-9]{1,10}$")


def get_timestamp() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        ISO-formatted UTC timestamp string
    """
    return datetime.now(timezone.utc).isoformat()


def safe_extension(filename: Optional[str]) -> str:
    """
    Extract a file extension that is safe to reuse on disk.

    Only the final suffix of the client-supplied name is considered,
    lowercased, and kept only when it is 1-10 ASCII alphanumerics.

    Args:
        filename: Name sent by the client, possibly None or hostile

    Returns:
        The extension including the leading dot, or an empty string
    """
    if not filename:
        return ""
    # Clients on Windows send backslash separated paths
    suffix = PurePath(filename.replace("\\", "/")).suffix.lower()
    if _EXTENSION_PATTERN.match(suffix):
        return suffix
    return ""


def generate_upload_name(client_filename: Optional[str] = None) -> str:
    """
    Generate a collision-safe name for a stored upload.

    The client's filename contributes only its sanitized extension;
    the rest is a random UUID4 so names can never traverse directories
    or overwrite an earlier upload.

    Returns:
        A filename in format '<uuid hex><ext>'
    """
    return f"{uuid.uuid4().hex}{safe_extension(client_filename)}"


def truncate_string(s: str, max_length: int = 100) -> str:
    """
    Truncate a string to a maximum length for logging.

    Args:
        s: String to truncate
        max_length: Maximum allowed length

    Returns:
        Original string if short enough, otherwise truncated with ellipsis
    """
    if len(s) <= max_length:
        return s
    return s[:max_length - 3] + "..."
