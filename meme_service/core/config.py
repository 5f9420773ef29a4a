"""
Configuration module for the meme service.

Manages environment variables for the HTTP server and the upload area.
Everything is read once at import time into the global ``settings``.
"""

import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class UploadConfig:
    """
    Immutable configuration for uploaded meme images.

    Attributes:
        upload_dir: Directory whose files are served under url_prefix
        staging_dir: Directory for partially written uploads (never served)
        url_prefix: Path prefix the upload directory is mounted on
        public_base_url: Optional origin prepended to upload references
        max_bytes: Largest accepted upload size in bytes
        chunk_size: Read/write chunk size while storing an upload
    """
    upload_dir: Path
    staging_dir: Path
    url_prefix: str = "/uploads"
    public_base_url: str = ""
    max_bytes: int = 10 * 1024 * 1024
    chunk_size: int = 64 * 1024

    def reference_for(self, filename: str) -> str:
        """Returns the URL clients use to fetch a stored upload."""
        path = f"{self.url_prefix.rstrip('/')}/{filename}"
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}{path}"
        return path


@dataclass(frozen=True)
class ServerConfig:
    """
    Configuration for the HTTP server.

    Attributes:
        host: Interface uvicorn binds to
        port: Listen port
        cors_origins: Origins allowed by the CORS middleware
    """
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: tuple[str, ...] = ("*",)


class Settings:
    """
    Central settings manager that aggregates all configuration.

    Loads configuration from environment variables with fallbacks
    to default values for development.
    """

    def __init__(self):
        upload_dir = Path(os.getenv("MEME_UPLOAD_DIR", "uploads"))
        staging_dir = os.getenv("MEME_UPLOAD_STAGING_DIR")

        self.upload = UploadConfig(
            upload_dir=upload_dir,
            # Sibling of the served directory so partial files are never exposed
            staging_dir=(
                Path(staging_dir) if staging_dir
                else upload_dir.resolve().parent / ".upload-staging"
            ),
            url_prefix=os.getenv("MEME_UPLOAD_URL_PREFIX", "/uploads"),
            public_base_url=os.getenv("MEME_PUBLIC_BASE_URL", ""),
            max_bytes=int(os.getenv("MEME_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
            chunk_size=int(os.getenv("MEME_UPLOAD_CHUNK_SIZE", str(64 * 1024)))
        )

        self.server = ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            cors_origins=tuple(
                origin.strip()
                for origin in os.getenv("MEME_CORS_ORIGINS", "*").split(",")
                if origin.strip()
            )
        )

        self.seed_demo_data = _env_bool("MEME_SEED_DEMO_DATA", True)

    @property
    def server_port(self) -> int:
        """Server port from environment variable."""
        return self.server.port

    @property
    def api_title(self) -> str:
        """API title for OpenAPI documentation."""
        return "Meme Board API"

    @property
    def api_version(self) -> str:
        """API version string."""
        return "1.0.0"

    @property
    def api_description(self) -> str:
        """API description for OpenAPI documentation."""
        return (
            "Stores user-submitted memes in memory and serves them "
            "ordered by popularity."
        )


# Global settings instance - imported throughout the application
settings = Settings()
