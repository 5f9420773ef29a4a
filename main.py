"""
Entry Point for Cloud Server Deployment

Starts the meme board API with uvicorn. Cloud hosts set the PORT
environment variable; it defaults to 8000.
"""

import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def main():
    """Start the API server in this process."""
    from meme_service.core.config import settings
    from meme_service.main import run

    print("=" * 70)
    print("MEME BOARD API")
    print("=" * 70)
    print(f"Binding to {settings.server.host}:{settings.server_port}")
    print(f"Docs: http://localhost:{settings.server_port}/docs")
    print("=" * 70)

    try:
        run()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")


if __name__ == "__main__":
    main()
