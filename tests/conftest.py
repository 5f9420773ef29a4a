import os
import tempfile

# Settings are read at import time, so point the upload area at a
# throwaway directory before anything from meme_service is imported.
_UPLOAD_ROOT = tempfile.mkdtemp(prefix="meme-service-tests-")
os.environ.setdefault("MEME_UPLOAD_DIR", os.path.join(_UPLOAD_ROOT, "uploads"))
os.environ.setdefault("MEME_UPLOAD_STAGING_DIR", os.path.join(_UPLOAD_ROOT, "staging"))

import pytest
from fastapi.testclient import TestClient

from meme_service.api.routes import get_pipeline, get_store
from meme_service.core.config import UploadConfig, settings
from meme_service.ingestion.pipeline import IngestionPipeline
from meme_service.main import app
from meme_service.models.schemas import MemeRecord
from meme_service.storage.memes import MemeStore


@pytest.fixture
def store():
    """A store seeded with two memes: (12 likes, 3 comments) and (8, 1)."""
    meme_store = MemeStore()
    meme_store.seed([
        MemeRecord(id=1, caption="Troll Face", tags="classic",
                   image="http://x/troll.png", likes=12, comment_count=3),
        MemeRecord(id=2, caption="meme2", tags="classic, hilarious",
                   image="http://x/meme2.png", likes=8, comment_count=1),
    ])
    return meme_store


@pytest.fixture
def upload_config(tmp_path):
    return UploadConfig(
        upload_dir=tmp_path / "uploads",
        staging_dir=tmp_path / "staging",
        url_prefix="/uploads",
    )


@pytest.fixture
def pipeline(upload_config):
    return IngestionPipeline(upload_config)


@pytest.fixture
def client(store):
    # Uses the global upload config so the static mount can serve the files
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_pipeline] = lambda: IngestionPipeline(settings.upload)
    yield TestClient(app)
    app.dependency_overrides.clear()
