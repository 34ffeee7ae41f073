"""Shared fixtures.

Environment defaults are pointed at a scratch directory before the app
package is imported, since app.main builds a default app at import time.
"""
import os
import tempfile

_scratch = tempfile.mkdtemp(prefix="vms-tests-")
os.environ.setdefault("DATA_DIR", _scratch)
os.environ.setdefault("UPLOAD_DIR", os.path.join(_scratch, "uploads"))
os.environ.setdefault("LOG_DIR", os.path.join(_scratch, "logs"))

import pytest
from fastapi.testclient import TestClient

from app.config import AppConfig
from app.database import make_session_factory
from app.main import create_app
from app.schemas import FeedItem
from app.services.article_store import ArticleStore

ADMIN_PASSWORD = "s3cret"


@pytest.fixture
def config(tmp_path):
    return AppConfig(
        database_url=f"sqlite:///{tmp_path}/articles.db",
        upload_dir=tmp_path / "uploads",
        log_dir=None,
        dist_dir=tmp_path / "dist",
        feed_urls=["https://a.example/rss", "https://b.example/rss", "https://c.example/rss"],
        gemini_api_key="test-key",
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def app(config):
    return create_app(config)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def store(tmp_path):
    s = ArticleStore(make_session_factory(f"sqlite:///{tmp_path}/store.db"))
    s.init_schema()
    return s


def make_items(source: str, count: int) -> list[FeedItem]:
    return [
        FeedItem(title=f"{source}-{i}", link=f"https://{source}.example/{i}", pubDate="", source=source)
        for i in range(count)
    ]
