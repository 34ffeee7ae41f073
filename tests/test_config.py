"""Tests for configuration loading."""
from pathlib import Path

from app.config import DEFAULT_FEED_URLS, AppConfig, parse_feed_urls


def test_parse_feed_urls():
    assert parse_feed_urls(" https://a.example/rss , ,https://b.example/rss ") == [
        "https://a.example/rss",
        "https://b.example/rss",
    ]
    assert parse_feed_urls(None) == DEFAULT_FEED_URLS
    assert parse_feed_urls("  ") == DEFAULT_FEED_URLS


def test_from_env_reads_environment_at_call_time(monkeypatch, tmp_path):
    monkeypatch.setenv("NEWS_FEED_URLS", "https://x.example/rss,https://y.example/rss")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LOG_DIR", raising=False)

    config = AppConfig.from_env()

    assert config.feed_urls == ["https://x.example/rss", "https://y.example/rss"]
    assert config.database_url == f"sqlite:///{tmp_path}/articles.db"
    assert config.log_dir == Path(tmp_path) / "logs"
    assert config.admin_password is None
