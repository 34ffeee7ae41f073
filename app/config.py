"""Application configuration."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Base directory
BASE_DIR = Path(__file__).parent.parent

# Data directories
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", str(BASE_DIR / "public" / "uploads")))
DIST_DIR = BASE_DIR / "dist"

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/articles.db")

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Upload limits
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

# News feeds, in round-robin order
DEFAULT_FEED_URLS = [
    "https://www.fda.gov/about-fda/contact-fda/stay-informed/rss-feeds/press-releases/rss.xml",
    "https://www.ema.europa.eu/en/news.xml",
    "https://www.fiercepharma.com/rss/xml",
]

def parse_feed_urls(value: Optional[str]) -> list[str]:
    """Comma-separated feed URLs; None or blank means the defaults."""
    urls = [u.strip() for u in (value or "").split(",") if u.strip()]
    return urls or list(DEFAULT_FEED_URLS)

NEWS_FEED_URLS = parse_feed_urls(os.getenv("NEWS_FEED_URLS"))
FEED_TIMEOUT = float(os.getenv("FEED_TIMEOUT", "15"))

# Gemini API key (for content import)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# Log directory
LOG_DIR = Path(os.getenv("LOG_DIR", str(DATA_DIR / "logs")))

# Name of the environment variable holding the admin secret. It is read on
# each request, never cached here.
ADMIN_PASSWORD_ENV = "ADMIN_PASSWORD"


@dataclass
class AppConfig:
    """Everything the gateway needs, passed explicitly to create_app()."""
    database_url: str = DATABASE_URL
    upload_dir: Path = UPLOAD_DIR
    log_dir: Optional[Path] = LOG_DIR
    dist_dir: Path = DIST_DIR
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    feed_urls: list[str] = field(default_factory=lambda: list(NEWS_FEED_URLS))
    feed_timeout: float = FEED_TIMEOUT
    gemini_api_key: Optional[str] = GEMINI_API_KEY
    gemini_model: str = GEMINI_MODEL
    # None means "read ADMIN_PASSWORD from the environment at request time"
    admin_password: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from the current process environment."""
        data_dir = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
        return cls(
            database_url=os.getenv("DATABASE_URL", f"sqlite:///{data_dir}/articles.db"),
            upload_dir=Path(os.getenv("UPLOAD_DIR", str(BASE_DIR / "public" / "uploads"))),
            log_dir=Path(os.getenv("LOG_DIR", str(data_dir / "logs"))),
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024))),
            feed_urls=parse_feed_urls(os.getenv("NEWS_FEED_URLS")),
            feed_timeout=float(os.getenv("FEED_TIMEOUT", "15")),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        )
