"""Persistent article store backed by a single SQLAlchemy table."""
import logging
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.database import Base
from app.errors import StorageError, ValidationError
from app.models import Article

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "content", "author", "category")

# SQLite INTEGER is a signed 64-bit value
MAX_ID = 2**63 - 1


def missing_fields(values: dict) -> list[str]:
    """Return the required fields that are missing, blank or not strings."""
    return [
        name for name in REQUIRED_FIELDS
        if not isinstance(values.get(name), str) or not values[name].strip()
    ]


class ArticleStore:
    """Create, list and delete articles.

    Every operation is a single statement in its own session, so no
    transaction spans more than one call.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def init_schema(self) -> None:
        """Create the articles table (and the SQLite file's directory) if absent."""
        engine = self.session_factory.kw["bind"]
        database = engine.url.database
        if engine.url.get_backend_name() == "sqlite" and database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        try:
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            logger.error(f"Error creating articles table: {e}", exc_info=True)
            raise StorageError("Failed to initialize database") from e

    def list_articles(self) -> list[Article]:
        """All articles, newest first."""
        with self.session_factory() as db:
            try:
                return (
                    db.query(Article)
                    .order_by(Article.created_at.desc(), Article.id.desc())
                    .all()
                )
            except SQLAlchemyError as e:
                logger.error(f"Error listing articles: {e}", exc_info=True)
                raise StorageError("Failed to fetch articles") from e

    def create_article(self, title: str, content: str, author: str, category: str) -> Article:
        """Insert an article and return it with its id and timestamp.

        Values are stored exactly as given.
        """
        missing = missing_fields(
            {"title": title, "content": content, "author": author, "category": category}
        )
        if missing:
            raise ValidationError()

        with self.session_factory() as db:
            try:
                article = Article(title=title, content=content, author=author, category=category)
                db.add(article)
                db.commit()
                db.refresh(article)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Error creating article: {e}", exc_info=True)
                raise StorageError("Failed to create article") from e

        logger.info(f"Created article: {article.title} (ID: {article.id})")
        return article

    def delete_article(self, article_id: int) -> bool:
        """Delete by id. A missing id is not an error; returns whether a row went away."""
        if not -MAX_ID - 1 <= article_id <= MAX_ID:
            logger.info(f"Delete requested for out-of-range article ID: {article_id}")
            return False

        with self.session_factory() as db:
            try:
                deleted = db.query(Article).filter(Article.id == article_id).delete()
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Error deleting article {article_id}: {e}", exc_info=True)
                raise StorageError("Failed to delete article") from e

        if deleted:
            logger.info(f"Deleted article ID: {article_id}")
        else:
            logger.info(f"Delete requested for missing article ID: {article_id}")
        return bool(deleted)
