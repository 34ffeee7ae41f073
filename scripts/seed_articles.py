#!/usr/bin/env python3
"""
Script to load articles from a JSON file into the database.

The file holds a list of objects with title, content, author and category.
Entries missing any of them are skipped.

Usage:
    python scripts/seed_articles.py articles.json [--database-url URL]
"""
import sys
import json
import argparse
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import DATABASE_URL
from app.database import make_session_factory
from app.errors import AppError, ValidationError
from app.services.article_store import ArticleStore
from app.utils.logger import setup_script_logger

logger = setup_script_logger("seed_articles")

def seed(store: ArticleStore, entries: list) -> int:
    """Insert every complete entry; returns how many were inserted."""
    count = 0
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping entry {i}: not an object")
            continue
        try:
            store.create_article(
                title=entry.get("title"),
                content=entry.get("content"),
                author=entry.get("author"),
                category=entry.get("category"),
            )
            count += 1
        except ValidationError:
            logger.warning(f"Skipping entry {i}: missing required fields")
    return count

def main():
    parser = argparse.ArgumentParser(
        description='Load articles from a JSON file into the database'
    )
    parser.add_argument('file', type=str, help='JSON file containing a list of articles')
    parser.add_argument(
        '--database-url',
        type=str,
        default=DATABASE_URL,
        help=f'Database URL (default: {DATABASE_URL})'
    )

    args = parser.parse_args()

    path = Path(args.file)
    if not path.exists():
        logger.error(f"File {path} does not exist")
        sys.exit(1)

    try:
        entries = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        sys.exit(1)

    if not isinstance(entries, list):
        logger.error("Expected a JSON list of articles")
        sys.exit(1)

    store = ArticleStore(make_session_factory(args.database_url))
    try:
        store.init_schema()
        count = seed(store, entries)
    except AppError as e:
        logger.error(f"Error seeding articles: {e}")
        sys.exit(1)

    logger.info(f"Successfully imported {count} of {len(entries)} articles")

if __name__ == '__main__':
    main()
