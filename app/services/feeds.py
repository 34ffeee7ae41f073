"""News feed aggregation.

Each configured RSS/Atom feed is fetched independently and concurrently.
Feeds that fail are dropped; the survivors are interleaved round-robin so
that no single source dominates the top of the list.
"""
import asyncio
import logging
import xml.etree.ElementTree as ET
from typing import Awaitable, Callable, Sequence, Union

import requests

from app.errors import AggregationError
from app.schemas import FeedItem

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "Industry News"
ATOM_NS = "{http://www.w3.org/2005/Atom}"
HEADERS = {
    'User-Agent': 'Mozilla/5.0 (compatible; VMS-NewsBot/1.0)'
}

# What a single fetch produces: its items, or the exception that killed it
FeedOutcome = Union[list[FeedItem], BaseException]
Fetcher = Callable[[str], Awaitable[list[FeedItem]]]


def _text(elem) -> str:
    if elem is None or elem.text is None:
        return ""
    return elem.text.strip()


def parse_feed(xml_text: str, default_source: str = DEFAULT_SOURCE) -> list[FeedItem]:
    """Parse an RSS 2.0 or Atom document into normalized items.

    Missing fields become empty strings. Raises ET.ParseError on malformed XML.
    """
    # Handle stray whitespace/BOM before the XML declaration
    root = ET.fromstring(xml_text.lstrip("\ufeff \t\r\n"))

    if root.tag == f"{ATOM_NS}feed":
        source = _text(root.find(f"{ATOM_NS}title")) or default_source
        items = []
        for entry in root.findall(f"{ATOM_NS}entry"):
            link_elem = entry.find(f"{ATOM_NS}link[@rel='alternate']")
            if link_elem is None:
                link_elem = entry.find(f"{ATOM_NS}link")
            items.append(FeedItem(
                title=_text(entry.find(f"{ATOM_NS}title")),
                link=link_elem.get("href", "") if link_elem is not None else "",
                pubDate=_text(entry.find(f"{ATOM_NS}published")) or _text(entry.find(f"{ATOM_NS}updated")),
                source=source,
            ))
        return items

    # RSS 2.0
    channel = root.find("channel")
    source = _text(channel.find("title")) if channel is not None else ""
    source = source or default_source
    return [
        FeedItem(
            title=_text(item.find("title")),
            link=_text(item.find("link")),
            pubDate=_text(item.find("pubDate")),
            source=source,
        )
        for item in root.iter("item")
    ]


async def fetch_feed(url: str, timeout: float = 15.0) -> list[FeedItem]:
    """Download and parse one feed. Any failure propagates to the caller."""
    def download() -> str:
        response = requests.get(url, headers=HEADERS, timeout=timeout)
        response.raise_for_status()
        return response.text

    body = await asyncio.to_thread(download)
    items = parse_feed(body)
    logger.info(f"Fetched {len(items)} items from {url}")
    return items


def merge_round_robin(outcomes: Sequence[FeedOutcome]) -> list[FeedItem]:
    """Interleave the items of every successful feed by position.

    Exceptions in ``outcomes`` are skipped. For each position i, feeds are
    visited in input order and contribute their i-th item if they have one.
    """
    feeds = [items for items in outcomes if not isinstance(items, BaseException)]
    if not feeds:
        return []

    merged = []
    longest = max(len(items) for items in feeds)
    for i in range(longest):
        for items in feeds:
            if i < len(items):
                merged.append(items[i])
    return merged


async def aggregate_feeds(urls: Sequence[str], fetch: Fetcher = fetch_feed) -> list[FeedItem]:
    """Fetch all feeds concurrently and merge whatever succeeded.

    Per-feed failures are logged and dropped; if every feed fails the result
    is empty. Only failures outside the per-feed fetches raise AggregationError.
    """
    try:
        outcomes = await asyncio.gather(*(fetch(url) for url in urls), return_exceptions=True)

        for url, outcome in zip(urls, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(f"Dropping feed {url}: {outcome!r}")

        merged = merge_round_robin(outcomes)
    except Exception as e:
        logger.error(f"Error aggregating feeds: {e}", exc_info=True)
        raise AggregationError() from e

    logger.info(f"Aggregated {len(merged)} news items from {len(urls)} feeds")
    return merged
