"""AI-assisted article import.

Given a URL, fetch the page, strip it down to readable text and ask Gemini
to pull out a draft article (title, author, category, content). The draft
goes back to the admin UI for review; nothing here writes to the database.
"""
import asyncio
import json
import logging
import re
from typing import Optional

import requests
from bs4 import BeautifulSoup
from google import genai

from app.errors import ContentImportError
from app.schemas import ImportedArticle

logger = logging.getLogger(__name__)

# --------- Tunables --------- #
MODEL_DEFAULT = "gemini-2.5-flash"
PAGE_CHAR_LIMIT = 20000  # page text sent to the model
FETCH_TIMEOUT = 30
NOISE_TAGS = ("script", "style", "noscript", "nav", "footer", "header", "aside", "form", "iframe")
CATEGORIES = ("Regulatory", "Validation", "Quality", "Industry News")

HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36'
}


def extract_page_text(html_content: str, limit: int = PAGE_CHAR_LIMIT) -> str:
    """Readable text of a page with navigation/script noise removed."""
    soup = BeautifulSoup(html_content, "html.parser")
    for tag in soup(NOISE_TAGS):
        tag.decompose()

    root = soup.find("article") or soup.find("main") or soup.body or soup
    text = root.get_text(separator="\n")
    lines = [re.sub(r"\s+", " ", line).strip() for line in text.splitlines()]
    cleaned = "\n".join(line for line in lines if line)

    title = soup.title.get_text(strip=True) if soup.title else ""
    if title and not cleaned.startswith(title):
        cleaned = f"{title}\n{cleaned}"
    return cleaned[:limit]


def build_prompt(url: str, page_text: str) -> str:
    return (
        "You are helping a validation-services consultancy import an article into its blog.\n"
        "From the web page text below, extract the article.\n"
        "Return ONLY a JSON object (no Markdown, no explanation) with these string fields:\n"
        '{"title": ..., "author": ..., "category": ..., "content": ...}\n'
        f"- category: one of {', '.join(CATEGORIES)}.\n"
        "- author: the byline, or an empty string if there is none.\n"
        "- content: the article body as plain paragraphs separated by blank lines.\n"
        f"\nSource URL: {url}\n"
        "\nPage text:\n"
        f"{page_text}"
    )


def parse_model_output(text: str) -> ImportedArticle:
    """Turn the model's reply into an ImportedArticle.

    Tolerates Markdown code fences and missing fields; raises ValueError if
    the reply is not a JSON object.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    data = json.loads(cleaned.strip())
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")

    return ImportedArticle(**{
        name: str(data.get(name) or "")
        for name in ("title", "author", "category", "content")
    })


def _generate_text(client: "genai.Client", model: str, prompt: str) -> str:
    """Call Gemini and normalize text output."""
    response = client.models.generate_content(model=model, contents=prompt)
    if not response:
        raise RuntimeError("Empty response from Gemini.")

    text = getattr(response, "text", None)
    if not text and getattr(response, "candidates", None):
        parts = getattr(getattr(response.candidates[0], "content", None), "parts", None)
        if parts and parts[0].text:
            text = parts[0].text
    if not text:
        raise RuntimeError("Gemini returned no text.")
    return text


def fetch_page(url: str) -> str:
    response = requests.get(url, headers=HEADERS, timeout=FETCH_TIMEOUT)
    response.raise_for_status()
    return response.text


def import_from_url(
    url: str,
    api_key: Optional[str],
    model: str = MODEL_DEFAULT,
    client: Optional["genai.Client"] = None,
) -> ImportedArticle:
    """Fetch ``url`` and extract a draft article with Gemini.

    Every failure (bad URL, network, model, unparsable reply) is reported
    as ContentImportError; the cause is logged.
    """
    if not url or not url.startswith(("http://", "https://")):
        raise ContentImportError()

    if client is None:
        if not api_key:
            logger.warning("GEMINI_API_KEY not set. Content import unavailable.")
            raise ContentImportError("Content import is not configured")
        client = genai.Client(api_key=api_key)

    try:
        logger.info(f"Importing content from {url}")
        page_text = extract_page_text(fetch_page(url))
        if not page_text:
            raise ValueError("No readable text on page")

        reply = _generate_text(client, model, build_prompt(url, page_text))
        article = parse_model_output(reply)
    except Exception as e:
        logger.error(f"Error importing content from {url}: {e}", exc_info=True)
        raise ContentImportError() from e

    logger.info(f"Imported draft article: {article.title!r}")
    return article


async def import_from_url_async(url: str, api_key: Optional[str], model: str = MODEL_DEFAULT) -> ImportedArticle:
    """Run import_from_url in a worker thread to keep the event loop free."""
    return await asyncio.to_thread(import_from_url, url, api_key, model)
