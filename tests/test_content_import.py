"""Tests for the AI-assisted content import."""
from unittest import mock

import pytest

from app.errors import ContentImportError
from app.services import content_import
from app.services.content_import import extract_page_text, import_from_url, parse_model_output
from tests.conftest import ADMIN_PASSWORD

PAGE = """
<html>
  <head><title>New Annex 1 guidance</title><script>var x = 1;</script></head>
  <body>
    <nav>Home | About</nav>
    <article>
      <h1>New Annex 1 guidance</h1>
      <p>By   Jane Smith</p>
      <p>Sterile manufacturing rules changed.</p>
    </article>
    <footer>Copyright</footer>
  </body>
</html>
"""

REPLY = '```json\n{"title": "New Annex 1 guidance", "author": "Jane Smith", "category": "Regulatory", "content": "Sterile manufacturing rules changed."}\n```'


def _fake_client(text):
    client = mock.Mock()
    client.models.generate_content.return_value = mock.Mock(text=text)
    return client


def test_extract_page_text_drops_noise():
    text = extract_page_text(PAGE)

    assert "Sterile manufacturing rules changed." in text
    assert "By Jane Smith" in text
    assert "var x" not in text
    assert "Home | About" not in text
    assert "Copyright" not in text


def test_extract_page_text_truncates():
    assert len(extract_page_text("<p>" + "word " * 1000 + "</p>", limit=100)) == 100


def test_parse_model_output_handles_fences_and_missing_fields():
    article = parse_model_output('```json\n{"title": "T", "author": null}\n```')

    assert article.title == "T"
    assert article.author == ""
    assert article.content == ""


def test_parse_model_output_rejects_non_object():
    with pytest.raises(ValueError):
        parse_model_output('["not", "an", "object"]')


def test_import_from_url_uses_gemini():
    client = _fake_client(REPLY)
    with mock.patch.object(content_import, "fetch_page", return_value=PAGE):
        article = import_from_url("https://news.example/annex-1", api_key=None, model="m", client=client)

    assert article.author == "Jane Smith"
    assert article.category == "Regulatory"
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "m"
    assert "Sterile manufacturing rules changed." in kwargs["contents"]


def test_import_from_url_wraps_failures():
    with mock.patch.object(content_import, "fetch_page", side_effect=ConnectionError("down")):
        with pytest.raises(ContentImportError):
            import_from_url("https://news.example/x", api_key=None, client=_fake_client(REPLY))

    with mock.patch.object(content_import, "fetch_page", return_value=PAGE):
        with pytest.raises(ContentImportError):
            import_from_url("https://news.example/x", api_key=None, client=_fake_client("not json"))


@pytest.mark.parametrize("url", ["", "ftp://example.com/file", "javascript:alert(1)"])
def test_import_from_url_rejects_bad_urls(url):
    with pytest.raises(ContentImportError):
        import_from_url(url, api_key="key", client=_fake_client(REPLY))


def test_import_without_api_key_fails():
    with pytest.raises(ContentImportError):
        import_from_url("https://news.example/x", api_key=None)


def test_import_endpoint_requires_password(client):
    response = client.post("/api/import", json={"url": "https://news.example/x", "password": "nope"})
    assert response.status_code == 401


def test_import_endpoint_returns_draft(client):
    with mock.patch.object(content_import, "fetch_page", return_value=PAGE), \
            mock.patch.object(content_import.genai, "Client", return_value=_fake_client(REPLY)):
        response = client.post(
            "/api/import",
            json={"url": "https://news.example/annex-1", "password": ADMIN_PASSWORD},
        )

    assert response.status_code == 200
    assert response.json() == {
        "title": "New Annex 1 guidance",
        "author": "Jane Smith",
        "category": "Regulatory",
        "content": "Sterile manufacturing rules changed.",
    }
    # drafts are never stored
    assert client.get("/api/articles").json() == []


def test_import_endpoint_reports_failure(client):
    with mock.patch.object(content_import, "fetch_page", side_effect=ConnectionError("down")), \
            mock.patch.object(content_import.genai, "Client", return_value=_fake_client(REPLY)):
        response = client.post(
            "/api/import",
            json={"url": "https://news.example/x", "password": ADMIN_PASSWORD},
        )

    assert response.status_code == 502
    assert response.json() == {"error": "Failed to import content. Please check the URL."}
