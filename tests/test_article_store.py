"""Tests for the article store."""
from unittest import mock

import pytest
from sqlalchemy.exc import OperationalError

from app.errors import StorageError, ValidationError
from app.services.article_store import missing_fields


def test_empty_store_lists_nothing(store):
    assert store.list_articles() == []


def test_create_returns_record_with_id_and_timestamp(store):
    article = store.create_article("Title", "Body", "Jane", "Validation")

    assert article.id is not None
    assert article.created_at is not None
    assert article.title == "Title"


def test_list_is_newest_first(store):
    a = store.create_article("A", "a", "x", "c")
    b = store.create_article("B", "b", "x", "c")
    c = store.create_article("C", "c", "x", "c")

    assert [article.id for article in store.list_articles()] == [c.id, b.id, a.id]


def test_ids_increase(store):
    first = store.create_article("A", "a", "x", "c")
    second = store.create_article("B", "b", "x", "c")
    assert second.id > first.id


@pytest.mark.parametrize("field", ["title", "content", "author", "category"])
@pytest.mark.parametrize("value", ["", "   ", None])
def test_create_rejects_missing_field(store, field, value):
    values = {"title": "T", "content": "C", "author": "A", "category": "K"}
    values[field] = value

    with pytest.raises(ValidationError):
        store.create_article(**values)
    assert store.list_articles() == []


def test_content_is_stored_verbatim(store):
    content = "  Line one\n\n<b>bold</b> & ünïcödé  \n"
    store.create_article("T", content, "A", "K")
    assert store.list_articles()[0].content == content


def test_delete_removes_row(store):
    keep = store.create_article("Keep", "k", "x", "c")
    drop = store.create_article("Drop", "d", "x", "c")

    assert store.delete_article(drop.id) is True
    assert [a.id for a in store.list_articles()] == [keep.id]


def test_delete_missing_id_is_silent(store):
    store.create_article("Keep", "k", "x", "c")

    assert store.delete_article(9999) is False
    assert len(store.list_articles()) == 1


def test_database_errors_become_storage_errors(store):
    with mock.patch.object(store, "session_factory") as factory:
        session = factory.return_value.__enter__.return_value
        session.query.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))

        with pytest.raises(StorageError):
            store.list_articles()


def test_delete_id_outside_sqlite_range_is_silent(store):
    store.create_article("Keep", "k", "x", "c")

    assert store.delete_article(99999999999999999999) is False
    assert store.delete_article(-(2**63) - 1) is False
    assert len(store.list_articles()) == 1


def test_missing_fields_treats_non_strings_as_missing():
    values = {"title": 5, "content": "Body", "author": ["x"], "category": "Validation"}
    assert missing_fields(values) == ["title", "author"]


def test_create_rejects_non_string_field(store):
    with pytest.raises(ValidationError):
        store.create_article(5, "Body", "Author", "Category")
    assert store.list_articles() == []
