"""
Tests for the counted redirect transaction.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy.exc import SQLAlchemyError

from shortlink_app.exceptions import RedirectFailedError, URLNotFoundError
from shortlink_app.services.redirect_resolver import RedirectResolver
from shortlink_app.storage.url_store import UrlStore


def redirect_in_own_session(session_factory, code):
    """One simulated request: its own session, closed on every exit path"""
    db = session_factory()
    try:
        return RedirectResolver(UrlStore(db)).resolve(code)
    finally:
        db.close()


def access_count(session_factory, code):
    db = session_factory()
    try:
        return UrlStore(db).find_by_code(code).access_count
    finally:
        db.close()


class TestRedirectResolver:

    def test_returns_target_and_counts(self, store):
        store.create("https://example.com/path", "abcdef")
        resolver = RedirectResolver(store)

        assert resolver.resolve("abcdef") == "https://example.com/path"
        assert resolver.resolve("abcdef") == "https://example.com/path"

        assert store.find_by_code("abcdef").access_count == 2

    def test_missing_code(self, store):
        with pytest.raises(URLNotFoundError):
            RedirectResolver(store).resolve("zzzzzz")

    def test_redirect_does_not_change_url_or_created_at(self, store):
        record = store.create("https://example.com/path", "abcdef")
        created_at, updated_at = record.created_at, record.updated_at

        RedirectResolver(store).resolve("abcdef")

        record = store.find_by_code("abcdef")
        assert record.url == "https://example.com/path"
        assert record.created_at == created_at
        assert record.updated_at > updated_at

    def test_failed_commit_rolls_back(self, store, db_session, session_factory, monkeypatch):
        store.create("https://example.com/path", "abcdef")

        def failing_commit():
            raise SQLAlchemyError("disk I/O error")

        monkeypatch.setattr(db_session, "commit", failing_commit)

        with pytest.raises(RedirectFailedError):
            RedirectResolver(store).resolve("abcdef")

        assert access_count(session_factory, "abcdef") == 0

    def test_three_concurrent_redirects(self, store, session_factory):
        store.create("https://example.com/path", "abcdef")

        with ThreadPoolExecutor(max_workers=3) as pool:
            targets = list(pool.map(
                lambda _: redirect_in_own_session(session_factory, "abcdef"), range(3)
            ))

        assert targets == ["https://example.com/path"] * 3
        assert access_count(session_factory, "abcdef") == 3

    def test_no_lost_updates_under_contention(self, store, session_factory):
        store.create("https://example.com/path", "abcdef")
        redirects = 40

        with ThreadPoolExecutor(max_workers=8) as pool:
            targets = list(pool.map(
                lambda _: redirect_in_own_session(session_factory, "abcdef"), range(redirects)
            ))

        assert set(targets) == {"https://example.com/path"}
        assert access_count(session_factory, "abcdef") == redirects
