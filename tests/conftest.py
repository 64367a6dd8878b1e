"""
Pytest configuration and fixtures for the fetcher tests.
"""
import os

os.environ.setdefault("WEBZ_LOG_FILE", "")

import pytest
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from post_repository import PostRepository


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across connections."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng, "connect")
    def _enable_foreign_keys(dbapi_conn, _record):
        dbapi_conn.execute("PRAGMA foreign_keys = ON")

    yield eng
    eng.dispose()


@pytest.fixture
def repository(engine):
    repo = PostRepository(engine)
    repo.create_tables_if_not_exist()
    return repo


@pytest.fixture
def count_rows(engine):
    """Count rows of a model class."""
    def _count(model) -> int:
        with Session(engine) as ssn:
            return ssn.scalar(select(func.count()).select_from(model))
    return _count


def make_post(uuid: str = "post1", **overrides) -> dict:
    """Build a post shaped like a News API Lite response item."""
    post = {
        "uuid": uuid,
        "url": f"http://example.com/{uuid}",
        "ord_in_thread": 0,
        "parent_url": None,
        "author": "Author 1",
        "published": "2023-01-01T12:00:00.000+02:00",
        "title": "Test Post",
        "text": "Test content",
        "highlightText": "",
        "highlightTitle": "",
        "highlightThreadTitle": "",
        "language": "english",
        "sentiment": "neutral",
        "categories": ["tech", "news"],
        "external_links": [],
        "external_images": [],
        "entities": {
            "persons": [{"name": "Person 1", "sentiment": "positive"}],
            "organizations": [{"name": "Org 1", "sentiment": "neutral"}],
            "locations": [{"name": "Berlin", "sentiment": "none"}],
        },
        "rating": None,
        "crawled": "2023-01-01T12:05:00Z",
        "updated": "2023-01-01T12:05:00Z",
        "thread": {
            "uuid": f"thread-{uuid}",
            "url": "http://example.com",
            "site_full": "example.com",
            "site": "example.com",
            "site_section": "http://example.com/blog",
            "site_categories": [],
            "section_title": "Blog",
            "title": "Thread Title",
            "title_full": "Thread Full Title",
            "published": "2023-01-01T12:00:00Z",
            "replies_count": 0,
            "participants_count": 1,
            "site_type": "news",
            "country": "US",
            "main_image": "http://example.com/image.jpg",
            "performance_score": 0.8,
            "domain_rank": 100,
            "domain_rank_updated": "2023-01-01T00:00:00Z",
            "social": {"updated": "2023-01-01T00:00:00Z"},
        },
    }
    post.update(overrides)
    return post
