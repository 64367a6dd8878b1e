"""
Webz.io fetcher.

Pages through News API Lite results for one query and stores every new
post through a PostRepository.
"""

import time
from typing import Callable, NamedTuple

import requests

from app_logging import get_logger
from post_repository import PostRepository
from webz_query import WebzQueryBuilder

logger = get_logger("WebzFetcher")

PAGE_SIZE = 10


class WebzApiError(Exception):
    """Raised for failed News API requests."""


class FetchResult(NamedTuple):
    retrieved_count: int
    total_count: int


class WebzFetcher:
    def __init__(
        self,
        token: str,
        base_url: str,
        repository: PostRepository,
        session: requests.Session | None = None,
        request_delay: float = 1.0,
        timeout: float = 30,
    ):
        self.token = token
        self.base_url = base_url
        self.repository = repository
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.request_delay = request_delay
        self.timeout = timeout

    def fetch_posts(self, query: str, callback: Callable[[int, int], None]) -> FetchResult:
        """
        Fetch every page for `query`, saving new posts as they arrive.

        `callback(retrieved_count, total_count)` is called once on
        completion. If the first page fails nothing was saved and the error
        is re-raised without calling back; a later failure ends the run with
        the posts saved so far.
        """
        self.repository.create_tables_if_not_exist()

        url = (
            WebzQueryBuilder(self.token, self.base_url)
            .with_query(query)
            .with_size(PAGE_SIZE)
            .with_highlight(True)
            .build()
        )

        retrieved = 0
        while True:
            try:
                page = self._get_page(url)
                posts = page.get("posts") or []
                logger.info(
                    f"Received {len(posts)} posts. More available: {page.get('moreResultsAvailable')}"
                )
                if posts:
                    saved = self.repository.save_posts(posts)
                    logger.info(f"Saved {saved} posts to the database")
                    retrieved += saved
                next_url = self._next_url(page)
            except Exception:
                logger.exception("Error while fetching and saving posts")
                if retrieved == 0:
                    raise
                logger.warning(f"Stopping early with {retrieved} posts already saved")
                result = FetchResult(retrieved, retrieved)
                break

            if next_url is None:
                logger.info(f"Finished retrieving posts. Total retrieved: {retrieved}")
                result = FetchResult(retrieved, page.get("totalResults", retrieved))
                break

            logger.info(f"Retrieved {retrieved} posts so far. Continuing to next page...")
            time.sleep(self.request_delay)
            url = next_url

        callback(result.retrieved_count, result.total_count)
        return result

    def close(self) -> None:
        """Close the HTTP session if this fetcher opened it."""
        if self._owns_session:
            self.session.close()

    def _next_url(self, page: dict) -> str | None:
        next_link = page.get("next")
        if (page.get("moreResultsAvailable") or 0) > 0 and next_link:
            return WebzQueryBuilder(self.token, self.base_url).with_endpoint(next_link).build()
        return None

    def _get_page(self, url: str) -> dict:
        logger.info(f"Fetching posts from: {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise WebzApiError(f"Request error: {e}") from e

        if response.status_code != 200:
            raise WebzApiError(f"API error: {response.status_code} - {response.text}")

        try:
            page = response.json()
        except ValueError as e:
            raise WebzApiError(f"Invalid API response: {e}") from e

        if page.get("warnings"):
            logger.warning(f"API warnings: {page['warnings']}")
        if page.get("requestsLeft") is not None:
            logger.debug(f"Requests left: {page['requestsLeft']}")
        return page
