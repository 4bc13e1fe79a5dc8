"""Collect complete result sets from ``startAt``-paged Jira endpoints."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .models import Issue, SearchPage
from .source import IssueSource

logger = logging.getLogger(__name__)

PageFetcher = Callable[[int, int], SearchPage]


def collect_pages(fetch_page: PageFetcher, page_size: int = DEFAULT_PAGE_SIZE) -> list[Issue]:
    """Request pages until the envelope says the result set is exhausted.

    The ``total`` reported by each response is trusted as-is; there is no
    max-page guard. Issues are returned in API order.
    ``page_size`` must not exceed the page size the server grants.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    out: list[Issue] = []
    start_at = 0
    while True:
        page = fetch_page(start_at, page_size)
        out.extend(page.issues)
        logger.debug(
            "Fetched %s issues at startAt=%s (total=%s, maxResults=%s)",
            len(page.issues),
            start_at,
            page.total,
            page.max_results,
        )
        if page.total < start_at + page.max_results:
            break
        start_at += page_size
    return out


class SearchPager:
    def __init__(self, source: IssueSource, page_size: int = DEFAULT_PAGE_SIZE):
        self.source = source
        if page_size > MAX_PAGE_SIZE:
            # startAt advances by page_size, so it must not exceed what the server grants
            logger.warning("Page size %s exceeds the server limit; using %s", page_size, MAX_PAGE_SIZE)
            page_size = MAX_PAGE_SIZE
        self.page_size = page_size

    def fetch_all(self, jql: str) -> list[Issue]:
        """Run ``jql`` to completion. ``SourceError`` from any page propagates."""
        logger.debug("Searching: %s", jql)
        return collect_pages(
            lambda start_at, size: self.source.search(jql, start_at, size),
            self.page_size,
        )
