"""Cursor pagination: follow ``links.next`` until the API reports no more pages."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar
from urllib.parse import parse_qs, urlsplit

from easyredir_cli.client.errors import EasyredirCLIError, PaginationError
from easyredir_cli.models.common import Collection, ListOptions, Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

CURSOR_PARAM = "starting_after"

PageFetcher = Callable[[ListOptions], Page[T]]


def next_cursor(link: str | None) -> str | None:
    """Return the ``starting_after`` value embedded in a next-page link.

    >>> next_cursor("/v1/rules?starting_after=abc-def&limit=10")
    'abc-def'
    """
    if not link:
        return None
    values = parse_qs(urlsplit(link).query).get(CURSOR_PARAM)
    if not values or not values[0]:
        return None
    return values[0]


def paginate(
    fetch: PageFetcher[T],
    options: ListOptions | None = None,
    *,
    max_pages: int | None = None,
) -> Collection[T]:
    """Fetch every page of a listing, strictly in order.

    *options* are sent with every request; only ``starting_after`` is
    replaced, with the cursor taken from the previous page. Any failure
    raises :class:`PaginationError` carrying the failing page index and
    the records gathered so far.
    """
    options = options or ListOptions()
    records: list[T] = []
    page_options = options
    index = 0
    while True:
        if max_pages is not None and index >= max_pages:
            raise PaginationError(
                index, f"more than {max_pages} pages", partial=records,
            )
        try:
            page = fetch(page_options)
        except EasyredirCLIError as exc:
            raise PaginationError(index, str(exc), partial=records, cause=exc) from exc
        logger.debug(
            "Page %d: %d record(s), has_more=%s", index, len(page.data), page.has_more,
        )

        if not page.has_more:
            records.extend(page.data)
            return Collection(data=records, meta=page.meta, links=page.links)

        cursor = next_cursor(page.links.next)
        if cursor is None:
            raise PaginationError(
                index,
                f"has_more is set but next link {page.links.next!r} has no cursor",
                partial=records,
            )
        if cursor == page_options.starting_after:
            raise PaginationError(
                index, f"cursor {cursor!r} did not advance", partial=records,
            )
        records.extend(page.data)
        page_options = options.model_copy(update={"starting_after": cursor})
        index += 1
