"""Pagination engine.

Materializes a paginated collection into one ordered list. Resources plug in
two callables:

``fetch_page(access_token, limit, position, *extra)``
    Returns the raw page payload, or something falsy once nothing is left.
    ``position`` is a numeric offset, or the ``after`` cursor of the previous
    page for cursor-paginated resources.

``extract(payload) -> PageData | None``
    Normalizes the resource-specific envelope. ``None`` means the expected
    field is missing and is treated as exhaustion.

Two strategies are available per call: :func:`fetch_sequential` walks the
collection one page at a time, :func:`fetch_bulk` reads the first page and then
requests all remaining pages concurrently.
"""

import asyncio
import enum
import logging
import math
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from spotify_wrapper.constants import MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

FetchPage = Callable[..., Awaitable[Any]]
Extract = Callable[[Any], "PageData | None"]


class PaginationStrategy(enum.StrEnum):
    SEQUENTIAL = "sequential"
    BULK = "bulk"


@dataclass(slots=True)
class PageData:
    """One normalized page."""

    items: list[Any] = field(default_factory=list)
    total: int = 0
    limit: int | None = None
    after: str | None = None
    cursor_based: bool = False


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


def _paging(payload: Any, key: str | None = None) -> Mapping[str, Any] | None:
    if not isinstance(payload, Mapping):
        return None
    if key is not None:
        payload = payload.get(key)
        if not isinstance(payload, Mapping):
            return None
    if not isinstance(payload.get("items"), list):
        return None
    return payload


def extract_page(payload: Any) -> PageData | None:
    """Plain paging object: ``{items, total, limit}``."""
    paging = _paging(payload)
    if paging is None:
        return None
    return PageData(items=list(paging["items"]), total=paging.get("total") or 0, limit=paging.get("limit"))


def extract_playlist_tracks(payload: Any) -> PageData | None:
    """Playlist tracks wrap each track in ``{added_at, added_by, track}``; null tracks are dropped."""
    paging = _paging(payload)
    if paging is None:
        return None
    tracks = [dict(item["track"]) for item in paging["items"] if isinstance(item, Mapping) and item.get("track")]
    return PageData(items=tracks, total=paging.get("total") or 0, limit=paging.get("limit"))


def extract_saved_albums(payload: Any) -> PageData | None:
    """Saved albums wrap each album in ``{added_at, album}``."""
    paging = _paging(payload)
    if paging is None:
        return None
    albums = [dict(item["album"]) for item in paging["items"] if isinstance(item, Mapping) and item.get("album")]
    return PageData(items=albums, total=paging.get("total") or 0, limit=paging.get("limit"))


def extract_followed_artists(payload: Any) -> PageData | None:
    """Followed artists: ``{artists: {items, total, limit, cursors: {after}}}``."""
    paging = _paging(payload, "artists")
    if paging is None:
        return None
    cursors = paging.get("cursors") or {}
    return PageData(
        items=list(paging["items"]),
        total=paging.get("total") or 0,
        limit=paging.get("limit"),
        after=cursors.get("after"),
        cursor_based=True,
    )


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def clamp_page_size(page_size: int) -> int:
    """Clamp a requested page size to ``1..MAX_PAGE_SIZE``."""
    return max(1, min(page_size, MAX_PAGE_SIZE))


def _cap(item_cap: int | None) -> float:
    return math.inf if item_cap is None else item_cap


async def fetch_sequential(
    fetch_page: FetchPage,
    access_token: str,
    page_size: int,
    extract: Extract,
    *extra: Any,
    item_cap: int | None = None,
) -> list[Any]:
    """Fetch one page at a time until the collection or ``item_cap`` is exhausted.

    Stops when the reported ``total`` is reached, ``item_cap`` is reached, the
    fetch returns nothing, the extractor returns ``None``, or a page holds zero
    items (``total`` is sometimes stale, so an empty page wins).
    """
    limit = clamp_page_size(page_size)
    cap = _cap(item_cap)
    items: list[Any] = []
    total: float = math.inf
    offset = 0
    cursor: str | None = None

    while len(items) < total and len(items) < cap:
        payload = await fetch_page(access_token, limit, cursor if cursor is not None else offset, *extra)
        if not payload:
            break

        page = extract(payload)
        if page is None or not page.items:
            break

        items.extend(page.items)
        total = page.total

        if page.cursor_based:
            if not page.after:
                break
            cursor = page.after
        else:
            offset += page.limit or limit

    logger.debug("Sequential pagination collected %d items", len(items))
    return items


async def fetch_bulk(
    fetch_page: FetchPage,
    access_token: str,
    page_size: int,
    extract: Extract,
    *extra: Any,
    item_cap: int | None = None,
) -> list[Any]:
    """Fetch the first page, then every remaining page concurrently.

    Results are concatenated in offset order regardless of completion order. A
    page that raises or comes back empty contributes no items. The last page is
    not trimmed, so up to one page beyond ``item_cap`` may be returned.
    """
    limit = clamp_page_size(page_size)
    cap = _cap(item_cap)

    first = await fetch_page(access_token, limit, 0, *extra)
    if not first:
        return []
    page = extract(first)
    if page is None:
        return []

    items = list(page.items)
    if page.cursor_based:
        logger.debug("Cursor-paginated resource, continuing sequentially")
        return await _continue_cursor(fetch_page, access_token, limit, extract, extra, items, page, cap)

    if not items or len(items) >= page.total:
        return items

    page_limit = page.limit or limit
    pages_to_fetch = math.ceil((min(page.total, cap) - len(items)) / page_limit)
    if pages_to_fetch <= 0:
        return items

    offsets = [page_limit * (i + 1) for i in range(pages_to_fetch)]
    logger.debug("Bulk pagination: total=%d, fetching %d more pages", page.total, pages_to_fetch)
    results = await asyncio.gather(
        *(fetch_page(access_token, limit, offset, *extra) for offset in offsets),
        return_exceptions=True,
    )

    for offset, result in zip(offsets, results, strict=True):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning("Page at offset %d failed, skipping: %s", offset, result)
            continue
        if not result:
            continue
        extracted = extract(result)
        if extracted is None:
            logger.warning("Page at offset %d had no recognizable items, skipping", offset)
            continue
        items.extend(extracted.items)

    return items


async def _continue_cursor(
    fetch_page: FetchPage,
    access_token: str,
    limit: int,
    extract: Extract,
    extra: tuple[Any, ...],
    items: list[Any],
    page: PageData,
    cap: float,
) -> list[Any]:
    while page.after and page.items and len(items) < page.total and len(items) < cap:
        payload = await fetch_page(access_token, limit, page.after, *extra)
        if not payload:
            break
        next_page = extract(payload)
        if next_page is None or not next_page.items:
            break
        items.extend(next_page.items)
        page = next_page
    return items


async def paginate(
    fetch_page: FetchPage,
    access_token: str,
    page_size: int,
    extract: Extract,
    *extra: Any,
    item_cap: int | None = None,
    strategy: PaginationStrategy = PaginationStrategy.BULK,
) -> list[Any]:
    """Run the chosen strategy."""
    if strategy == PaginationStrategy.SEQUENTIAL:
        return await fetch_sequential(fetch_page, access_token, page_size, extract, *extra, item_cap=item_cap)
    return await fetch_bulk(fetch_page, access_token, page_size, extract, *extra, item_cap=item_cap)
