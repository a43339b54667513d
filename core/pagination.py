# =============================================================================
# core/pagination.py  —  Cursor pagination & retry (the fetch building blocks)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Two small async helpers that RunnClient composes for every list call:
#
#     paginate(fetch_page)   follows `nextCursor` until the API stops
#                            returning one, or until `max_pages` pages.
#     with_retry(call)       re-issues a call that failed with 429/5xx,
#                            honouring the server's Retry-After hint.
#
#   Neither knows about HTTP.  `fetch_page` is any async callable that takes
#   a cursor and returns {"values": [...], "nextCursor": "..."}; `call` is any
#   async callable that raises RunnAPIError on failure.  That keeps them
#   testable with plain AsyncMocks.
#
# PAGE CAP:
#   After `max_pages` pages the loop stops even if a cursor is still present.
#   Callers receive a truncated list; a warning is logged so truncation is
#   visible in the server output.
# =============================================================================

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from core.errors import RunnAPIError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_PAGES = 10
DEFAULT_MAX_RETRIES = 3


async def paginate(
    fetch_page: Callable[[Optional[str]], Awaitable[dict]],
    max_pages: int = DEFAULT_MAX_PAGES,
) -> list[Any]:
    """Fetch every page of a cursor-paginated collection, in page order."""
    values: list[Any] = []
    cursor: Optional[str] = None
    pages = 0

    while True:
        page = await fetch_page(cursor) or {}
        values.extend(page.get("values") or [])
        cursor = page.get("nextCursor")
        pages += 1

        if not cursor:
            break
        if pages >= max_pages:
            logger.warning(
                f"Pagination stopped after {pages} pages with a cursor still open; "
                f"returning {len(values)} records"
            )
            break

    logger.debug(f"Pagination: {pages} page(s), {len(values)} records")
    return values


async def with_retry(
    call: Callable[[], Awaitable[T]],
    max_retries: int = DEFAULT_MAX_RETRIES,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> T:
    """Await `call()`, retrying rate-limit and server errors with backoff.

    Up to `max_retries` additional attempts are made for a RunnAPIError with
    status 429 or 5xx.  The delay is the error's `retry_after` (seconds) when
    the server sent one, otherwise 2**attempt seconds.  Any other exception,
    or the last retryable one, propagates unchanged.
    """
    attempt = 0
    while True:
        try:
            return await call()
        except RunnAPIError as e:
            if not e.is_retryable or attempt >= max_retries:
                raise
            attempt += 1
            delay = e.retry_after if e.retry_after is not None else 2 ** attempt
            logger.warning(
                f"Runn API returned {e.status_code}; retry {attempt}/{max_retries} in {delay}s"
            )
            await sleep(delay)
