import asyncio
import logging
from typing import Callable, List, Optional, Sequence

from crawler_api.fetch.base import BaseFetcher
from crawler_api.fetch.extract import html_to_text
from crawler_api.fetch.http_fetcher import HttpFetcher

logger = logging.getLogger(__name__)

async def run_batch(
    urls: Sequence[str],
    proxy: Optional[str] = None,
    *,
    fetcher: Optional[BaseFetcher] = None,
    extractor: Callable[[bytes], str] = html_to_text,
    max_concurrency: Optional[int] = None,
) -> List[str]:
    """
    Fetch every URL concurrently and return the text of those that produced any.

    One fetch unit runs per URL. A unit that fails or extracts nothing
    contributes no entry, so the result has at most len(urls) items and no
    particular order. All units finish (or time out) before this returns.
    Cancelling the caller cancels every unit still in flight.
    """
    if not urls:
        return []

    fetcher = fetcher or HttpFetcher()
    limiter = asyncio.Semaphore(max_concurrency) if max_concurrency and max_concurrency > 0 else None

    logger.info("Batch of %d urls started (proxy=%s)", len(urls), "on" if proxy else "off")
    results = await asyncio.gather(
        *(_crawl_url(url, proxy, fetcher, extractor, limiter) for url in urls)
    )
    contents = [text for text in results if text]
    logger.info("Batch finished: %d/%d urls produced text", len(contents), len(urls))
    return contents

async def _crawl_url(
    url: str,
    proxy: Optional[str],
    fetcher: BaseFetcher,
    extractor: Callable[[bytes], str],
    limiter: Optional[asyncio.Semaphore],
) -> Optional[str]:
    try:
        if limiter is None:
            body = await fetcher.fetch(url, proxy)
        else:
            async with limiter:
                body = await fetcher.fetch(url, proxy)
        if not body:
            return None

        text = await asyncio.to_thread(extractor, body)
        if not text:
            logger.debug("No text extracted from %s", url)
            return None
        return text
    except Exception:
        # unit failures never reach the batch
        logger.exception("Unexpected error while crawling %s", url)
        return None
