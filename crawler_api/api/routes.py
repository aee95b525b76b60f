import asyncio
import contextlib
import logging
from typing import Awaitable, List

from fastapi import APIRouter, Request
from crawler_api.core.config import settings
from crawler_api.fetch.http_fetcher import HttpFetcher
from crawler_api.schemas import FetchRequest, FetchResponse, FetchData
from crawler_api.services import batch

logger = logging.getLogger(__name__)

router = APIRouter()

fetcher = HttpFetcher()

@router.post("/fetch", response_model=FetchResponse)
async def fetch_contents(payload: FetchRequest, request: Request):
    """
    Fetch all URLs and return the plain text of every page that had some.

    Individual failures are left out of `contents`; the call itself
    only fails on a malformed body (see the 400 handler in main).
    """
    contents = await _cancel_on_disconnect(
        request,
        batch.run_batch(
            payload.urls,
            settings.CRAWLER_PROXY,
            fetcher=fetcher,
            max_concurrency=settings.MAX_CONCURRENCY,
        ),
    )
    return FetchResponse(data=FetchData(contents=contents))

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "Crawler API"}

async def _cancel_on_disconnect(request: Request, work: Awaitable[List[str]]) -> List[str]:
    """Run the batch, cancelling it if the client goes away before it is done."""
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=settings.DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Client disconnected, cancelling batch")
                break
    finally:
        if not task.done():
            task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task
    return []
