import asyncio
import logging
from typing import Optional

import httpx

from crawler_api.core.config import settings
from .base import BaseFetcher

logger = logging.getLogger(__name__)

class HttpFetcher(BaseFetcher):
    """
    Single-shot GET over an optional upstream proxy.

    Certificate checks are off and any status code is accepted: the caller
    only cares whether a body came back. Every failure, including the
    overall timeout, collapses to an empty body.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self.user_agent = user_agent or settings.USER_AGENT
        self._transport = transport

    @property
    def headers(self) -> dict:
        return {
            "Connection": "keep-alive",
            "User-Agent": self.user_agent,
        }

    async def fetch(self, url: str, proxy: Optional[str] = None) -> bytes:
        try:
            return await asyncio.wait_for(self._get(url, proxy), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.debug("Timeout after %ss fetching %s", self.timeout, url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, ImportError) as e:
            logger.debug("Failed to fetch %s: %r", url, e)
        return b""

    async def _get(self, url: str, proxy: Optional[str]) -> bytes:
        async with httpx.AsyncClient(**self._client_options(proxy)) as client:
            response = await client.get(url)
            return response.content

    def _client_options(self, proxy: Optional[str]) -> dict:
        options = {
            "headers": self.headers,
            "timeout": self.timeout,
            "verify": False,
            "follow_redirects": True,
            # CRAWLER_PROXY is the only proxy setting; HTTP_PROXY and friends are ignored
            "trust_env": False,
        }
        proxy = resolve_proxy(proxy)
        if proxy:
            options["proxy"] = proxy
        if self._transport is not None:
            options["transport"] = self._transport
        return options

def resolve_proxy(proxy: Optional[str]) -> Optional[str]:
    """Return a usable proxy URL, or None to connect directly."""
    if not proxy:
        return None
    try:
        httpx.Proxy(proxy)
    except (httpx.InvalidURL, ValueError) as e:
        logger.warning("Ignoring unusable proxy %r, connecting directly: %s", proxy, e)
        return None
    return proxy
