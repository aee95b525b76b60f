from typing import Optional

class BaseFetcher:
    async def fetch(self, url: str, proxy: Optional[str] = None) -> bytes:
        """Return the response body, or b"" when the page could not be fetched."""
        raise NotImplementedError
