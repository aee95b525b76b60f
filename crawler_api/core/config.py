import os
from typing import Optional

class Settings:
    # Outbound requests
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "5"))
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_11_6) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/56.0.2924.87 Safari/537.36",
    )

    # Batch fan-out, 0 means one in-flight fetch per URL with no cap
    MAX_CONCURRENCY: int = int(os.getenv("MAX_CONCURRENCY", "0"))
    DISCONNECT_POLL_SECONDS: float = float(os.getenv("DISCONNECT_POLL_SECONDS", "0.5"))

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def CRAWLER_PROXY(self) -> Optional[str]:
        """Upstream proxy, looked up again for every batch."""
        return os.getenv("CRAWLER_PROXY") or None

settings = Settings()
