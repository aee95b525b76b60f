"""
HTML to plain text conversion.
Markup is dropped, block structure is kept as line breaks.
"""

import logging
import re
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_DROP_TAGS = ["script", "style", "noscript", "head", "template"]


def html_to_text(body: bytes) -> str:
    """Extract readable text from an HTML body, or "" if there is none."""
    if not body:
        return ""
    try:
        soup = BeautifulSoup(body, "html.parser")
        for tag in soup(_DROP_TAGS):
            tag.decompose()
        raw_text = soup.get_text("\n")
    except Exception as e:
        logger.debug("Could not parse body (%d bytes): %r", len(body), e)
        return ""
    return _normalize_text(raw_text)


def _normalize_text(s: str) -> str:
    s = re.sub(r"\u00a0", " ", s)
    s = re.sub(r"[ \t\x0b\x0c\r]+", " ", s)
    s = re.sub(r" *\n *", "\n", s)
    s = re.sub(r"\n{3,}", "\n\n", s)
    return s.strip()
