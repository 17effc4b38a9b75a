"""Miscellaneous utility helpers."""
import re
from urllib.parse import urlparse


def slugify(name: str) -> str:
    """Return a filename-safe, lowercase version of ``name``."""
    slug = re.sub(r"[^a-z0-9]+", "_", name, flags=re.IGNORECASE).strip("_").lower()
    return slug or "page"


def name_from_url(url: str) -> str:
    """Derive a readable test name (host + path) from a page url."""
    parsed = urlparse(url)
    if not parsed.netloc:
        return url
    return f"{parsed.netloc}{parsed.path or '/'}"
