"""Image URL helpers for catalog documents.

Catalog entries store images either as absolute URLs or as paths relative to
the API host, and gallery entries arrive as bare strings or as objects. These
helpers turn both into absolute URL strings.
"""

from typing import Any

__all__ = ["absolute_image_url", "image_entry_url"]


def absolute_image_url(raw: str | None, base_url: str, placeholder: str | None = None) -> str | None:
    """Return ``raw`` as an absolute URL rooted at ``base_url``.

    Empty values map to ``placeholder`` (which may itself be ``None``).
    """
    if not raw or not raw.strip():
        return placeholder
    raw = raw.strip()
    if raw.startswith("http://") or raw.startswith("https://"):
        return raw
    base = base_url.rstrip("/")
    if raw.startswith("/"):
        return f"{base}{raw}"
    return f"{base}/{raw}"


def image_entry_url(entry: Any) -> str | None:
    """Extract the URL from a gallery entry (plain string or ``{"url": ...}`` object)."""
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        for key in ("url", "imageUrl", "image_url"):
            value = entry.get(key)
            if isinstance(value, str) and value:
                return value
    return None
