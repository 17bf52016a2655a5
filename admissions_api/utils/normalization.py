"""Input normalization helpers."""

from typing import Optional


def normalize_search_text(value: Optional[str]) -> Optional[str]:
    """Trim a free-text search term; blank input means no filter."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def escape_like_string(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )
