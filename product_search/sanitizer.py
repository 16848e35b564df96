from typing import Optional

from product_search.config import MAX_QUERY_LENGTH


def sanitize(raw: Optional[str], max_length: int = MAX_QUERY_LENGTH) -> str:
    """
    Bound a query before it is stored in history or put into a URL.
    Removes ``<`` and ``>`` so the value is safe to interpolate into markup,
    trims surrounding whitespace and truncates to ``max_length``.
    """
    if not raw:
        return ""

    text = str(raw).replace("<", "").replace(">", "").strip()
    # Truncation can expose trailing whitespace again
    return text[:max_length].rstrip()
