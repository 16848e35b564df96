import re
from typing import Optional


def highlight_matches(text: Optional[str], query: Optional[str], tag: str = "mark") -> Optional[str]:
    """
    Wrap every case-insensitive occurrence of ``query`` in ``text`` with
    ``<mark>`` tags. The query is matched literally.
    """
    if not text or not query:
        return text

    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)
    return pattern.sub(rf"<{tag}>\1</{tag}>", text)
