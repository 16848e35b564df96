import re
from collections import Counter
from typing import List, Optional

from product_search.config import MIN_MATCH_LENGTH
from product_search.logging_utils import get_logger
from product_search.models import ProductRecord

logger = get_logger("suggestions")

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def suggest(products: List[ProductRecord], partial_query: Optional[str], max_suggestions: int = 5) -> List[str]:
    """
    Titles, brand names and category names containing the partial query.

    Values are returned verbatim and deduplicated case-insensitively. Values
    starting with the query come first, shorter values before longer ones,
    and only then is the list cut to ``max_suggestions``.
    """
    if not partial_query or len(partial_query.strip()) < MIN_MATCH_LENGTH:
        return []

    query = partial_query.strip().lower()
    seen = set()
    matches: List[str] = []

    for product in products:
        for candidate in (product.title, product.brand_name, product.category_name):
            if not candidate or query not in candidate.lower():
                continue
            key = candidate.lower()
            if key in seen:
                continue
            seen.add(key)
            matches.append(candidate)

    matches.sort(key=lambda s: (not s.lower().startswith(query), len(s)))
    return matches[:max(max_suggestions, 0)]


def _title_words(title: str) -> List[str]:
    words = []
    for word in title.split():
        if len(word) <= 3:
            continue
        normalized = _NON_ALNUM.sub("", word.lower())
        if len(normalized) > 3:
            words.append(normalized)
    return words


def popular_terms(products: List[ProductRecord], limit: int = 10) -> List[str]:
    """Most frequent brand names, category names and title words."""
    frequency: Counter = Counter()

    for product in products:
        if product.brand_name:
            frequency[product.brand_name] += 1
        if product.category_name:
            frequency[product.category_name] += 1
        if product.title:
            frequency.update(_title_words(product.title))

    # most_common keeps first-seen order among equal counts
    terms = [term for term, _ in frequency.most_common(max(limit, 0))]
    logger.debug(f"{len(frequency)} candidate terms, returning {len(terms)}")
    return terms
