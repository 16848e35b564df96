from typing import Optional, Protocol, Tuple

from rapidfuzz import fuzz

from product_search.config import MIN_MATCH_LENGTH


class FuzzyMatcher(Protocol):
    """Approximate string comparison used by the ranking engine."""

    def score(self, text: str, query: str) -> float:
        """Distance in [0, 1]; 0 is an exact match."""
        ...

    def locate(self, text: str, query: str) -> Optional[Tuple[int, int]]:
        """Half-open range of ``text`` that best matches ``query``."""
        ...


class RapidFuzzMatcher:
    """
    Distance built from rapidfuzz similarities:
    - partial_ratio finds the query inside longer text, tolerating typos
    - token_set_ratio tolerates words typed out of order
    - ratio rewards fields that match as a whole, so an exact title beats a
      title that merely contains the query
    """

    def __init__(self, completeness_weight: float = 0.15, min_match_length: int = MIN_MATCH_LENGTH):
        self.completeness_weight = completeness_weight
        self.min_match_length = min_match_length

    def score(self, text: str, query: str) -> float:
        t = text.lower()
        q = query.lower()
        if not t or not q:
            return 1.0

        approximate = max(fuzz.partial_ratio(q, t), fuzz.token_set_ratio(q, t)) / 100
        complete = fuzz.ratio(q, t) / 100
        similarity = (1 - self.completeness_weight) * approximate + self.completeness_weight * complete
        return min(1.0, max(0.0, 1.0 - similarity))

    def locate(self, text: str, query: str) -> Optional[Tuple[int, int]]:
        alignment = fuzz.partial_ratio_alignment(query.lower(), text.lower())
        if alignment is None:
            return None
        start, end = alignment.dest_start, alignment.dest_end
        if end - start < self.min_match_length:
            return None
        return start, end
