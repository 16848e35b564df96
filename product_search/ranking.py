"""
product_search/ranking.py
-------------------------

Weighted, per-field fuzzy ranking of catalog products against a free-text
query. Every function here is pure: the catalog is never modified and no
state is kept between calls.
"""

from typing import Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from product_search.config import FIELD_WEIGHTS, MIN_MATCH_LENGTH
from product_search.logging_utils import get_logger, log_calls
from product_search.matcher import FuzzyMatcher, RapidFuzzMatcher
from product_search.models import FieldWeight, MatchResult, MatchSpan, ProductRecord, SearchOptions

logger = get_logger("ranking")

# Floor for per-field distance so an exact match on a light field still
# ranks below an exact match on a heavy one.
EPSILON = 1e-3

_default_matcher = RapidFuzzMatcher()

WeightConfig = Union[Mapping[str, float], Sequence[FieldWeight]]


def _as_weight_map(weights: Optional[WeightConfig]) -> Mapping[str, float]:
    if weights is None:
        return FIELD_WEIGHTS
    if isinstance(weights, Mapping):
        return weights
    return {w.path: w.weight for w in weights}


def field_values(product: ProductRecord, path: str) -> Iterator[Tuple[str, str]]:
    """Yield (span label, text) pairs for a dotted field path."""
    value = product
    for part in path.split("."):
        if value is None:
            return
        value = getattr(value, part, None)

    if value is None:
        return
    if isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            if isinstance(item, str):
                yield f"{path}[{i}]", item
    elif isinstance(value, str):
        yield path, value


def score_product(
    product: ProductRecord,
    query: str,
    threshold: float,
    weights: Mapping[str, float],
    matcher: FuzzyMatcher,
) -> Optional[MatchResult]:
    """
    Relevance of one product, or None when no field matches within the
    fuzziness budget. Matched fields multiply their distances, each raised to
    its weight relative to the heaviest field, so heavier fields and extra
    matching fields both pull the aggregate distance towards 0.
    """
    max_weight = max(weights.values())
    distance = 1.0
    matched = False
    spans: List[MatchSpan] = []

    for path, weight in weights.items():
        best: Optional[Tuple[float, str, str]] = None
        for label, text in field_values(product, path):
            if len(text.strip()) < MIN_MATCH_LENGTH:
                continue
            d = matcher.score(text, query)
            if d <= threshold and (best is None or d < best[0]):
                best = (d, label, text)

        if best is None:
            continue

        d, label, text = best
        matched = True
        distance *= max(d, EPSILON) ** (weight / max_weight)
        located = matcher.locate(text, query)
        if located:
            spans.append(MatchSpan(field=label, start=located[0], end=located[1]))

    if not matched:
        return None

    relevance = min(1.0, max(0.0, 1.0 - distance))
    return MatchResult(product=product, relevance=relevance, matched_spans=spans)


@log_calls("search")
def search(
    products: List[ProductRecord],
    query: Optional[str],
    options: Optional[SearchOptions] = None,
    weights: Optional[WeightConfig] = None,
    matcher: Optional[FuzzyMatcher] = None,
) -> Union[List[ProductRecord], List[MatchResult]]:
    """
    Rank ``products`` against ``query``.

    An empty query is not a filter: the catalog is returned as given. Otherwise
    results below ``min_score`` are dropped, the rest are sorted by descending
    relevance (ties keep catalog order) and ``limit`` is applied last.
    """
    if not query or not query.strip():
        return products

    options = options or SearchOptions()
    weight_map = _as_weight_map(weights)
    matcher = matcher or _default_matcher
    needle = query.strip()

    if len(needle) < MIN_MATCH_LENGTH or not weight_map:
        return []

    results: List[MatchResult] = []
    for product in products:
        result = score_product(product, needle, options.threshold, weight_map, matcher)
        if result is not None and result.relevance >= options.min_score:
            results.append(result)

    # sorted() is stable, equal scores stay in catalog order
    results = sorted(results, key=lambda r: r.relevance, reverse=True)

    if options.limit and options.limit > 0:
        results = results[: options.limit]

    logger.debug(f"'{needle}' matched {len(results)} of {len(products)} products")
    return results


def ranked_results(
    query: Optional[str],
    products: List[ProductRecord],
    options: Optional[SearchOptions] = None,
) -> Union[List[ProductRecord], List[MatchResult]]:
    """Entry point for the listing view: same as :func:`search`."""
    return search(products, query, options)
