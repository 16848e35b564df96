import pytest
from pydantic import ValidationError

from product_search.models import Brand, FieldWeight, ProductRecord, SearchOptions
from product_search.ranking import ranked_results, search


def test_asus_rog_ranks_first_and_excludes_the_rest(small_catalog):
    results = search(small_catalog, "asus rog")
    assert len(results) == 1
    assert results[0].product.title == "ASUS ROG Strix GPU"
    assert results[0].relevance > 0.7


def test_matched_span_points_at_title(small_catalog):
    result = search(small_catalog, "asus rog")[0]
    span = result.matched_spans[0]
    assert span.field == "title"
    assert (span.start, span.end) == (0, 8)


def test_empty_query_passes_products_through(small_catalog):
    assert search(small_catalog, "") is small_catalog
    assert search(small_catalog, "   ", SearchOptions(min_score=0.9)) is small_catalog
    assert search(small_catalog, None) is small_catalog


def test_single_character_query_matches_nothing(small_catalog):
    assert search(small_catalog, "a") == []


def test_empty_catalog():
    assert search([], "gpu") == []


def test_scores_within_bounds(pc_catalog):
    options = SearchOptions(min_score=0.3)
    results = search(pc_catalog, "gaming", options)
    assert results
    for r in results:
        assert options.min_score <= r.relevance <= 1.0


def test_scores_sorted_descending(pc_catalog):
    results = search(pc_catalog, "gaming")
    scores = [r.relevance for r in results]
    assert scores == sorted(scores, reverse=True)


def test_higher_min_score_never_adds_results(pc_catalog):
    counts = [len(search(pc_catalog, "gaming", SearchOptions(min_score=s))) for s in (0.0, 0.3, 0.6, 0.9)]
    assert counts == sorted(counts, reverse=True)


def test_limit_is_prefix_of_unlimited_result(pc_catalog):
    unlimited = search(pc_catalog, "gaming")
    limited = search(pc_catalog, "gaming", SearchOptions(limit=2))
    assert len(limited) <= 2
    assert [r.product.id for r in limited] == [r.product.id for r in unlimited[:2]]


def test_non_positive_limit_is_ignored(pc_catalog):
    assert len(search(pc_catalog, "gaming", SearchOptions(limit=0))) == len(search(pc_catalog, "gaming"))


def test_typo_still_finds_product(pc_catalog):
    results = search(pc_catalog, "logitec mouse")
    assert results[0].product.id == 3


def test_exact_title_beats_exact_tag():
    products = [
        ProductRecord(id="tagged", title="Office Chair", tags=["mouse"]),
        ProductRecord(id="titled", title="Mouse"),
    ]
    results = search(products, "mouse")
    assert [r.product.id for r in results] == ["titled", "tagged"]


def test_full_field_match_beats_substring_match():
    products = [
        ProductRecord(id="long", title="Mouse Pad Extended"),
        ProductRecord(id="exact", title="Mouse"),
    ]
    results = search(products, "mouse")
    assert results[0].product.id == "exact"
    assert results[0].relevance > results[1].relevance


def test_ties_keep_catalog_order():
    products = [ProductRecord(id=i, title="Gaming Mouse") for i in range(5)]
    assert [r.product.id for r in search(products, "gaming mouse")] == [0, 1, 2, 3, 4]


def test_search_is_deterministic(pc_catalog):
    first = search(pc_catalog, "ssd")
    second = search(pc_catalog, "ssd")
    assert [(r.product.id, r.relevance) for r in first] == [(r.product.id, r.relevance) for r in second]


def test_matches_nested_spec_fields(pc_catalog):
    results = search(pc_catalog, "7800X3D")
    assert results[0].product.id == 6
    assert any(span.field == "specifications.cpu" for span in results[0].matched_spans)


def test_custom_weights_restrict_fields():
    products = [
        ProductRecord(id=1, title="Desk Lamp", brand=Brand(name="Razer")),
        ProductRecord(id=2, title="Razer Viper"),
    ]
    results = search(products, "razer", weights=[FieldWeight(path="title", weight=1.0)])
    assert [r.product.id for r in results] == [2]


def test_pluggable_matcher():
    class ExactMatcher:
        def score(self, text, query):
            return 0.0 if text.lower() == query.lower() else 1.0

        def locate(self, text, query):
            return (0, len(text)) if text.lower() == query.lower() else None

    products = [ProductRecord(id=1, title="gpu"), ProductRecord(id=2, title="gpu cooler")]
    results = search(products, "GPU", matcher=ExactMatcher())
    assert [r.product.id for r in results] == [1]


def test_ranked_results_argument_order(small_catalog):
    assert ranked_results("asus rog", small_catalog)[0].product.id == 1


def test_input_catalog_is_not_modified(small_catalog):
    before = [p.model_dump() for p in small_catalog]
    search(small_catalog, "gaming laptop")
    assert [p.model_dump() for p in small_catalog] == before


def test_invalid_options_rejected():
    with pytest.raises(ValidationError):
        SearchOptions(threshold=1.5)
    with pytest.raises(ValidationError):
        SearchOptions(min_score=-0.1)
