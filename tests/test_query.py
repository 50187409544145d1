from catalog_search import (
    CatalogItem,
    generate_suggestions,
    highlight_matches,
    items_in_category,
    popular_categories,
    search_catalog,
)


def _ids(items):
    return [item.id for item in items]


def test_blank_query_is_inactive_search(items, categories):
    for query in ("", "   ", "\t\n"):
        outcome = search_catalog(query, items, categories)
        assert outcome.results == ()
        assert outcome.matched_categories == ()
        assert dict(outcome.result_count_by_category) == {}
        assert outcome.suggestions == ()
        assert outcome.result_count == 0


def test_exact_match_ranks_first(items, categories):
    outcome = search_catalog("Latte", items, categories)
    assert _ids(outcome.results) == ["i1", "i2"]
    assert outcome.scored[0].score > outcome.scored[1].score
    assert [c.id for c in outcome.matched_categories] == ["c1"]
    assert dict(outcome.result_count_by_category) == {"c1": 2}
    assert outcome.suggestions == ()


def test_results_are_catalog_objects(items, categories, by_id):
    outcome = search_catalog("latte", items, categories)
    assert outcome.results[0] is by_id["i1"]


def test_typo_queries_still_find_items(items, categories):
    assert "i1" in _ids(search_catalog("lette", items, categories).results)
    assert "i3" in _ids(search_catalog("cappucino", items, categories).results)


def test_synonym_query_matches_titles_and_tags(items, categories):
    outcome = search_catalog("veg", items, categories)
    # Veggie Burger via title prefix, Chocolate Cake via its "veg" tag
    assert _ids(outcome.results) == ["i7", "i5"]
    assert [c.id for c in outcome.matched_categories] == ["c2", "c3"]
    assert dict(outcome.result_count_by_category) == {"c2": 1, "c3": 1}


def test_ties_keep_catalog_order(categories):
    catalog = [
        CatalogItem(id="a", category_id="c1", title="Tea"),
        CatalogItem(id="b", category_id="c2", title="Tea"),
    ]
    outcome = search_catalog("tea", catalog, categories)
    assert _ids(outcome.results) == ["a", "b"]
    assert outcome.scored[0].score == outcome.scored[1].score


def test_suggestions_only_when_nothing_matched(items, categories):
    outcome = search_catalog("coki", items, categories)
    assert outcome.results == ()
    assert outcome.suggestions == ("cake", "box")


def test_no_close_word_gives_no_suggestions(items, categories):
    outcome = search_catalog("zzzqqq", items, categories)
    assert outcome.results == ()
    assert outcome.suggestions == ()


def test_suggestion_cap_and_vocabulary(items, categories):
    assert generate_suggestions("coki", items, categories, max_suggestions=1) == ["cake"]
    assert generate_suggestions("coki", items, categories, max_suggestions=0) == []
    # category names are whole vocabulary entries
    assert generate_suggestions("dessertz", items, categories) == ["desserts"]
    # exact vocabulary words are not "corrections"
    assert "latte" not in generate_suggestions("latte", items, categories)


def test_empty_catalog(categories):
    outcome = search_catalog("latte", [], [])
    assert outcome.results == ()
    assert outcome.suggestions == ()
    assert popular_categories([], categories) == categories[:4]


def test_popular_categories_by_item_count(items, categories):
    assert [c.id for c in popular_categories(items, categories)] == ["c1", "c3", "c2"]
    assert [c.id for c in popular_categories(items, categories, limit=1)] == ["c1"]


def test_items_in_category(items):
    assert _ids(items_in_category(items, "c3")) == ["i6", "i7"]
    assert len(items_in_category(items, None)) == len(items)
    assert items_in_category(items, "missing") == ()


def test_highlight_matches():
    assert highlight_matches("Spicy Chicken Wrap", ["spicy", "chicken"]) == "**Spicy** **Chicken** Wrap"
    # longer terms win over their parts
    assert highlight_matches("Fried rice bowl", ["rice", "fried rice"]) == "**Fried rice** bowl"
    assert highlight_matches("Tea", ["tea"], marker="_") == "_Tea_"
    assert highlight_matches("", ["tea"]) == ""
    assert highlight_matches("Tea", []) == "Tea"
