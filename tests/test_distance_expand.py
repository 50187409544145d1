from catalog_search.distance import levenshtein, max_category_distance, max_title_distance
from catalog_search.expand import expand_query_terms, expand_synonyms, tokenize_query


def test_levenshtein_known_values():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("abc", "abc") == 0
    assert levenshtein("", "abc") == 3
    assert levenshtein("abc", "") == 3
    assert levenshtein("", "") == 0


def test_levenshtein_single_edits_and_symmetry():
    assert levenshtein("latte", "lette") == 1  # substitution
    assert levenshtein("cappucino", "cappuccino") == 1  # insertion
    assert levenshtein("wraps", "wrap") == 1  # deletion
    for a, b in [("cake", "coki"), ("burger", "burgr"), ("tea", "chai")]:
        assert levenshtein(a, b) == levenshtein(b, a) >= 0


def test_distance_thresholds_follow_term_length():
    assert max_title_distance("tea") == 1
    assert max_title_distance("cake") == 1
    assert max_title_distance("latte") == 2
    assert max_title_distance("biryani") == 2
    assert max_title_distance("cappucino") == 3
    assert max_category_distance("cake") == 1
    assert max_category_distance("snack") == 2


def test_expand_head_term_returns_whole_group():
    terms = expand_synonyms("veg")
    assert terms[0] == "veg"
    assert {"veg", "vegetarian", "veggie", "plant-based"} <= set(terms)


def test_expand_member_includes_head_term():
    assert set(expand_synonyms("vegetarian")) == {"veg", "vegetarian", "veggie", "plant-based"}
    assert "non-veg" in expand_synonyms("chicken")


def test_expand_is_case_insensitive_and_exact():
    assert set(expand_synonyms("Pizza")) == {"pizza", "pie"}
    assert expand_synonyms("xyz-unknown") == ["xyz-unknown"]
    # no fuzzy synonym lookup
    assert expand_synonyms("piza") == ["piza"]


def test_expand_with_custom_table():
    groups = {"chai": ("tea", "masala tea")}
    assert expand_synonyms("tea", groups) == ["tea", "chai", "masala tea"]


def test_tokenize_and_flatten():
    assert tokenize_query("  Cold   SPICY ") == ["cold", "spicy"]
    assert tokenize_query("") == []
    terms = expand_query_terms(["pizza", "pie"])
    # duplicates across raw terms are kept
    assert terms.count("pie") == 2
