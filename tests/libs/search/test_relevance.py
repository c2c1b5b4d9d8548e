import pytest

from chapterkit.libs.search import FIELD_WEIGHTS, score, tokenize_query


def test_tokenize_query():
    assert tokenize_query("  The  great GATSBY the ") == ["the", "great", "gatsby"]
    assert tokenize_query("   ") == []


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_blank_query_scores_zero(query):
    assert score({"title": "The Great Gatsby"}, query) == 0


def test_title_and_content_beats_content_only():
    gatsby = score(
        {"title": "The Great Gatsby", "content": "Gatsby throws a party."},
        "Gatsby",
    )
    other = score(
        {"title": "Tender Is the Night", "content": "Unlike Gatsby, Dick Diver..."},
        "Gatsby",
    )
    assert gatsby > other > 0


def test_single_title_hit_outranks_heavy_content():
    title_only = score({"title": "Gatsby"}, "gatsby")
    content_only = score({"content": "gatsby " * 50}, "gatsby")
    assert title_only > content_only


def test_weight_order():
    def single(field):
        return score({field: "dune"}, "dune")

    assert (
        single("title")
        > single("author")
        > single("excerpt")
        > single("genre")
        > single("content")
    )
    assert FIELD_WEIGHTS["title"] == single("title")


def test_case_insensitive_and_counts_occurrences():
    expected = 3 * FIELD_WEIGHTS["excerpt"]
    assert score({"excerpt": "Dune, DUNE and dune"}, "dune") == expected


def test_unknown_fields_weigh_one_and_none_is_skipped():
    assert score({"notes": "dune", "title": None}, "dune") == 1.0


def test_repeated_query_terms_count_once():
    assert score({"title": "dune"}, "dune dune") == score({"title": "dune"}, "dune")


def test_weight_overrides():
    assert score({"title": "dune"}, "dune", weights={"title": 1}) == 1.0
    assert score({"author": "dune"}, "dune", weights={"title": 1}) == FIELD_WEIGHTS[
        "author"
    ]
