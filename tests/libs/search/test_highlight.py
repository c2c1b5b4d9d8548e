import pytest

from chapterkit.libs.search import extract_snippets, highlight


def test_highlight_wraps_every_occurrence_preserving_case():
    assert (
        highlight("Dune and dune", "DUNE")
        == "<mark>Dune</mark> and <mark>dune</mark>"
    )


def test_highlight_multiple_terms():
    assert (
        highlight("The Great Gatsby", "great gatsby")
        == "The <mark>Great</mark> <mark>Gatsby</mark>"
    )


def test_highlight_blank_query_returns_text_unchanged():
    assert highlight("The Great Gatsby", "  ") == "The Great Gatsby"
    assert highlight("", "gatsby") == ""


def test_highlight_overlapping_terms_do_not_nest():
    out = highlight("Harry Potter", "har harry")
    assert out == "<mark>Harry</mark> Potter"
    assert "<mark><mark>" not in out


def test_highlight_term_inside_marker_text_is_not_rewrapped():
    assert highlight("mark my words", "mark") == "<mark>mark</mark> my words"


def test_highlight_escapes_regex_characters():
    assert (
        highlight("C++ (2nd ed.)", "c++ (2nd")
        == "<mark>C++</mark> <mark>(2nd</mark> ed.)"
    )


def test_highlight_custom_markers():
    assert highlight("Dune", "dune", open_tag="[", close_tag="]") == "[Dune]"


def test_snippet_short_text_round_trip():
    text = "A short excerpt."
    assert extract_snippets(text, "excerpt", 160) == [text]
    assert extract_snippets(text, "", 160) == [text]


def test_snippet_centres_on_first_match():
    text = "a" * 100 + " Gatsby " + "b" * 100
    (snippet,) = extract_snippets(text, "gatsby", 40)

    assert snippet.startswith("...")
    assert snippet.endswith("...")
    assert "Gatsby" in snippet
    assert len(snippet) == 40 + 6


def test_snippet_without_match_starts_at_beginning():
    text = "x" * 50
    assert extract_snippets(text, "nothing", 10) == ["x" * 10 + "..."]


def test_snippet_match_near_end_keeps_full_window():
    text = "y" * 100 + "end"
    (snippet,) = extract_snippets(text, "end", 20)

    assert snippet == "..." + text[-20:]


def test_snippet_match_at_start():
    text = "Dune " + "z" * 100
    (snippet,) = extract_snippets(text, "dune", 20)

    assert snippet == text[:20] + "..."


def test_snippet_is_deterministic():
    text = "lorem ipsum " * 30 + "dune" + " dolor sit" * 30
    assert extract_snippets(text, "dune", 50) == extract_snippets(text, "dune", 50)


def test_snippet_rejects_non_positive_length():
    with pytest.raises(ValueError):
        extract_snippets("text", "t", 0)


def test_snippets_one_window_per_distant_match_group():
    text = "a" * 100 + "dune" + "b" * 200 + "spice" + "c" * 100

    first, second = extract_snippets(text, "dune spice", 40, max_snippets=2)

    assert "dune" in first and "spice" not in first
    assert "spice" in second
    assert first.startswith("...") and second.endswith("...")
    assert extract_snippets(text, "dune spice", 40) == [first]


def test_snippets_nearby_matches_share_a_window():
    text = "x" * 100 + "dune and spice" + "y" * 100

    assert len(extract_snippets(text, "dune spice", 40, max_snippets=3)) == 1


def test_snippet_rejects_non_positive_count():
    with pytest.raises(ValueError):
        extract_snippets("a" * 50, "a", 10, max_snippets=0)
