"""Tests for text rendering."""

from pievote.view import filter_comparisons, render_bar, render_comparison, render_list
from tests.conftest import ids, make_comparison


class TestFilter:
    def setup_method(self):
        self.comparisons = [
            make_comparison("1", "Classic", "Frangipane"),
            make_comparison("2", "Crumble", "Lattice"),
            make_comparison("3", "Puff Pastry", "CLASSIC Deep-Filled"),
        ]

    def test_matches_either_side_case_insensitively(self):
        assert ids(filter_comparisons(self.comparisons, "classic")) == ["1", "3"]

    def test_matches_substring(self):
        assert ids(filter_comparisons(self.comparisons, "latt")) == ["2"]

    def test_empty_query_keeps_all(self):
        assert ids(filter_comparisons(self.comparisons, "")) == ["1", "2", "3"]

    def test_no_match(self):
        assert filter_comparisons(self.comparisons, "stollen") == []


class TestRender:
    def test_bar_even_split(self):
        assert render_bar(50, width=10) == "[#####-----]"

    def test_bar_extremes(self):
        assert render_bar(0, width=4) == "[----]"
        assert render_bar(100, width=4) == "[####]"

    def test_comparison_card(self):
        text = render_comparison(make_comparison("9", votes_a=2, votes_b=1))
        assert "Classic  vs  Frangipane" in text
        assert "id 9" in text
        assert "3 vote(s)" in text
        assert "A: 2 (67%)" in text
        assert "B: 1 (33%)" in text

    def test_card_without_votes(self):
        text = render_comparison(make_comparison("9"))
        assert "0 vote(s)" in text
        assert "A: 0 (50%)" in text
        assert "B: 0 (50%)" in text

    def test_list_shows_saving_indicator(self):
        text = render_list([make_comparison("1")], saving=True)
        assert text.startswith("Saving…")

    def test_list_shows_loading_indicator(self):
        text = render_list([], loading=True)
        assert text == "Loading sheet…"

    def test_empty_list(self):
        assert render_list([]) == "No comparisons yet."

    def test_filtered_out(self):
        assert render_list([make_comparison("1")], query="stollen") == "No comparisons match 'stollen'."

    def test_list_applies_filter(self):
        text = render_list(
            [make_comparison("1"), make_comparison("2", "Crumble", "Lattice")],
            query="crumble",
        )
        assert "Crumble" in text
        assert "Frangipane" not in text
