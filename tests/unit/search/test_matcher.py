"""Unit tests for the fuzzy matcher and ranking."""

import pytest

from bookmark_search.config import MatchConfig
from bookmark_search.domain.model import Bookmark
from bookmark_search.search.matcher import FieldMatch, FuzzyMatcher, MatchResult, merge_ranges, rank
from bookmark_search.search.weights import REFERENCE_WEIGHTS, FieldWeightScheme


RUST = Bookmark(id="1", title="Rust Guide", url="https://example.org/rust")
GO = Bookmark(id="2", title="Go Guide", url="https://example.org/go")


@pytest.mark.unit
class TestCompileQuery:
    def test_lowercases_unless_case_sensitive(self):
        assert FuzzyMatcher().compile_query("Rust")[0].text == "rust"
        assert FuzzyMatcher(MatchConfig(case_sensitive=True)).compile_query("Rust")[0].text == "Rust"

    def test_truncates_to_max_pattern_length(self):
        patterns = FuzzyMatcher(MatchConfig(max_pattern_length=4)).compile_query("bookmarks")
        assert [pattern.text for pattern in patterns] == ["book"]

    def test_literal_query_keeps_whitespace(self):
        patterns = FuzzyMatcher().compile_query("rust guide")
        assert [pattern.text for pattern in patterns] == ["rust guide"]

    def test_tokenize_splits_and_truncates_each_token(self):
        matcher = FuzzyMatcher(MatchConfig(tokenize=True, max_pattern_length=3))
        assert [pattern.text for pattern in matcher.compile_query("  Rust  guide ")] == ["rus", "gui"]

    def test_empty_query_has_no_patterns(self):
        assert FuzzyMatcher().compile_query("") == []
        assert FuzzyMatcher(MatchConfig(tokenize=True)).compile_query("   ") == []


@pytest.mark.unit
class TestScoreText:
    def test_case_insensitive_by_default(self):
        matcher = FuzzyMatcher()
        assert matcher.score_text("RUST GUIDE", matcher.compile_query("rust guide")) == 0.0

    def test_case_sensitive_penalizes_case_differences(self):
        insensitive = FuzzyMatcher()
        sensitive = FuzzyMatcher(MatchConfig(case_sensitive=True))
        assert sensitive.score_text("RUST", sensitive.compile_query("rust")) > insensitive.score_text(
            "RUST", insensitive.compile_query("rust")
        )

    def test_tokens_are_averaged(self):
        matcher = FuzzyMatcher(MatchConfig(tokenize=True))
        # "rust" at 0 scores the 0.001 floor, "guide" drifts 5 characters for 0.05
        assert matcher.score_text("Rust Guide", matcher.compile_query("guide rust")) == pytest.approx(0.0255)

    def test_tokenizing_tolerates_reordered_words(self):
        literal = FuzzyMatcher()
        tokenized = FuzzyMatcher(MatchConfig(tokenize=True))
        query = "guide rust"
        assert tokenized.score_text("Rust Guide", tokenized.compile_query(query)) < literal.score_text(
            "Rust Guide", literal.compile_query(query)
        )

    def test_no_patterns_scores_worst(self):
        assert FuzzyMatcher().score_text("", []) == 1.0
        assert FuzzyMatcher().score_text("anything", []) == 1.0


@pytest.mark.unit
class TestRank:
    def test_reference_scenario(self):
        results = FuzzyMatcher(weights=REFERENCE_WEIGHTS).rank("Rust Guide", [RUST, GO])

        assert [result.index for result in results] == [0, 1]
        assert results[0].score < 0.5
        assert results[1].score >= 0.5
        assert results[0].field_scores[0] == 0.0

    def test_returns_a_result_for_every_record(self):
        records = [RUST, GO, Bookmark(id="3", title="", url="")]
        assert len(FuzzyMatcher().rank("zzzz", records)) == 3

    def test_best_match_first(self):
        results = FuzzyMatcher().rank("go guide", [RUST, GO])
        assert results[0].index == 1

    def test_ties_keep_insertion_order(self):
        first = Bookmark(id="a", title="Rust Guide", url="https://one.example")
        second = Bookmark(id="b", title="Rust Guide", url="https://two.example")
        unrelated = Bookmark(id="c", title="zzzz", url="zzzz")

        results = FuzzyMatcher().rank("rust guide", [unrelated, first, second])

        assert [result.index for result in results] == [1, 2, 0]
        assert results[0].score == results[1].score

    def test_empty_query_scores_every_record_worst(self):
        records = [RUST, GO, Bookmark(id="3", title="", url="")]
        results = FuzzyMatcher().rank("", records)

        assert [result.index for result in results] == [0, 1, 2]
        assert all(result.score == 1.0 for result in results)

    def test_weights_default_to_record_fields(self):
        assert FuzzyMatcher().scheme_for(RUST) == REFERENCE_WEIGHTS

    def test_custom_weights_ignore_zero_weight_fields(self):
        title_only = FieldWeightScheme.from_pairs((("title", 1.0), ("url", 0.0)))
        results = FuzzyMatcher(weights=title_only).rank("Rust Guide", [RUST])
        assert results[0].score == 0.0

    def test_weights_are_relative(self):
        scaled = FieldWeightScheme.from_pairs((("title", 6.0), ("url", 4.0)))
        reference = FuzzyMatcher(weights=REFERENCE_WEIGHTS).rank("Rust Guide", [RUST, GO])
        relative = FuzzyMatcher(weights=scaled).rank("Rust Guide", [RUST, GO])
        assert [r.score for r in relative] == pytest.approx([r.score for r in reference])

    def test_does_not_mutate_records(self):
        records = [GO, RUST]
        FuzzyMatcher().rank("rust", records)
        assert records == [GO, RUST]


@pytest.mark.unit
def test_module_level_rank_matches_matcher():
    config = MatchConfig(tokenize=True)
    assert rank("rust", config, REFERENCE_WEIGHTS, [RUST, GO]) == FuzzyMatcher(config, REFERENCE_WEIGHTS).rank(
        "rust", [RUST, GO]
    )
    assert isinstance(rank("", config, None, [RUST])[0], MatchResult)


@pytest.mark.unit
class TestMatchRanges:
    def test_exact_field_covers_whole_text(self):
        (result, _) = FuzzyMatcher(weights=REFERENCE_WEIGHTS).rank("Rust Guide", [RUST, GO])
        assert result.field_matches[0] == FieldMatch("title", 0.0, ((0, 9),))
        assert result.field_matches[1].field_name == "url"

    def test_substring_range(self):
        matcher = FuzzyMatcher()
        score, ranges = matcher.match_text("Go Rust", matcher.compile_query("rust"))
        assert score == pytest.approx(0.03)
        assert ranges == ((3, 6),)

    def test_token_ranges_are_merged(self):
        matcher = FuzzyMatcher(MatchConfig(tokenize=True))
        score, ranges = matcher.match_text("Rust Guide", matcher.compile_query("rust guide"))
        assert score == pytest.approx(0.0255)
        assert ranges == ((0, 3), (5, 9))

    def test_no_match_has_no_ranges(self):
        matcher = FuzzyMatcher()
        assert matcher.match_text("zzzz", matcher.compile_query("rust")) == (1.0, ())
        assert matcher.match_text("anything", []) == (1.0, ())


@pytest.mark.unit
def test_merge_ranges():
    assert merge_ranges([(5, 9), (0, 3), (1, 1)]) == ((0, 3), (5, 9))
    assert merge_ranges([(0, 1), (2, 3)]) == ((0, 3),)
    assert merge_ranges([]) == ()
