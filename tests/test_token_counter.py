"""Tests for prompt_chunker.token_counter."""

import pytest

from prompt_chunker.token_counter import (
    calculate_cost,
    compare_token_counts,
    count_tokens_exact,
    count_words,
    estimate_from_counts,
    estimate_tokens,
    estimate_tokens_batch,
)

CLAUDE = "anthropic/claude-sonnet-4"
GPT = "openai/gpt-4.1"
FREE = "google/gemma-3n-e4b-it:free"


class TestEstimateTokens:
    def test_empty_string(self):
        estimate = estimate_tokens("")
        assert estimate.tokens == 0
        assert estimate.characters == 0
        assert estimate.words == 0
        assert estimate.estimated_cost == 0.0

    def test_hello_world(self):
        estimate = estimate_tokens("Hello world!")
        assert estimate.characters == 12
        assert estimate.words == 2
        assert estimate.tokens == 3

    def test_default_model_is_reported(self):
        assert estimate_tokens("Hello").model == "tencent/hunyuan-a13b-instruct:free"

    def test_word_count_is_a_floor(self):
        """Many one-letter words must not be under-counted by the char ratio."""
        estimate = estimate_tokens("a b c d e f")
        assert estimate.characters == 11
        assert estimate.tokens == 6

    def test_long_word_uses_character_ratio(self):
        assert estimate_tokens("x" * 100).tokens == 25

    def test_whitespace_counts_characters_not_words(self):
        estimate = estimate_tokens("   ")
        assert estimate.words == 0
        assert estimate.tokens == 1

    def test_positive_for_any_non_whitespace(self):
        for text in ["a", ".", "Hi", "x" * 3]:
            assert estimate_tokens(text).tokens >= 1

    def test_monotonic_in_prefix_length(self, sample_text):
        previous = 0
        for end in range(len(sample_text) + 1):
            tokens = estimate_tokens(sample_text[:end]).tokens
            assert tokens >= previous
            previous = tokens

    def test_claude_family_ratio(self):
        text = "This is a test sentence with multiple words."
        assert len(text) == 44
        assert estimate_tokens(text, CLAUDE).tokens == 12
        assert estimate_tokens(text, GPT).tokens == 11

    def test_model_families_stay_close(self):
        text = "This is a test sentence with multiple words."
        claude = estimate_tokens(text, CLAUDE).tokens
        gpt = estimate_tokens(text, GPT).tokens
        assert abs(claude - gpt) < 5

    def test_llama_family_ratio(self):
        assert estimate_tokens("x" * 35, "meta-llama/llama-3-8b").tokens == 10

    def test_unknown_model_does_not_fail(self):
        estimate = estimate_tokens("Some text here", "acme/unknown-model")
        assert estimate.model == "acme/unknown-model"
        assert estimate.tokens > 0
        assert estimate.estimated_cost == 0.0

    def test_paid_model_cost(self):
        estimate = estimate_tokens("Test text for cost calculation", CLAUDE)
        assert estimate.tokens == 8
        assert estimate.estimated_cost == pytest.approx(8 * 0.000003)

    def test_free_model_costs_nothing(self):
        assert estimate_tokens("Some text to price", FREE).estimated_cost == 0.0


class TestEstimateFromCounts:
    def test_matches_estimate_tokens(self, sample_text):
        expected = estimate_tokens(sample_text, CLAUDE).tokens
        actual = estimate_from_counts(len(sample_text), count_words(sample_text), CLAUDE)
        assert actual == expected

    def test_zero_characters(self):
        assert estimate_from_counts(0, 0) == 0

    def test_explicit_ratio(self):
        assert estimate_from_counts(10, 1, ratio=2.0) == 5


class TestBatchAndCost:
    def test_batch_preserves_order(self):
        texts = ["Hello", "", "x" * 40]
        estimates = estimate_tokens_batch(texts)
        assert [e.tokens for e in estimates] == [2, 0, 10]

    def test_batch_empty_list(self):
        assert estimate_tokens_batch([]) == []

    def test_calculate_cost_paid(self):
        text = "Test text for cost calculation"
        assert calculate_cost(text, CLAUDE) == estimate_tokens(text, CLAUDE).estimated_cost
        assert calculate_cost(text, CLAUDE) > 0

    def test_calculate_cost_free(self):
        assert calculate_cost("Test text", FREE) == 0.0


class TestReferenceCount:
    def test_empty_string(self, whitespace_encoder):
        assert count_tokens_exact("") == 0

    def test_uses_encoder(self, whitespace_encoder):
        assert count_tokens_exact("one two three") == 3

    def test_compare_counts(self, whitespace_encoder):
        comparison = compare_token_counts("Hello world!")
        assert comparison.estimated.tokens == 3
        assert comparison.actual.tokens == 2
        assert comparison.difference == 1
        assert comparison.accuracy == pytest.approx(0.5)

    def test_compare_exact_match(self, whitespace_encoder):
        comparison = compare_token_counts("a b c d e f")
        assert comparison.difference == 0
        assert comparison.accuracy == 1.0

    def test_compare_empty_text(self, whitespace_encoder):
        comparison = compare_token_counts("")
        assert comparison.difference == 0
        assert comparison.accuracy == 1.0

    def test_compare_accuracy_clamped(self, whitespace_encoder):
        # one word, 25 estimated tokens
        comparison = compare_token_counts("x" * 100)
        assert comparison.actual.tokens == 1
        assert comparison.accuracy == 0.0

    def test_compare_prices_actual_count(self, whitespace_encoder):
        comparison = compare_token_counts("one two three", CLAUDE)
        assert comparison.actual.estimated_cost == pytest.approx(3 * 0.000003)
