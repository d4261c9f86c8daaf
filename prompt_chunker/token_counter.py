"""
Token Estimator for the Prompt Chunker

Approximates how many tokens a text will consume without running a model
tokenizer. The estimate blends a character-based count (characters divided
by the model family's characters-per-token ratio) with the word count, so
runs of very short words are not under-counted:

    tokens = max(ceil(characters / chars_per_token), words)

Both terms only grow when characters are appended, which keeps the estimate
monotonic in text length. The chunker relies on that to accumulate budgets
incrementally.

For calibration, ``count_tokens_exact`` counts with tiktoken's cl100k_base
encoding, and ``compare_token_counts`` reports how far the heuristic is off.

Usage:
    from prompt_chunker.token_counter import estimate_tokens, compare_token_counts

    estimate = estimate_tokens("Hello world!", "anthropic/claude-sonnet-4")
    print(estimate.tokens, estimate.estimated_cost)
"""

import math
from typing import Optional

import tiktoken

from .catalog import chars_per_token, get_model_config, resolve_model
from .models import TokenComparison, TokenEstimate

# Reference encoder - initialized once, reused across calls.
_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    """Get or initialize the tiktoken encoder (singleton)."""
    global _encoder
    if _encoder is None:
        _encoder = tiktoken.get_encoding("cl100k_base")
    return _encoder


def count_words(text: str) -> int:
    """Number of whitespace-separated words."""
    return len(text.split())


def estimate_from_counts(
    characters: int,
    words: int,
    model: Optional[str] = None,
    *,
    ratio: Optional[float] = None,
) -> int:
    """
    Estimate tokens from pre-computed character and word counts.

    Args:
        characters: Number of characters in the text.
        words: Number of whitespace-separated words in the text.
        model: Model id selecting the characters-per-token ratio.
        ratio: Characters-per-token ratio to use instead of looking up ``model``.

    Returns:
        Estimated token count (0 for empty text).
    """
    if characters <= 0:
        return 0
    if ratio is None:
        ratio = chars_per_token(model)
    return max(math.ceil(characters / ratio), words)


def estimate_tokens(text: str, model: Optional[str] = None) -> TokenEstimate:
    """
    Estimate token count and cost of a text for a model.

    Args:
        text: The text to size. Empty text costs nothing.
        model: Model id; defaults to the configured default model.

    Returns:
        TokenEstimate with tokens, characters, words and estimated cost.
        Models without a price entry are treated as free.
    """
    model = resolve_model(model)
    characters = len(text) if text else 0
    words = count_words(text) if text else 0
    tokens = estimate_from_counts(characters, words, model)
    config = get_model_config(model)
    return TokenEstimate(
        model=model,
        tokens=tokens,
        characters=characters,
        words=words,
        estimated_cost=tokens * config.cost_per_token,
    )


def estimate_tokens_batch(texts: list[str], model: Optional[str] = None) -> list[TokenEstimate]:
    """Estimate a list of texts, one TokenEstimate per input text."""
    return [estimate_tokens(text, model) for text in texts]


def calculate_cost(text: str, model: Optional[str] = None) -> float:
    """Approximate cost of sending ``text`` to ``model``; 0.0 when free or unknown."""
    return estimate_tokens(text, model).estimated_cost


def count_tokens_exact(text: str) -> int:
    """
    Count tokens with the cl100k_base reference encoding.

    Args:
        text: The text to tokenize.

    Returns:
        Number of tokens.
    """
    if not text:
        return 0
    return len(_get_encoder().encode(text))


def compare_token_counts(text: str, model: Optional[str] = None) -> TokenComparison:
    """
    Compare the heuristic estimate against the reference tokenizer.

    Accuracy is ``1 - difference / actual`` clamped at 0; two zero counts
    are a perfect match.
    """
    estimated = estimate_tokens(text, model)
    actual_tokens = count_tokens_exact(text)
    config = get_model_config(estimated.model)
    actual = estimated.model_copy(
        update={
            "tokens": actual_tokens,
            "estimated_cost": actual_tokens * config.cost_per_token,
        }
    )
    difference = abs(actual_tokens - estimated.tokens)
    if actual_tokens == 0:
        accuracy = 1.0 if estimated.tokens == 0 else 0.0
    else:
        accuracy = max(0.0, 1 - difference / actual_tokens)
    return TokenComparison(
        estimated=estimated,
        actual=actual,
        difference=difference,
        accuracy=accuracy,
    )
