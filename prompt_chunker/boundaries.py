"""
Unit Boundaries for the Chunker

Splits text into the atomic units the chunker accumulates (sentences,
words or single characters) and answers size questions about any run of
consecutive units in constant time.

All units are (start, end) spans into the original text. A chunk is always
``text[start:end]`` of its first and last unit, trimmed of whitespace.
"""

import re
from itertools import accumulate

from .models import CHARACTER, SENTENCE, WORD
from .sentence_splitter import sentence_spans

_WORD_PATTERN = re.compile(r"\S+")


def word_spans(text: str) -> list[tuple[int, int]]:
    """Spans of maximal non-whitespace runs."""
    return [match.span() for match in _WORD_PATTERN.finditer(text)]


def character_spans(text: str) -> list[tuple[int, int]]:
    """One span per character, whitespace included."""
    return [(i, i + 1) for i in range(len(text))]


def split_units(text: str, unit: str) -> list[tuple[int, int]]:
    """
    Split text into unit spans.

    Args:
        text: Input text.
        unit: One of "sentence", "word" or "character".

    Returns:
        Spans in document order.
    """
    if unit == SENTENCE:
        return sentence_spans(text)
    if unit == WORD:
        return word_spans(text)
    if unit == CHARACTER:
        return character_spans(text)
    raise ValueError(f"Unknown unit: {unit!r}")


class TextIndex:
    """
    Prefix tables over a text for O(1) trimmed-span measurements.

    ``measure(start, end)`` returns the character and word counts of
    ``text[start:end].strip()``, matching ``len(s)`` and ``len(s.split())``.
    """

    def __init__(self, text: str):
        self.text = text
        n = len(text)
        is_space = [ch.isspace() for ch in text]

        # First non-whitespace offset at or after i (n if none)
        next_solid = [n] * (n + 1)
        for i in range(n - 1, -1, -1):
            next_solid[i] = next_solid[i + 1] if is_space[i] else i
        self._next_solid = next_solid

        # One past the last non-whitespace offset before i (0 if none)
        prev_solid_end = [0] * (n + 1)
        for i in range(1, n + 1):
            prev_solid_end[i] = prev_solid_end[i - 1] if is_space[i - 1] else i
        self._prev_solid_end = prev_solid_end

        word_starts = [
            not is_space[i] and (i == 0 or is_space[i - 1])
            for i in range(n)
        ]
        self._is_word_start = word_starts
        self._word_starts = [0, *accumulate(int(flag) for flag in word_starts)]

    def trim(self, start: int, end: int) -> tuple[int, int]:
        """Offsets of ``text[start:end]`` without surrounding whitespace."""
        trimmed_start = self._next_solid[start]
        trimmed_end = self._prev_solid_end[end]
        if trimmed_start >= trimmed_end:
            return start, start
        return trimmed_start, trimmed_end

    def measure(self, start: int, end: int) -> tuple[int, int]:
        """Characters and words of the trimmed span."""
        start, end = self.trim(start, end)
        if start == end:
            return 0, 0
        words = self._word_starts[end] - self._word_starts[start]
        if not self._is_word_start[start]:
            # span begins mid-word; that partial word still counts
            words += 1
        return end - start, words
