"""
Sentence Splitter for the Prompt Chunker

Regex-based sentence boundary detection for English prose, without external
NLP libraries.

Design:
- A sentence ends at . ! or ? (optionally followed by closing quotes or
  brackets) when whitespace follows
- Dots of known abbreviations (Mr., Dr., e.g., i.e., ...) do not end a sentence
- Text without terminal punctuation is a single sentence
- Boundaries are reported as (start, end) spans into the original text, so
  callers can slice the input instead of re-joining stripped sentences

Usage:
    from prompt_chunker.sentence_splitter import split_sentences

    sentences = split_sentences("This is one. This is two.")
    # ["This is one.", "This is two."]
"""

import re

# Placeholder character used to protect dots from sentence splitting.
# It is a single character, so protected text keeps the original offsets.
_DOT_PLACEHOLDER = "\x00"

# Abbreviations that should NOT trigger sentence splits.
_ABBREVIATIONS = {
    # Titles
    "mr", "mrs", "ms", "dr", "prof", "sr", "jr", "st", "rev", "gen", "sgt",
    # Common
    "vs", "fig", "approx", "dept", "est", "cf", "al",
    # Months (abbreviated)
    "jan", "feb", "mar", "apr", "jun", "jul", "aug", "sep", "sept",
    "oct", "nov", "dec",
}

_ABBREV_PATTERN = re.compile(
    r"(?<!\w)(?:" + "|".join(re.escape(a) for a in sorted(_ABBREVIATIONS)) + r")\.(?=\s)",
    re.IGNORECASE,
)

# Multi-part abbreviations: e.g., i.e., a.m., p.m., U.S.
_MULTI_ABBREV_PATTERN = re.compile(r"\b[A-Za-z]\.(?:[A-Za-z]\.)+")

# Terminal punctuation, optional closing quotes/brackets, then the whitespace
# gap that separates two sentences (group 1).
_BOUNDARY_PATTERN = re.compile(r"[.!?]+[\"')\]”’]*(\s+)")


def _protect_dots(text: str) -> str:
    """Replace dots in abbreviations with placeholders."""
    # Order matters: protect multi-part abbreviations first (e.g. before "g.")
    text = _MULTI_ABBREV_PATTERN.sub(
        lambda m: m.group().replace(".", _DOT_PLACEHOLDER), text
    )
    text = _ABBREV_PATTERN.sub(
        lambda m: m.group().replace(".", _DOT_PLACEHOLDER), text
    )
    return text


def _append_trimmed(spans: list[tuple[int, int]], text: str, start: int, end: int) -> None:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    if end > start:
        spans.append((start, end))


def sentence_spans(text: str) -> list[tuple[int, int]]:
    """
    Locate sentences in text.

    Args:
        text: Input text.

    Returns:
        List of (start, end) offsets, one per sentence, in document order.
        Offsets exclude surrounding whitespace.
    """
    if not text or not text.strip():
        return []

    protected = _protect_dots(text)

    spans: list[tuple[int, int]] = []
    start = 0
    for match in _BOUNDARY_PATTERN.finditer(protected):
        _append_trimmed(spans, text, start, match.start(1))
        start = match.end(1)
    _append_trimmed(spans, text, start, len(text))
    return spans


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences at proper sentence boundaries.

    Args:
        text: Input text to split into sentences.

    Returns:
        List of sentence strings. Empty/whitespace input returns empty list.
        Each sentence is stripped of leading/trailing whitespace.
    """
    return [text[start:end] for start, end in sentence_spans(text)]
