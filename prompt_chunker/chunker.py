"""
Text Chunker - Token-budgeted segmentation of prompt text

Splits text into an ordered list of chunks whose estimated token count stays
within a budget, so each chunk fits a model's context window.

Algorithm:
1. Empty (or whitespace-only) text yields no chunks.
2. Text whose whole estimate fits the budget yields one trimmed chunk.
3. Otherwise split the text into units: sentences, words or characters.
4. Accumulate units greedily while the running estimate stays within budget.
5. When the next unit does not fit, emit the chunk and re-seed the next one
   with the trailing ``overlap`` words or characters (sentence mode: whole
   sentences within ``overlap`` tokens), shortened until the next unit fits.
6. A unit that alone exceeds the budget is emitted as its own chunk.

Every chunk is a substring of the input. Dropping the overlap prefix of each
chunk and joining the rest reconstructs the text up to whitespace at the cut
points.

Usage:
    from prompt_chunker import TextChunker, ChunkOptions

    chunker = TextChunker(model="anthropic/claude-sonnet-4")
    chunks = chunker.chunk(text, ChunkOptions.build(max_tokens=500, overlap=20))
    stats = chunker.stats(chunks)
"""

import logging
import math
from typing import Any, Callable, Optional, Union

from .boundaries import TextIndex, split_units
from .catalog import chars_per_token, get_model_config, resolve_model
from .config import ChunkerConfig, get_config
from .exceptions import ChunkConfigurationError
from .models import SENTENCE, ChunkOptions, ChunkStats
from .token_counter import estimate_from_counts, estimate_tokens

logger = logging.getLogger(__name__)

OptionsLike = Union[ChunkOptions, dict[str, Any], None]


class TextChunker:
    """
    Splits text into token-budgeted, boundary-aligned chunks.

    The chunker holds no state between calls; one instance can serve any
    number of concurrent callers.
    """

    def __init__(self, model: Optional[str] = None, config: Optional[ChunkerConfig] = None):
        self.config = config or get_config()
        self.model = resolve_model(model or self.config.default_model)

    def chunk(self, text: str, options: OptionsLike = None, **overrides: Any) -> list[str]:
        """
        Split text into chunks that fit within ``max_tokens``.

        Args:
            text: Text to split.
            options: ChunkOptions, a dict of option values, or None to build
                the options from keyword arguments.
            **overrides: Option values (max_tokens, preserve_words,
                preserve_sentences, overlap) overriding ``options``.

        Returns:
            Chunks in document order.

        Raises:
            ChunkConfigurationError: If max_tokens is missing or not positive,
                or overlap is negative.
        """
        options = self._resolve_options(options, overrides)

        if not text or not text.strip():
            return []

        if estimate_tokens(text, self.model).tokens <= options.max_tokens:
            return [text.strip()]

        units = split_units(text, options.unit)
        chunks = self._build_chunks(text, units, options)
        logger.debug(
            "Split %d characters into %d %s-aligned chunks (max_tokens=%d, overlap=%d)",
            len(text),
            len(chunks),
            options.unit,
            options.max_tokens,
            options.overlap,
        )
        return chunks

    def chunk_for_model(
        self,
        text: str,
        model: Optional[str] = None,
        overlap_percent: Optional[float] = None,
    ) -> list[str]:
        """
        Chunk text for a model, deriving the budget from its context length.

        A share of the context (``reserve_output_ratio``) is left free for the
        completion. The overlap percentage of the derived budget becomes a
        token allowance filled with whole trailing sentences.

        Args:
            text: Text to split.
            model: Target model; defaults to this chunker's model.
            overlap_percent: Overlap as a percentage (0-100) of the budget.

        Raises:
            ChunkConfigurationError: If overlap_percent is outside 0-100.
        """
        if overlap_percent is None:
            overlap_percent = self.config.default_overlap_percent
        if not 0 <= overlap_percent <= 100:
            raise ChunkConfigurationError(
                "overlap_percent",
                overlap_percent,
                message=f"overlap_percent must be between 0 and 100, got {overlap_percent!r}",
            )

        target = resolve_model(model) if model else self.model
        context_length = get_model_config(target).context_length
        max_tokens = max(1, math.floor(context_length * (1 - self.config.reserve_output_ratio)))
        overlap = math.floor(max_tokens * overlap_percent / 100)

        chunker = self if target == self.model else TextChunker(target, self.config)
        return chunker.chunk(
            text,
            ChunkOptions(
                max_tokens=max_tokens,
                overlap=overlap,
                preserve_words=True,
                preserve_sentences=True,
            ),
        )

    def stats(self, chunks: list[str]) -> ChunkStats:
        """
        Compute token statistics over a chunk list.

        An empty list yields total_chunks=0, total_tokens=0 and the "no data"
        sentinels min=+inf, max=-inf, average=nan.
        """
        if not chunks:
            return ChunkStats()

        token_counts = [estimate_tokens(chunk, self.model).tokens for chunk in chunks]
        total = sum(token_counts)
        return ChunkStats(
            total_chunks=len(chunks),
            total_tokens=total,
            average_tokens=total / len(token_counts),
            min_tokens=min(token_counts),
            max_tokens=max(token_counts),
        )

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _resolve_options(self, options: OptionsLike, overrides: dict[str, Any]) -> ChunkOptions:
        if isinstance(options, ChunkOptions):
            if not overrides:
                return options
            values = {**options.model_dump(), **overrides}
        else:
            values = {**(options or {}), **overrides}
        return ChunkOptions.build(**values)

    def _build_chunks(
        self,
        text: str,
        units: list[tuple[int, int]],
        options: ChunkOptions,
    ) -> list[str]:
        """
        Greedy accumulation over ``units``.

        The current chunk is ``units[start:end]``; ``end`` is also the next
        unprocessed unit. An empty chunk accepts any unit, so every emitted
        chunk holds at least one new unit.
        """
        index = TextIndex(text)
        ratio = chars_per_token(self.model)
        budget = options.max_tokens

        def tokens(first: int, stop: int) -> int:
            characters, words = index.measure(units[first][0], units[stop - 1][1])
            return estimate_from_counts(characters, words, ratio=ratio)

        chunks: list[str] = []
        start = end = 0
        while end < len(units):
            if end == start or tokens(start, end + 1) <= budget:
                end += 1
                continue
            self._emit(chunks, index, units, start, end)
            start = self._overlap_start(start, end, options, tokens)

        if end > start:
            self._emit(chunks, index, units, start, end)
        return chunks

    def _emit(
        self,
        chunks: list[str],
        index: TextIndex,
        units: list[tuple[int, int]],
        start: int,
        end: int,
    ) -> None:
        chunk_start, chunk_end = index.trim(units[start][0], units[end - 1][1])
        if chunk_end > chunk_start:
            chunks.append(index.text[chunk_start:chunk_end])

    def _overlap_start(
        self,
        start: int,
        end: int,
        options: ChunkOptions,
        tokens: Callable[[int, int], int],
    ) -> int:
        """
        First unit of the next chunk.

        Words and characters: the trailing ``overlap`` units of the closed
        chunk. Sentences: as many whole trailing sentences as fit in
        ``overlap`` tokens. The seed is then shortened from the front until
        it leaves room for unit ``end``.
        """
        overlap = options.overlap
        if overlap <= 0:
            return end

        if options.unit == SENTENCE:
            seed = end
            while seed > start and tokens(seed - 1, end) <= overlap:
                seed -= 1
        else:
            seed = max(start, end - overlap)

        while seed < end and tokens(seed, end + 1) > options.max_tokens:
            seed += 1
        return seed


_default_chunker: Optional[TextChunker] = None


def _get_chunker(model: Optional[str]) -> TextChunker:
    global _default_chunker
    if model:
        return TextChunker(model)
    if _default_chunker is None:
        _default_chunker = TextChunker()
    return _default_chunker


def chunk_text(
    text: str,
    options: OptionsLike = None,
    model: Optional[str] = None,
    **overrides: Any,
) -> list[str]:
    """Split text into chunks; see TextChunker.chunk."""
    return _get_chunker(model).chunk(text, options, **overrides)


def chunk_for_model(
    text: str,
    model: Optional[str] = None,
    overlap_percent: Optional[float] = None,
) -> list[str]:
    """Chunk text for a model's context window; see TextChunker.chunk_for_model."""
    return _get_chunker(model).chunk_for_model(text, overlap_percent=overlap_percent)


def get_chunk_stats(chunks: list[str], model: Optional[str] = None) -> ChunkStats:
    """Token statistics over a chunk list; see TextChunker.stats."""
    return _get_chunker(model).stats(chunks)
