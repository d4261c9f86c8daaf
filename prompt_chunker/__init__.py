"""
Prompt Chunker - Token-budgeted text segmentation for LLM prompts

Estimates how many tokens a text will use, looks up model context limits,
and splits long text into ordered chunks that each fit a token budget while
keeping sentence or word boundaries intact.

Quick Start:
    from prompt_chunker import chunk_text, chunk_for_model, get_chunk_stats

    chunks = chunk_text(document, max_tokens=500, preserve_sentences=True, overlap=50)
    chunks = chunk_for_model(document, "anthropic/claude-sonnet-4", overlap_percent=10)
    stats = get_chunk_stats(chunks)

Environment:
    PROMPT_CHUNKER_MODEL: Default model id for estimation (optional)
    PROMPT_CHUNKER_CATALOG: Alternate model table JSON file (optional)
"""

__version__ = "1.0.0"

from .chunker import TextChunker, chunk_text, chunk_for_model, get_chunk_stats
from .catalog import (
    get_model_config,
    get_supported_models,
    get_free_models,
    get_paid_models,
    get_models_by_provider,
)
from .config import ChunkerConfig
from .exceptions import (
    ChunkingError,
    ChunkConfigurationError,
    ModelCatalogError,
    format_error_chain,
)
from .model_limits import (
    get_context_length,
    fits_in_model,
    recommend_model,
    recommend_model_for_tokens,
)
from .models import (
    ChunkOptions,
    ChunkStats,
    ModelConfig,
    ModelRecommendation,
    TokenComparison,
    TokenEstimate,
)
from .sentence_splitter import split_sentences
from .token_counter import (
    estimate_tokens,
    estimate_tokens_batch,
    calculate_cost,
    count_tokens_exact,
    compare_token_counts,
)

__all__ = [
    "__version__",
    "TextChunker",
    "chunk_text",
    "chunk_for_model",
    "get_chunk_stats",
    "get_model_config",
    "get_supported_models",
    "get_free_models",
    "get_paid_models",
    "get_models_by_provider",
    "ChunkerConfig",
    "ChunkingError",
    "ChunkConfigurationError",
    "ModelCatalogError",
    "format_error_chain",
    "get_context_length",
    "fits_in_model",
    "recommend_model",
    "recommend_model_for_tokens",
    "ChunkOptions",
    "ChunkStats",
    "ModelConfig",
    "ModelRecommendation",
    "TokenComparison",
    "TokenEstimate",
    "split_sentences",
    "estimate_tokens",
    "estimate_tokens_batch",
    "calculate_cost",
    "count_tokens_exact",
    "compare_token_counts",
]
