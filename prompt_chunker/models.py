"""
Data Models for the Prompt Chunker

Defines:
1. ChunkOptions - Budget, boundary mode and overlap for a chunking call
2. TokenEstimate - Approximate token count and cost of a text
3. ChunkStats - Aggregate token statistics over a chunk sequence
4. ModelConfig / ModelCatalog - Static per-model context length and price table
5. ModelRecommendation / TokenComparison - Results of model and tokenizer queries

Design Principles:
- Pydantic v2 for validation and serialization
- Value objects only: built per call, never mutated or persisted
- The model catalog is the single piece of static configuration

Usage:
    options = ChunkOptions.build(max_tokens=256, overlap=5)
    estimate = estimate_tokens("Hello world")
    stats = get_chunk_stats(chunks)
"""

import json
import math
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ChunkConfigurationError


SENTENCE = "sentence"
WORD = "word"
CHARACTER = "character"


class ChunkOptions(BaseModel):
    """
    Options for a single chunking call.

    ``overlap`` counts trailing words or characters in those modes. In
    sentence mode it is a token allowance filled with whole trailing
    sentences. An overlap at or above ``max_tokens`` is accepted
    and degrades gracefully (the seed is shortened until the next unit fits).
    """
    max_tokens: int = Field(
        ...,
        description="Maximum estimated tokens per chunk",
        gt=0,
    )
    preserve_words: bool = Field(
        True,
        description="Split only at whitespace boundaries",
    )
    preserve_sentences: bool = Field(
        False,
        description="Split only at sentence boundaries (takes precedence over words)",
    )
    overlap: int = Field(
        0,
        description="Trailing units (sentence mode: tokens of whole sentences) repeated at the start of the next chunk",
        ge=0,
    )

    @classmethod
    def build(cls, **values: Any) -> "ChunkOptions":
        """
        Validate options, converting pydantic errors into ChunkConfigurationError.

        Raises:
            ChunkConfigurationError: If max_tokens is missing or not positive,
                or overlap is negative.
        """
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            error = exc.errors()[0]
            parameter = ".".join(str(part) for part in error["loc"]) or "options"
            value = values.get(parameter)
            if error["type"] == "missing":
                message = f"{parameter} is required"
            else:
                message = f"Invalid value for {parameter}: {value!r} ({error['msg']})"
            raise ChunkConfigurationError(parameter, value, message=message) from exc

    @property
    def unit(self) -> str:
        """Split granularity selected by the boundary flags."""
        if self.preserve_sentences:
            return SENTENCE
        if self.preserve_words:
            return WORD
        return CHARACTER


class TokenEstimate(BaseModel):
    """Approximate token usage of a text for one model."""
    model: str
    tokens: int = Field(..., ge=0)
    characters: int = Field(..., ge=0)
    words: int = Field(..., ge=0)
    estimated_cost: float = Field(
        0.0,
        description="tokens * cost_per_token; 0.0 for free or unknown models",
        ge=0,
    )


class ChunkStats(BaseModel):
    """
    Token statistics over a chunk sequence.

    For an empty sequence min/max/average hold the identity values of an
    empty reduction (+inf, -inf, nan). Check ``is_empty`` before using them.
    """
    total_chunks: int = 0
    total_tokens: int = 0
    average_tokens: float = math.nan
    min_tokens: float = math.inf
    max_tokens: float = -math.inf

    @property
    def is_empty(self) -> bool:
        return self.total_chunks == 0


class ModelConfig(BaseModel):
    """Context length and price of a single model."""
    name: str
    context_length: int = Field(..., gt=0)
    cost_per_token: float = Field(0.0, ge=0)
    modality: Optional[str] = None
    architecture: Optional[str] = None
    provider: Optional[str] = None

    @property
    def is_free(self) -> bool:
        return self.cost_per_token == 0


class TokenizerFamily(BaseModel):
    """Characters-per-token ratio for model ids containing ``match``."""
    match: str = Field(..., min_length=1)
    chars_per_token: float = Field(..., gt=0)


class ModelCatalog(BaseModel):
    """
    Static model table: context lengths, prices and tokenizer ratios.

    Loaded once per process from ``data/models.json`` and treated as read-only.
    """
    default_model: str
    default_context_length: int = Field(4096, gt=0)
    default_chars_per_token: float = Field(4.0, gt=0)
    tokenizer_families: list[TokenizerFamily] = Field(default_factory=list)
    models: dict[str, ModelConfig] = Field(default_factory=dict)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False, indent=indent)

    @classmethod
    def load(cls, path: str) -> "ModelCatalog":
        """Load a catalog from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


class ModelRecommendation(BaseModel):
    """Smallest model whose context holds a text plus a safety margin."""
    model: str
    reason: str
    context_length: int
    estimated_tokens: int
    fits: bool


class TokenComparison(BaseModel):
    """Heuristic estimate versus the reference tokenizer count."""
    estimated: TokenEstimate
    actual: TokenEstimate
    difference: int
    accuracy: float = Field(..., ge=0, le=1)
