"""
Model Limits and Model Recommendation

Answers two sizing questions against the static model catalog:
- How many tokens fit into a model's context window?
- Which is the smallest model that holds a given text plus a safety margin?

Usage:
    from prompt_chunker.model_limits import recommend_model

    recommendation = recommend_model(long_text)
    print(recommendation.model, recommendation.reason)
"""

import logging
import math
from typing import Optional

from .catalog import get_catalog, get_model_config
from .config import get_config
from .exceptions import ChunkConfigurationError
from .models import ModelConfig, ModelRecommendation
from .token_counter import estimate_tokens

logger = logging.getLogger(__name__)


def get_context_length(model: Optional[str] = None) -> int:
    """Maximum context length of ``model``; unknown models get the catalog default."""
    return get_model_config(model).context_length


def fits_in_model(text: str, model: Optional[str] = None) -> bool:
    """Check whether the estimated size of ``text`` fits into the model's context."""
    estimate = estimate_tokens(text, model)
    return estimate.tokens <= get_context_length(estimate.model)


def _sort_key(item: tuple[str, ModelConfig]) -> tuple[int, float, str]:
    model, config = item
    return config.context_length, config.cost_per_token, model


def recommend_model_for_tokens(tokens: int, margin: Optional[float] = None) -> ModelRecommendation:
    """
    Recommend the smallest-context model that holds ``tokens`` plus a margin.

    Args:
        tokens: Estimated token count of the text.
        margin: Safety margin as a fraction (0.1 = 10% headroom). Defaults to
            the configured recommendation margin.

    Returns:
        ModelRecommendation. When no model is large enough, the model with
        the largest context is returned with ``fits=False``.

    Raises:
        ChunkConfigurationError: If tokens or margin is negative.
    """
    if margin is None:
        margin = get_config().recommendation_margin
    if tokens < 0:
        raise ChunkConfigurationError("tokens", tokens)
    if margin < 0:
        raise ChunkConfigurationError("margin", margin)

    required = math.ceil(tokens * (1 + margin))
    candidates = sorted(get_catalog().models.items(), key=_sort_key)
    if not candidates:
        fallback = get_model_config(None)
        return ModelRecommendation(
            model=fallback.name,
            reason="No models in catalog; using the default model",
            context_length=fallback.context_length,
            estimated_tokens=tokens,
            fits=required <= fallback.context_length,
        )

    for model, config in candidates:
        if config.context_length >= required:
            return ModelRecommendation(
                model=model,
                reason=(
                    f"Text (~{tokens} tokens, {required} with {margin:.0%} margin) fits "
                    f"in the {config.context_length}-token context of {config.name}"
                ),
                context_length=config.context_length,
                estimated_tokens=tokens,
                fits=True,
            )

    largest = min(
        candidates,
        key=lambda item: (-item[1].context_length, item[1].cost_per_token, item[0]),
    )
    model, config = largest
    logger.debug("No model holds %d tokens, falling back to %s", required, model)
    return ModelRecommendation(
        model=model,
        reason=(
            f"Text (~{tokens} tokens, {required} with {margin:.0%} margin) exceeds every "
            f"known context; {config.name} has the largest ({config.context_length} tokens) "
            f"but the text may not fully fit"
        ),
        context_length=config.context_length,
        estimated_tokens=tokens,
        fits=False,
    )


def recommend_model(text: str, margin: Optional[float] = None) -> ModelRecommendation:
    """Recommend a model for ``text`` sized with the default model's estimator."""
    return recommend_model_for_tokens(estimate_tokens(text).tokens, margin)
