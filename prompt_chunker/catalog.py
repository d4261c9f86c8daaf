"""
Model Catalog Loader

Reads the static model table (context lengths, per-token prices and
tokenizer ratios) once per process. The bundled table lives in
``data/models.json``; ``PROMPT_CHUNKER_CATALOG`` points to an alternate file.

Usage:
    from prompt_chunker.catalog import get_catalog, get_model_config

    config = get_model_config("anthropic/claude-sonnet-4")
    print(config.context_length, config.cost_per_token)
"""

import logging
from typing import Optional

from pydantic import ValidationError

from .config import get_config
from .exceptions import ModelCatalogError
from .models import ModelCatalog, ModelConfig

logger = logging.getLogger(__name__)

# Singleton catalog - loaded on first use, read-only afterwards.
_catalog: Optional[ModelCatalog] = None


def load_catalog(path: str) -> ModelCatalog:
    """
    Load and validate a model catalog from a JSON file.

    Raises:
        ModelCatalogError: If the file is missing, not JSON, or fails validation.
    """
    try:
        catalog = ModelCatalog.load(path)
    except (OSError, ValueError, ValidationError) as exc:
        raise ModelCatalogError(path=path, original_error=exc) from exc
    logger.debug("Loaded model catalog with %d models from %s", len(catalog.models), path)
    return catalog


def get_catalog() -> ModelCatalog:
    """Get or load the process-wide model catalog (singleton)."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog(get_config().catalog_path)
    return _catalog


def resolve_model(model: Optional[str] = None) -> str:
    """Return ``model``, or the configured default model when it is empty."""
    if model:
        return model
    return get_config().default_model or get_catalog().default_model


def is_known_model(model: str) -> bool:
    return model in get_catalog().models


def get_model_config(model: Optional[str] = None) -> ModelConfig:
    """
    Get the configuration of a model.

    Unknown model ids never fail: they get the catalog's conservative default
    context length and are treated as free.
    """
    model = resolve_model(model)
    catalog = get_catalog()
    config = catalog.models.get(model)
    if config is None:
        logger.debug(
            "Unknown model %r, using default context length %d",
            model,
            catalog.default_context_length,
        )
        return ModelConfig(
            name=model,
            context_length=catalog.default_context_length,
            cost_per_token=0.0,
        )
    return config


def chars_per_token(model: Optional[str] = None) -> float:
    """Average characters per token for the tokenizer family of ``model``."""
    model_id = resolve_model(model).lower()
    catalog = get_catalog()
    for family in catalog.tokenizer_families:
        if family.match.lower() in model_id:
            return family.chars_per_token
    return catalog.default_chars_per_token


def get_supported_models() -> list[str]:
    return list(get_catalog().models)


def get_free_models() -> list[str]:
    return [model for model, config in get_catalog().models.items() if config.is_free]


def get_paid_models() -> list[str]:
    return [model for model, config in get_catalog().models.items() if not config.is_free]


def get_models_by_provider(provider: str) -> list[str]:
    return [
        model
        for model, config in get_catalog().models.items()
        if config.provider == provider
    ]
