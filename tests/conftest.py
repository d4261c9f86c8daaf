"""
Pytest fixtures for Prompt Chunker tests.
"""

import logging

import pytest

from prompt_chunker import catalog, chunker, token_counter
from prompt_chunker.config import get_config

ENV_VARS = [
    "PROMPT_CHUNKER_CATALOG",
    "PROMPT_CHUNKER_MODEL",
    "PROMPT_CHUNKER_RESERVE_RATIO",
    "PROMPT_CHUNKER_MARGIN",
    "PROMPT_CHUNKER_OVERLAP_PERCENT",
    "PROMPT_CHUNKER_LOG_LEVEL",
]


def reset_singletons():
    """Forget the cached config, catalog, default chunker and log handlers."""
    get_config.cache_clear()
    catalog._catalog = None
    chunker._default_chunker = None
    logging.getLogger("prompt_chunker").handlers.clear()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Run every test against the bundled catalog and default settings."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_singletons()
    yield
    reset_singletons()


class WhitespaceEncoder:
    """Offline stand-in for a tiktoken encoding: one token per word."""

    def encode(self, text):
        return text.split()


@pytest.fixture
def whitespace_encoder(monkeypatch):
    """Replace the cl100k_base reference encoder so tests stay offline."""
    encoder = WhitespaceEncoder()
    monkeypatch.setattr(token_counter, "_encoder", encoder)
    return encoder


@pytest.fixture
def sentences():
    """Four sentences of 27-28 characters (7 tokens each at 4 chars/token)."""
    return [
        "This is the first sentence.",
        "This is the second sentence.",
        "This is the third sentence.",
        "This is the fourth sentence.",
    ]


@pytest.fixture
def sample_text(sentences):
    return " ".join(sentences)


@pytest.fixture
def numbered_words():
    """Forty distinct words: word0 ... word39."""
    return " ".join(f"word{i}" for i in range(40))


@pytest.fixture
def long_document():
    """About 14,000 estimated tokens of short numbered sentences."""
    return " ".join(f"Sentence number {i} is here." for i in range(2000))
