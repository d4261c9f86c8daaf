"""
Custom Exceptions for the Prompt Chunker.

Exception Hierarchy:
    ChunkingError (base)
    ├── ChunkConfigurationError
    └── ModelCatalogError

Only configuration problems surface as exceptions. Degenerate input
(empty text, oversized words, overlap larger than the budget, unknown
model ids) is resolved by the chunker's fallback rules instead.

Usage:
    from prompt_chunker.exceptions import ChunkConfigurationError

    try:
        chunks = chunk_text(text, ChunkOptions.build(max_tokens=0))
    except ChunkConfigurationError as e:
        print(f"Bad option {e.parameter}: {e}")
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class ChunkingError(Exception):
    """
    Base exception for all prompt-chunker errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A chunking error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ChunkConfigurationError(ChunkingError, ValueError):
    """
    Raised when chunking options are invalid before any processing starts.

    Covers a missing, zero or negative token budget, a negative overlap,
    an overlap percentage outside 0-100 and a negative safety margin.

    Attributes:
        parameter: Name of the offending option
        value: The rejected value
    """

    def __init__(
        self,
        parameter: str,
        value: Any = None,
        message: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.parameter = parameter
        self.value = value
        msg = message or f"Invalid value for {parameter}: {value!r}"
        super().__init__(msg, details)


# =============================================================================
# CATALOG ERRORS
# =============================================================================


class ModelCatalogError(ChunkingError):
    """
    Raised when the model table cannot be read or does not validate.

    Attributes:
        path: Path to the catalog file
        original_error: The underlying I/O or validation error
    """

    def __init__(
        self,
        path: Optional[str] = None,
        original_error: Optional[Exception] = None,
        message: str = "Model catalog could not be loaded",
    ):
        self.path = path
        self.original_error = original_error
        if path:
            message = f"{message} [{path}]"
        details = str(original_error) if original_error else None
        super().__init__(message, details)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current: Optional[BaseException] = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None) is not None:
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
