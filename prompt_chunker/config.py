from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional
import os

from .exceptions import ChunkConfigurationError

DEFAULT_CATALOG_PATH = str(Path(__file__).resolve().parent / "data" / "models.json")


@dataclass
class ChunkerConfig:
    catalog_path: str = DEFAULT_CATALOG_PATH
    default_model: Optional[str] = None
    reserve_output_ratio: float = 0.1
    recommendation_margin: float = 0.1
    default_overlap_percent: int = 10
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 0 <= self.reserve_output_ratio < 1:
            raise ChunkConfigurationError("reserve_output_ratio", self.reserve_output_ratio)
        if self.recommendation_margin < 0:
            raise ChunkConfigurationError("recommendation_margin", self.recommendation_margin)
        if not 0 <= self.default_overlap_percent <= 100:
            raise ChunkConfigurationError("default_overlap_percent", self.default_overlap_percent)

    @classmethod
    def from_env(cls) -> "ChunkerConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            if not value:
                return default
            try:
                return int(value)
            except ValueError as exc:
                raise ChunkConfigurationError(name, value) from exc

        def _float(name: str, default: float) -> float:
            value = os.environ.get(name)
            if not value:
                return default
            try:
                return float(value)
            except ValueError as exc:
                raise ChunkConfigurationError(name, value) from exc

        return cls(
            catalog_path=os.environ.get("PROMPT_CHUNKER_CATALOG", cls.catalog_path),
            default_model=os.environ.get("PROMPT_CHUNKER_MODEL") or None,
            reserve_output_ratio=_float("PROMPT_CHUNKER_RESERVE_RATIO", cls.reserve_output_ratio),
            recommendation_margin=_float("PROMPT_CHUNKER_MARGIN", cls.recommendation_margin),
            default_overlap_percent=_int("PROMPT_CHUNKER_OVERLAP_PERCENT", cls.default_overlap_percent),
            log_level=os.environ.get("PROMPT_CHUNKER_LOG_LEVEL", cls.log_level),
        )


@lru_cache
def get_config() -> ChunkerConfig:
    """Return the process-wide configuration, read from the environment once."""
    return ChunkerConfig.from_env()
