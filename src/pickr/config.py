"""Configuration for Pickr.

This module provides the Config class for customizing Ranker behavior,
including default ranking settings, pacing estimates, and storage.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigError
from .models import Algorithm, RankingSettings


class Config(BaseModel):
    """Configuration for Pickr.

    Attributes:
        algorithm: Default algorithm for new sessions.
        comparison_size: Default number of cards per comparison.
        shuffle_cards: Shuffle card order when a pack is added.
        average_comparison_seconds: Assumed time per comparison for estimates.
        storage_dir: Directory for JSON stores (defaults to env var).
        log_level: Level for the ``pickr`` logger.
    """

    # Ranking defaults
    algorithm: str = Field(default="pairwise")
    comparison_size: int = Field(default=2, ge=2, le=100)
    shuffle_cards: bool = False

    # Estimates
    average_comparison_seconds: float = Field(default=5.0, gt=0.0, le=3600.0)

    # Storage (None keeps everything in memory)
    storage_dir: str | None = None

    # Output
    log_level: str = "WARNING"

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """Validate the algorithm name is a known one."""
        valid_algorithms = {algorithm.value for algorithm in Algorithm}
        if v.lower() not in valid_algorithms:
            raise ValueError(
                f"Invalid algorithm '{v}'. Must be one of: {', '.join(sorted(valid_algorithms))}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        return v.upper()

    def model_post_init(self, __context: Any) -> None:
        """Load the storage directory from environment if not provided."""
        if self.storage_dir is None:
            self.storage_dir = os.environ.get("PICKR_STORAGE_DIR")

    def ranking_settings(self) -> RankingSettings:
        """Default settings for a new session."""
        return RankingSettings(
            comparison_size=self.comparison_size,
            algorithm=Algorithm(self.algorithm),
        )

    def average_comparison_ms(self) -> int:
        return round(self.average_comparison_seconds * 1000)


class PickrConfig(BaseModel):
    """Full Pickr configuration, typically loaded from YAML.

    Attributes:
        ranking: Ranking and storage settings (maps to Config).
        packs: Optional packs to seed, as ``{"name": ..., "cards": [...]}``.
    """

    ranking: Config = Field(default_factory=Config)
    packs: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> PickrConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            PickrConfig instance.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ConfigError: If the file is not valid YAML.
            ValueError: If the YAML has the wrong shape.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Could not parse {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file: expected dict, got {type(data).__name__}")

        if "ranking" in data and isinstance(data["ranking"], dict):
            data["ranking"] = Config(**data["ranking"])

        if "packs" in data:
            packs = []
            for pack in data["packs"] or []:
                if not isinstance(pack, dict) or "name" not in pack:
                    raise ValueError(f"Invalid pack entry: {pack}")
                cards = pack.get("cards") or []
                if not all(isinstance(card, str) for card in cards):
                    raise ValueError(f"Pack '{pack['name']}' cards must be strings")
                packs.append(pack)
            data["packs"] = packs

        return cls(**data)
