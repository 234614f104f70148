"""Scoring configuration handling for overall"""

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from overall.constants import (
    DEFAULT_FORK_PENALTY_MULTIPLIER,
    DEFAULT_RECENCY_HALF_LIFE_DAYS,
    DEFAULT_UNMERGED_BRANCH_WEIGHT,
)
from overall.exceptions import ConfigurationError
from overall.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".overall" / "config.json"


@dataclass(frozen=True)
class ScoringConfig:
    """Weights for the priority score, validated on construction.

    A config that constructs successfully guarantees every score() call
    succeeds, so it can be shared read-only across a whole batch.
    """

    # Age (days) at which the recency term halves
    recency_half_life_days: float = DEFAULT_RECENCY_HALF_LIFE_DAYS
    # Added per unmerged branch
    unmerged_branch_weight: float = DEFAULT_UNMERGED_BRANCH_WEIGHT
    # Applied to the whole score for forks
    fork_penalty_multiplier: float = DEFAULT_FORK_PENALTY_MULTIPLIER

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_number("recency_half_life_days")
        self._validate_number("unmerged_branch_weight")
        self._validate_number("fork_penalty_multiplier")
        self._validate_half_life()
        self._validate_weights()

    def _validate_number(self, key: str):
        """Validate a field is a finite real number."""
        value = getattr(self, key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(key, f"must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ConfigurationError(key, f"must be finite, got {value}")
        # Normalize ints so scores are always computed in float
        object.__setattr__(self, key, float(value))

    def _validate_half_life(self):
        """Validate recency_half_life_days is positive."""
        if self.recency_half_life_days <= 0:
            raise ConfigurationError(
                "recency_half_life_days",
                f"must be positive, got {self.recency_half_life_days}",
            )

    def _validate_weights(self):
        """Validate weights are not negative."""
        if self.unmerged_branch_weight < 0:
            raise ConfigurationError(
                "unmerged_branch_weight",
                f"cannot be negative, got {self.unmerged_branch_weight}",
            )
        if self.fork_penalty_multiplier < 0:
            raise ConfigurationError(
                "fork_penalty_multiplier",
                f"cannot be negative, got {self.fork_penalty_multiplier}",
            )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "recency_half_life_days": self.recency_half_life_days,
            "unmerged_branch_weight": self.unmerged_branch_weight,
            "fork_penalty_multiplier": self.fork_penalty_multiplier,
        }

    def with_overrides(self, **overrides) -> "ScoringConfig":
        """Return a new config with the non-None overrides applied."""
        values = self.to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ScoringConfig.from_dict(values)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScoringConfig":
        """Create ScoringConfig from dictionary."""
        if not isinstance(config_dict, dict):
            raise ConfigurationError("scoring", "expected a mapping of settings")

        known_fields = {
            "recency_half_life_days",
            "unmerged_branch_weight",
            "fork_penalty_multiplier",
        }

        unknown = sorted(set(config_dict) - known_fields)
        if unknown:
            logger.debug(f"Ignoring unknown config keys: {', '.join(unknown)}")

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def load_config(path: Optional[Union[str, Path]] = None) -> ScoringConfig:
    """
    Load scoring configuration from a JSON file.

    Args:
        path: Config file path. When None, ~/.overall/config.json is used if
            it exists, otherwise defaults are returned.

    Returns:
        Validated ScoringConfig
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.debug("No config file found, using default scoring weights")
            return ScoringConfig()
        path = DEFAULT_CONFIG_PATH

    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigurationError("path", f"config file not found: {config_path}")
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError("path", f"cannot read {config_path}: {e}")

    # Settings may live at the top level or under a "scoring" key
    if isinstance(raw, dict) and "scoring" in raw:
        raw = raw["scoring"]

    logger.debug(f"Loaded scoring config from {config_path}")
    return ScoringConfig.from_dict(raw)
