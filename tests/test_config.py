"""Tests for scoring configuration"""
import json
import math
from unittest.mock import patch

import pytest

from overall.config import ScoringConfig, load_config
from overall.constants import (
    DEFAULT_FORK_PENALTY_MULTIPLIER,
    DEFAULT_RECENCY_HALF_LIFE_DAYS,
    DEFAULT_UNMERGED_BRANCH_WEIGHT,
)
from overall.exceptions import ConfigurationError


class TestScoringConfigValidation:
    """Test validation at construction time."""

    def test_defaults(self):
        config = ScoringConfig()

        assert config.recency_half_life_days == DEFAULT_RECENCY_HALF_LIFE_DAYS
        assert config.unmerged_branch_weight == DEFAULT_UNMERGED_BRANCH_WEIGHT
        assert config.fork_penalty_multiplier == DEFAULT_FORK_PENALTY_MULTIPLIER
        assert config.fork_penalty_multiplier < 1.0

    @pytest.mark.parametrize("half_life", [0, -1, -0.5])
    def test_non_positive_half_life_rejected(self, half_life):
        with pytest.raises(ConfigurationError) as exc_info:
            ScoringConfig(recency_half_life_days=half_life)

        assert exc_info.value.key == "recency_half_life_days"

    def test_negative_branch_weight_rejected(self):
        with pytest.raises(ConfigurationError):
            ScoringConfig(unmerged_branch_weight=-0.1)

    def test_negative_fork_multiplier_rejected(self):
        with pytest.raises(ConfigurationError):
            ScoringConfig(fork_penalty_multiplier=-1)

    @pytest.mark.parametrize("value", [math.inf, math.nan])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ConfigurationError):
            ScoringConfig(unmerged_branch_weight=value)

    @pytest.mark.parametrize("value", ["30", None, True])
    def test_non_numeric_rejected(self, value):
        with pytest.raises(ConfigurationError):
            ScoringConfig(recency_half_life_days=value)

    def test_ints_normalized_to_float(self):
        config = ScoringConfig(recency_half_life_days=14)

        assert isinstance(config.recency_half_life_days, float)

    def test_frozen(self):
        config = ScoringConfig()

        with pytest.raises(AttributeError):
            config.recency_half_life_days = 1.0


class TestScoringConfigConversion:
    """Test dict conversion helpers."""

    def test_round_trip(self):
        config = ScoringConfig(recency_half_life_days=7, unmerged_branch_weight=1, fork_penalty_multiplier=0.25)

        assert ScoringConfig.from_dict(config.to_dict()) == config

    def test_from_dict_ignores_unknown_keys(self):
        config = ScoringConfig.from_dict({"recency_half_life_days": 10, "owners": ["softwarewrighter"]})

        assert config.recency_half_life_days == 10.0

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(ConfigurationError):
            ScoringConfig.from_dict(["not", "a", "dict"])

    def test_with_overrides_skips_none(self):
        config = ScoringConfig().with_overrides(recency_half_life_days=5, fork_penalty_multiplier=None)

        assert config.recency_half_life_days == 5.0
        assert config.fork_penalty_multiplier == DEFAULT_FORK_PENALTY_MULTIPLIER

    def test_with_overrides_validates(self):
        with pytest.raises(ConfigurationError):
            ScoringConfig().with_overrides(recency_half_life_days=0)


class TestLoadConfig:
    """Test loading config files."""

    def test_load_flat_file(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"recency_half_life_days": 14}))

        assert load_config(path).recency_half_life_days == 14.0

    def test_load_scoring_section(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"version": "1.0", "scoring": {"unmerged_branch_weight": 2}}))

        assert load_config(str(path)).unmerged_branch_weight == 2.0

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigurationError):
            load_config(temp_dir / "nope.json")

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_values_rejected_at_load(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"recency_half_life_days": 0}))

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_defaults_without_file(self, temp_dir):
        with patch("overall.config.DEFAULT_CONFIG_PATH", temp_dir / "absent.json"):
            assert load_config() == ScoringConfig()

    def test_default_path_used_when_present(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"fork_penalty_multiplier": 0.9}))

        with patch("overall.config.DEFAULT_CONFIG_PATH", path):
            assert load_config().fork_penalty_multiplier == 0.9
