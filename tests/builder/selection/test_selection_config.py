"""
Unit tests for SelectionConfig.
"""

import pytest

from qbl_toolkit.builder.selection import IncludePolicy, SelectionConfig


class TestSelectionConfig:
    """Tests for SelectionConfig validation."""

    def test_config_defaults(self):
        config = SelectionConfig(count=5)
        assert config.include_tags == frozenset()
        assert config.sample_tags == {}
        assert config.include_policy is IncludePolicy.SAMPLE_BYPASS
        assert config.quota_total == 0

    @pytest.mark.parametrize("count", [0, -1])
    def test_config_when_count_not_positive_then_raises(self, count):
        with pytest.raises(ValueError, match="count must be positive"):
            SelectionConfig(count=count)

    def test_config_when_negative_quota_then_raises(self):
        with pytest.raises(ValueError, match="quota"):
            SelectionConfig(count=3, sample_tags={"hard": -1})

    def test_config_when_lists_given_then_frozensets(self):
        # Act
        config = SelectionConfig(
            count=3,
            include_tags=["a", "a", "b"],
            avoid_ids=["q1"],
        )

        # Assert
        assert config.include_tags == frozenset({"a", "b"})
        assert config.avoid_ids == frozenset({"q1"})

    def test_config_quota_summary(self):
        config = SelectionConfig(count=5, sample_tags={"easy": 1, "hard": 2})
        assert config.quota_total == 3
        assert config.sample_tag_set == frozenset({"easy", "hard"})
