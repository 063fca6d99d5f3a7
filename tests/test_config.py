"""Tests for matching configuration and status parsing."""

import json

import pytest

from resultmatch.config import GoalBuckets, MatchingConfig, load_config
from resultmatch.core import ResultStatus
from resultmatch.utilities.result_status import parse_status


class TestMatchingConfig:
    def test_defaults(self):
        config = MatchingConfig()
        assert config.threshold_for(True) > config.threshold_for(False)
        assert config.floor_for("anyone") == config.similarity_floor
        assert config.buckets_for("anything") == GoalBuckets()

    def test_from_dict(self):
        config = MatchingConfig.from_dict(
            {
                "champions_league_threshold": 70,
                "team_floors": {"Club Natació Barcelona": 60},
                "goal_buckets": {"waterpolo": {"mid_low": 11, "mid_high": 12}},
                "window_days": 3,
                "something_else": True,
            }
        )
        assert config.threshold_for(True) == 70
        assert config.floor_for("barcelona") == 60
        assert config.buckets_for("waterpolo").label_for(12) == "11/12"
        assert "default" in config.goal_buckets
        assert config.window_days == 3

    def test_invalid_buckets(self):
        with pytest.raises(ValueError):
            MatchingConfig.from_dict({"goal_buckets": {"x": {"mid_low": 5, "mid_high": 1}}})

    def test_load_config(self, tmp_path):
        path = tmp_path / "matching.json"
        path.write_text(json.dumps({"domestic_threshold": 45}), encoding="utf-8")
        assert load_config(path).domestic_threshold == 45


class TestParseStatus:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("FT", ResultStatus.FINISHED),
            ("Final", ResultStatus.FINISHED),
            ("A.E.T.", ResultStatus.AET),
            ("Final OT", ResultStatus.AET),
            ("pen", ResultStatus.SHOOTOUT),
            ("Final SO", ResultStatus.SHOOTOUT),
            ("live", ResultStatus.SCHEDULED),
            ("", ResultStatus.SCHEDULED),
            (None, ResultStatus.SCHEDULED),
            ("who knows", ResultStatus.SCHEDULED),
            (ResultStatus.AET, ResultStatus.AET),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_status(value) == expected
