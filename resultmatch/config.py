"""Matching configuration.

All tuning is passed explicitly into each run, so one process can serve
several leagues with different settings. Settings are organized into
small dataclasses with defaults from consumers/matching/constants.py.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from resultmatch.consumers.matching.constants import (
    CHAMPIONS_LEAGUE_THRESHOLD,
    DEFAULT_BUCKET_HIGH,
    DEFAULT_BUCKET_LOW,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_WINDOW_DAYS,
    DOMESTIC_THRESHOLD,
    SIMILARITY_FLOOR,
)
from resultmatch.consumers.matching.normalizer import normalize_team_name

if TYPE_CHECKING:
    from resultmatch.consumers.matching.outcome import ResolvedOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalBuckets:
    """Three-way goal buckets for the bonus sub-question.

    Goals below mid_low, within mid_low..mid_high (inclusive), or above
    mid_high. Labels default to "<11", "11/12" and ">12" style strings.
    """

    mid_low: int = DEFAULT_BUCKET_LOW
    mid_high: int = DEFAULT_BUCKET_HIGH
    low_label: str | None = None
    mid_label: str | None = None
    high_label: str | None = None

    def __post_init__(self):
        if self.mid_low > self.mid_high:
            raise ValueError(f"mid_low ({self.mid_low}) must not exceed mid_high ({self.mid_high})")

    @property
    def labels(self) -> tuple[str, str, str]:
        low = self.low_label or f"<{self.mid_low}"
        if self.mid_label:
            mid = self.mid_label
        elif self.mid_low == self.mid_high:
            mid = str(self.mid_low)
        else:
            mid = f"{self.mid_low}/{self.mid_high}"
        high = self.high_label or f">{self.mid_high}"
        return low, mid, high

    def label_for(self, goals: int) -> str:
        """Bucket label for a goal count."""
        low, mid, high = self.labels
        if goals < self.mid_low:
            return low
        if goals <= self.mid_high:
            return mid
        return high

    def label_total(self, resolved: "ResolvedOutcome") -> str:
        """Bucket label for a resolved match's effective total goals.

        Shootout results resolve to their regulation score, so penalty
        goals never reach the total.
        """
        return self.label_for(resolved.total_goals)


@dataclass
class MatchingConfig:
    """Complete tuning for one matching run."""

    domestic_threshold: float = DOMESTIC_THRESHOLD
    champions_league_threshold: float = CHAMPIONS_LEAGUE_THRESHOLD
    similarity_floor: float = SIMILARITY_FLOOR
    # Normalized team name -> floor overriding similarity_floor for that team
    team_floors: dict[str, float] = field(default_factory=dict)
    # game_type -> buckets; "default" is used for unknown game types
    goal_buckets: dict[str, GoalBuckets] = field(
        default_factory=lambda: {"default": GoalBuckets()}
    )
    window_days: int = DEFAULT_WINDOW_DAYS
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT

    def threshold_for(self, is_champions_league: bool) -> float:
        """Confidence threshold for a result's competition tier."""
        if is_champions_league:
            return self.champions_league_threshold
        return self.domestic_threshold

    def floor_for(self, normalized_team: str) -> float:
        """Per-side similarity floor for a (normalized) question team."""
        return self.team_floors.get(normalized_team, self.similarity_floor)

    def buckets_for(self, game_type: str) -> GoalBuckets:
        """Goal buckets for a game type, falling back to the default."""
        if game_type in self.goal_buckets:
            return self.goal_buckets[game_type]
        return self.goal_buckets.get("default", GoalBuckets())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchingConfig":
        """Build a config from a plain mapping (e.g. parsed JSON).

        Unknown keys are ignored with a warning. Team floor keys are
        normalized so callers can use display names.
        """
        known = {
            "domestic_threshold",
            "champions_league_threshold",
            "similarity_floor",
            "team_floors",
            "goal_buckets",
            "window_days",
            "fetch_timeout",
        }
        unknown = set(data) - known
        if unknown:
            logger.warning("[CONFIG] Ignoring unknown keys: %s", ", ".join(sorted(unknown)))

        kwargs: dict[str, Any] = {k: data[k] for k in known - {"team_floors", "goal_buckets"} if k in data}

        if "team_floors" in data:
            kwargs["team_floors"] = {
                normalize_team_name(team): float(floor) for team, floor in data["team_floors"].items()
            }

        if "goal_buckets" in data:
            buckets = {
                game_type: value if isinstance(value, GoalBuckets) else GoalBuckets(**value)
                for game_type, value in data["goal_buckets"].items()
            }
            buckets.setdefault("default", GoalBuckets())
            kwargs["goal_buckets"] = buckets

        return cls(**kwargs)


def load_config(path: str | Path) -> MatchingConfig:
    """Load a MatchingConfig from a JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    logger.info("[CONFIG] Loaded matching config from %s", path)
    return MatchingConfig.from_dict(data)
