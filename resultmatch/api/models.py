"""Pydantic models for API requests and responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# =============================================================================
# Configuration
# =============================================================================


class GoalBucketsModel(BaseModel):
    """Goal bucket thresholds for one game type."""

    mid_low: int = Field(ge=0)
    mid_high: int = Field(ge=0)
    low_label: str | None = None
    mid_label: str | None = None
    high_label: str | None = None


class MatchingConfigModel(BaseModel):
    """Per-request tuning. Omitted fields keep their defaults."""

    domestic_threshold: float | None = Field(default=None, ge=0, le=100)
    champions_league_threshold: float | None = Field(default=None, ge=0, le=100)
    similarity_floor: float | None = Field(default=None, ge=0, le=100)
    team_floors: dict[str, float] | None = None
    goal_buckets: dict[str, GoalBucketsModel] | None = None
    window_days: int | None = Field(default=None, ge=0)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


# =============================================================================
# Matching
# =============================================================================


class QuestionModel(BaseModel):
    """One question slot of a prediction form."""

    match_number: int
    home_team: str
    away_team: str
    game_type: str = "default"
    has_goal_bonus: bool = False


class MatchRunRequest(BaseModel):
    """Request body for a matching run over already-scraped results."""

    questions: list[QuestionModel]
    # Raw source records; validated the same way as fetcher output
    results: list[dict[str, Any]] = []
    source_id: str = "request"
    config: MatchingConfigModel | None = None
    apply_window: bool = True


class ResultModel(BaseModel):
    """The scraped result behind a proposal."""

    source_id: str
    home_team_raw: str
    away_team_raw: str
    home_score: int
    away_score: int
    home_regulation_score: int | None
    away_regulation_score: int | None
    status: str
    kickoff_time: datetime
    is_champions_league: bool


class MatchCandidateModel(BaseModel):
    """A proposed answer awaiting human confirmation."""

    match_number: int
    confidence: float
    derived_outcome: str
    derived_goals_home: str | None
    derived_goals_away: str | None
    derived_goals_total: str | None
    effective_home_score: int
    effective_away_score: int
    home_similarity: float
    away_similarity: float
    result: ResultModel


class NearMissModel(BaseModel):
    """Result found for a question but not proposed."""

    match_number: int
    confidence: float
    reason: str
    result: ResultModel


class SlotDiagnosticModel(BaseModel):
    slot_index: int
    match_number: Any
    reason: str


class MatchRunResponse(BaseModel):
    """Response body for a matching run."""

    candidates: list[MatchCandidateModel]
    near_misses: list[NearMissModel]
    diagnostics: list[SlotDiagnosticModel]
    unmatched: list[int]
    results_considered: int
    rejected_records: int
    duplicates_removed: int
