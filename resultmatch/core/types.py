"""Core data types.

RawResult is what every source is normalized into, Question is one slot
of a prediction form, and MatchCandidate is a proposed binding between
the two. All of them are plain dataclasses.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class ResultStatus(str, Enum):
    """Maturity of a scraped result."""

    SCHEDULED = "scheduled"
    FINISHED = "finished"
    AET = "aet"
    SHOOTOUT = "shootout"


# Only concluded matches can be bound to a question
MATCHABLE_STATUSES = frozenset({ResultStatus.FINISHED, ResultStatus.AET, ResultStatus.SHOOTOUT})


class Outcome(str, Enum):
    """Discrete outcome of a match as the prediction game sees it."""

    HOME_WIN = "homeWin"
    AWAY_WIN = "awayWin"
    DRAW = "draw"


@dataclass(frozen=True)
class RawResult:
    """A single scraped match observation."""

    source_id: str
    home_team_raw: str
    away_team_raw: str
    home_score: int
    away_score: int
    status: ResultStatus
    kickoff_time: datetime
    is_champions_league: bool = False
    # Only populated when the match went to a shootout
    home_regulation_score: int | None = None
    away_regulation_score: int | None = None

    @property
    def is_matchable(self) -> bool:
        return self.status in MATCHABLE_STATUSES

    @property
    def has_regulation_score(self) -> bool:
        return self.home_regulation_score is not None and self.away_regulation_score is not None

    @property
    def kickoff_utc(self) -> datetime:
        """Kickoff as an aware UTC datetime (naive values are taken as UTC)."""
        if self.kickoff_time.tzinfo is None:
            return self.kickoff_time.replace(tzinfo=UTC)
        return self.kickoff_time.astimezone(UTC)

    @property
    def completeness(self) -> tuple[int, int]:
        """Sort key for picking the richer of two reports of one fixture.

        Extra-time and shootout results beat plain finals, then records
        carrying regulation scores beat those without.
        """
        status_rank = 1 if self.status in (ResultStatus.AET, ResultStatus.SHOOTOUT) else 0
        return (status_rank, 1 if self.has_regulation_score else 0)


@dataclass(frozen=True)
class Question:
    """One fixture slot in a prediction form."""

    match_number: int
    home_team: str
    away_team: str
    game_type: str = "default"
    has_goal_bonus: bool = False  # Slot carries the goal sub-question


@dataclass
class MatchCandidate:
    """A proposed binding of one result to one question."""

    match_number: int
    confidence: float
    derived_outcome: Outcome
    result: RawResult
    home_similarity: float
    away_similarity: float
    effective_home_score: int
    effective_away_score: int
    derived_goals_home: str | None = None
    derived_goals_away: str | None = None
    derived_goals_total: str | None = None


class NearMissReason(str, Enum):
    """Why the best pair found for a question was not proposed."""

    BELOW_THRESHOLD = "below_threshold"
    RESULT_TAKEN = "result_taken"


@dataclass
class NearMiss:
    """Best rejected pair for a question that got no candidate.

    Lets a reviewer tell "result found but low confidence" apart from
    "no result found" (which has no entry at all).
    """

    match_number: int
    confidence: float
    reason: NearMissReason
    result: RawResult


@dataclass
class SlotDiagnostic:
    """A question slot that was skipped because its form data is malformed.

    slot_index is the position in the submitted question list; the match
    number alone can be missing or shared with a valid slot.
    """

    slot_index: int
    match_number: int
    reason: str


@dataclass
class MatchReport:
    """Output of one matching run."""

    candidates: list[MatchCandidate] = field(default_factory=list)
    diagnostics: list[SlotDiagnostic] = field(default_factory=list)
    near_misses: list[NearMiss] = field(default_factory=list)

    def candidate_for(self, match_number: int) -> MatchCandidate | None:
        for candidate in self.candidates:
            if candidate.match_number == match_number:
                return candidate
        return None

    @property
    def matched_count(self) -> int:
        return len(self.candidates)
