"""Matching API endpoints.

Provides endpoints for the answer confirmation UI:
- POST /matching/run - Propose answers for a form from scraped results
- GET /matching/config - Default matching configuration

Proposals are never persisted here; the caller stores an answer only
after a human accepts it.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from resultmatch.api.models import (
    MatchCandidateModel,
    MatchRunRequest,
    MatchRunResponse,
    NearMissModel,
    ResultModel,
    SlotDiagnosticModel,
)
from resultmatch.config import MatchingConfig
from resultmatch.consumers.aggregation import deduplicate, filter_window
from resultmatch.consumers.aggregation.records import coerce_records
from resultmatch.consumers.matching.engine import MatchingEngine
from resultmatch.core import Question, RawResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matching")


def _result_model(result: RawResult) -> ResultModel:
    return ResultModel(
        source_id=result.source_id,
        home_team_raw=result.home_team_raw,
        away_team_raw=result.away_team_raw,
        home_score=result.home_score,
        away_score=result.away_score,
        home_regulation_score=result.home_regulation_score,
        away_regulation_score=result.away_regulation_score,
        status=result.status.value,
        kickoff_time=result.kickoff_utc,
        is_champions_league=result.is_champions_league,
    )


@router.post("/run", response_model=MatchRunResponse)
def run_matching(request: MatchRunRequest) -> MatchRunResponse:
    """Match scraped results against a form's questions.

    Results are validated, window-filtered and de-duplicated exactly like
    fetcher output. Questions without a proposal appear in `unmatched`;
    those with a rejected low-confidence result also appear in `near_misses`.
    """
    try:
        config = MatchingConfig.from_dict(request.config.to_dict() if request.config else {})
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from None

    results, rejected = coerce_records(request.source_id, request.results)
    considered = filter_window(results, config.window_days) if request.apply_window else results
    unique = deduplicate(considered)

    questions = [Question(**q.model_dump()) for q in request.questions]
    report = MatchingEngine(config).match(questions, tuple(unique))

    # Valid slots have unique match numbers; invalid ones are known by position only
    matched_numbers = {c.match_number for c in report.candidates}
    invalid_slots = {d.slot_index for d in report.diagnostics}
    unmatched = [
        q.match_number
        for index, q in enumerate(questions)
        if index not in invalid_slots and q.match_number not in matched_numbers
    ]

    return MatchRunResponse(
        candidates=[
            MatchCandidateModel(
                match_number=c.match_number,
                confidence=c.confidence,
                derived_outcome=c.derived_outcome.value,
                derived_goals_home=c.derived_goals_home,
                derived_goals_away=c.derived_goals_away,
                derived_goals_total=c.derived_goals_total,
                effective_home_score=c.effective_home_score,
                effective_away_score=c.effective_away_score,
                home_similarity=c.home_similarity,
                away_similarity=c.away_similarity,
                result=_result_model(c.result),
            )
            for c in report.candidates
        ],
        near_misses=[
            NearMissModel(
                match_number=m.match_number,
                confidence=m.confidence,
                reason=m.reason.value,
                result=_result_model(m.result),
            )
            for m in report.near_misses
        ],
        diagnostics=[SlotDiagnosticModel(**asdict(d)) for d in report.diagnostics],
        unmatched=unmatched,
        results_considered=len(unique),
        rejected_records=rejected,
        duplicates_removed=len(considered) - len(unique),
    )


@router.get("/config")
def get_default_config() -> dict:
    """Get the default matching configuration."""
    config = MatchingConfig()
    return {
        "domestic_threshold": config.domestic_threshold,
        "champions_league_threshold": config.champions_league_threshold,
        "similarity_floor": config.similarity_floor,
        "window_days": config.window_days,
        "fetch_timeout": config.fetch_timeout,
        "goal_buckets": {
            game_type: {"mid_low": b.mid_low, "mid_high": b.mid_high, "labels": list(b.labels)}
            for game_type, b in config.goal_buckets.items()
        },
    }
