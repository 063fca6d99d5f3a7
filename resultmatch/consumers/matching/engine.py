"""Result-to-question matching engine.

Assigns at most one scraped result to each question slot of a prediction
form. Candidates are proposals for a human to confirm; the engine never
writes answers anywhere.

Matching strategy:
1. Score every (question, result) pair: per-side similarity of normalized
   team names, each side must clear its floor, confidence is the mean
2. Drop pairs below the threshold for the result's competition tier
3. Greedy one-to-one assignment by descending confidence
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from resultmatch.config import MatchingConfig
from resultmatch.consumers.matching.normalizer import normalize_team_name
from resultmatch.consumers.matching.outcome import derive_goal_buckets, resolve
from resultmatch.core.exceptions import InvalidQuestionError
from resultmatch.core.types import (
    MatchCandidate,
    MatchReport,
    NearMiss,
    NearMissReason,
    Question,
    RawResult,
    SlotDiagnostic,
)
from resultmatch.utilities.fuzzy_match import TeamNameMatcher

logger = logging.getLogger(__name__)


@dataclass
class _ScoredPair:
    """A scored (question, result) pair. Internal to one run."""

    question_index: int
    result_index: int
    home_similarity: float
    away_similarity: float
    confidence: float


def validate_question(question: Question, seen_numbers: set[int]) -> None:
    """Raise InvalidQuestionError if a question cannot be matched.

    Args:
        question: Question to check
        seen_numbers: Match numbers of the valid questions before this one
    """
    number = question.match_number
    if not isinstance(number, int) or isinstance(number, bool) or number < 1:
        raise InvalidQuestionError(number, "match number must be a positive integer")
    if number in seen_numbers:
        raise InvalidQuestionError(number, "duplicate match number")
    if not question.home_team or not question.home_team.strip():
        raise InvalidQuestionError(number, "empty home team")
    if not question.away_team or not question.away_team.strip():
        raise InvalidQuestionError(number, "empty away team")
    if not normalize_team_name(question.home_team) or not normalize_team_name(question.away_team):
        raise InvalidQuestionError(number, "team name has no comparable characters")


class MatchingEngine:
    """Matches concluded results to prediction form questions.

    Holds only configuration, so a single engine can run many forms
    concurrently; each call works on its own inputs.
    """

    def __init__(
        self,
        config: MatchingConfig | None = None,
        matcher: TeamNameMatcher | None = None,
    ):
        self._config = config or MatchingConfig()
        self._matcher = matcher or TeamNameMatcher()

    @property
    def config(self) -> MatchingConfig:
        return self._config

    def match(
        self,
        questions: Sequence[Question],
        results: Sequence[RawResult],
        threshold: Callable[[bool], float] | None = None,
    ) -> MatchReport:
        """Match results to questions.

        Args:
            questions: Ordered question slots of one form
            results: Immutable snapshot of aggregated results
            threshold: Optional is_champions_league -> confidence threshold,
                defaults to the config's per-tier thresholds

        Returns:
            MatchReport with candidates ordered by match number, per-slot
            diagnostics for malformed questions, and near misses
        """
        threshold = threshold or self._config.threshold_for
        report = MatchReport()

        valid_questions = self._validate(questions, report)

        matchable = [r for r in results if r.is_matchable]
        if len(matchable) != len(results):
            logger.debug(
                "[MATCH] Ignoring %d unconcluded results",
                len(results) - len(matchable),
            )

        accepted, best_rejected = self._score_pairs(valid_questions, matchable, threshold)
        assigned = self._assign(accepted, matchable)

        taken_results = {pair.result_index for pair in assigned.values()}
        for q_index, question in enumerate(valid_questions):
            pair = assigned.get(q_index)
            if pair is not None:
                report.candidates.append(self._build_candidate(question, matchable[pair.result_index], pair))
                continue

            near_miss = self._near_miss(q_index, question, accepted, best_rejected, matchable)
            if near_miss is not None:
                report.near_misses.append(near_miss)

        report.candidates.sort(key=lambda c: c.match_number)

        logger.info(
            "[MATCH] %d/%d questions matched from %d results (%d results used, %d invalid, %d near misses)",
            len(report.candidates),
            len(questions),
            len(matchable),
            len(taken_results),
            len(report.diagnostics),
            len(report.near_misses),
        )
        return report

    # =========================================================================
    # PRIVATE METHODS
    # =========================================================================

    def _validate(self, questions: Sequence[Question], report: MatchReport) -> list[Question]:
        """Keep valid questions; record a diagnostic for each invalid one."""
        valid: list[Question] = []
        seen_numbers: set[int] = set()

        for slot_index, question in enumerate(questions):
            try:
                validate_question(question, seen_numbers)
            except InvalidQuestionError as e:
                logger.warning("[MATCH] Skipping invalid question %s: %s", e.match_number, e.reason)
                report.diagnostics.append(
                    SlotDiagnostic(slot_index=slot_index, match_number=e.match_number, reason=e.reason)
                )
                continue
            seen_numbers.add(question.match_number)
            valid.append(question)

        return valid

    def _score_pairs(
        self,
        questions: list[Question],
        results: list[RawResult],
        threshold: Callable[[bool], float],
    ) -> tuple[list[_ScoredPair], dict[int, tuple[_ScoredPair, NearMissReason]]]:
        """Score every pair.

        Returns:
            (pairs clearing floor and threshold,
             best rejected pair per question index with its rejection reason)
        """
        normalized_results = [
            (normalize_team_name(r.home_team_raw), normalize_team_name(r.away_team_raw)) for r in results
        ]

        accepted: list[_ScoredPair] = []
        best_rejected: dict[int, tuple[_ScoredPair, NearMissReason]] = {}

        for q_index, question in enumerate(questions):
            q_home = normalize_team_name(question.home_team)
            q_away = normalize_team_name(question.away_team)
            home_floor = self._config.floor_for(q_home)
            away_floor = self._config.floor_for(q_away)

            for r_index, result in enumerate(results):
                r_home, r_away = normalized_results[r_index]
                home_sim = self._matcher.similarity(r_home, q_home)
                away_sim = self._matcher.similarity(r_away, q_away)
                pair = _ScoredPair(
                    question_index=q_index,
                    result_index=r_index,
                    home_similarity=home_sim,
                    away_similarity=away_sim,
                    confidence=round((home_sim + away_sim) / 2, 1),
                )

                if home_sim < home_floor or away_sim < away_floor:
                    continue

                if pair.confidence < threshold(result.is_champions_league):
                    logger.debug(
                        "[MATCH] Q%d vs '%s - %s': %.1f below threshold",
                        question.match_number,
                        result.home_team_raw,
                        result.away_team_raw,
                        pair.confidence,
                    )
                    self._keep_best_rejected(best_rejected, pair, NearMissReason.BELOW_THRESHOLD)
                    continue

                accepted.append(pair)

        return accepted, best_rejected

    @staticmethod
    def _keep_best_rejected(
        best_rejected: dict[int, tuple[_ScoredPair, NearMissReason]],
        pair: _ScoredPair,
        reason: NearMissReason,
    ) -> None:
        current = best_rejected.get(pair.question_index)
        if current is None or pair.confidence > current[0].confidence:
            best_rejected[pair.question_index] = (pair, reason)

    def _assign(self, pairs: list[_ScoredPair], results: list[RawResult]) -> dict[int, _ScoredPair]:
        """Greedy one-to-one assignment by descending confidence.

        Equal confidence prefers the most recently concluded result, then
        the lower match number, then input order, so a run is deterministic.

        Returns:
            Question index -> assigned pair
        """
        ordered = sorted(
            pairs,
            key=lambda p: (
                -p.confidence,
                -results[p.result_index].kickoff_utc.timestamp(),
                p.question_index,
                p.result_index,
            ),
        )

        assigned: dict[int, _ScoredPair] = {}
        used_results: set[int] = set()

        for pair in ordered:
            if pair.question_index in assigned or pair.result_index in used_results:
                continue
            assigned[pair.question_index] = pair
            used_results.add(pair.result_index)

        return assigned

    def _near_miss(
        self,
        q_index: int,
        question: Question,
        accepted: list[_ScoredPair],
        best_rejected: dict[int, tuple[_ScoredPair, NearMissReason]],
        results: list[RawResult],
    ) -> NearMiss | None:
        """Best pair for an unassigned question, if there was any.

        A question whose acceptable results all went to other slots reports
        RESULT_TAKEN; otherwise the best rejected pair is reported.
        """
        lost = [p for p in accepted if p.question_index == q_index]
        if lost:
            best = max(lost, key=lambda p: p.confidence)
            return NearMiss(
                match_number=question.match_number,
                confidence=best.confidence,
                reason=NearMissReason.RESULT_TAKEN,
                result=results[best.result_index],
            )

        if q_index in best_rejected:
            pair, reason = best_rejected[q_index]
            return NearMiss(
                match_number=question.match_number,
                confidence=pair.confidence,
                reason=reason,
                result=results[pair.result_index],
            )

        return None

    def _build_candidate(self, question: Question, result: RawResult, pair: _ScoredPair) -> MatchCandidate:
        resolved = resolve(result)
        goals_home = goals_away = goals_total = None
        if question.has_goal_bonus:
            buckets = self._config.buckets_for(question.game_type)
            goals_home, goals_away = derive_goal_buckets(resolved, buckets)
            goals_total = buckets.label_total(resolved)

        logger.debug(
            "[MATCHED] Q%d '%s - %s' -> '%s - %s' %d-%d (%s, confidence=%.1f)",
            question.match_number,
            question.home_team,
            question.away_team,
            result.home_team_raw,
            result.away_team_raw,
            resolved.home_goals,
            resolved.away_goals,
            resolved.outcome.value,
            pair.confidence,
        )

        return MatchCandidate(
            match_number=question.match_number,
            confidence=pair.confidence,
            derived_outcome=resolved.outcome,
            result=result,
            home_similarity=pair.home_similarity,
            away_similarity=pair.away_similarity,
            effective_home_score=resolved.home_goals,
            effective_away_score=resolved.away_goals,
            derived_goals_home=goals_home,
            derived_goals_away=goals_away,
            derived_goals_total=goals_total,
        )
