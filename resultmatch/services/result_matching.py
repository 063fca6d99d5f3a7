"""Result matching service.

Ties aggregation and matching together. Aggregation produces an immutable
snapshot; each matching run receives it explicitly, so several forms can
be matched against the same snapshot at once without coordination and
no stale cache survives between fetch cycles.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from resultmatch.config import MatchingConfig
from resultmatch.consumers.aggregation import AggregationResult, ResultAggregator
from resultmatch.consumers.matching.engine import MatchingEngine
from resultmatch.core import MatchReport, Question, RawResult, ResultFetcher
from resultmatch.utilities.tz import now_utc

logger = logging.getLogger(__name__)


@dataclass
class MatchingRun:
    """Aggregation and matching output of one run."""

    aggregation: AggregationResult
    report: MatchReport

    @property
    def source_warnings(self) -> int:
        return self.aggregation.warning_count


class ResultMatchingService:
    """Fetches results and proposes answers for prediction forms."""

    def __init__(
        self,
        fetchers: Sequence[ResultFetcher],
        config: MatchingConfig | None = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._fetchers = list(fetchers)
        self._config = config or MatchingConfig()
        self._aggregator = ResultAggregator(timeout=self._config.fetch_timeout, clock=clock)
        self._engine = MatchingEngine(self._config)

    def collect(self) -> AggregationResult:
        """Fetch a fresh snapshot from all sources."""
        return self._aggregator.aggregate(self._fetchers, self._config.window_days)

    def match_snapshot(self, questions: Sequence[Question], snapshot: Sequence[RawResult]) -> MatchReport:
        """Match one form against an existing snapshot."""
        return self._engine.match(questions, snapshot)

    def run(self, questions: Sequence[Question]) -> MatchingRun:
        """Fetch a fresh snapshot and match one form against it."""
        aggregation = self.collect()
        if aggregation.failures:
            logger.warning(
                "[SERVICE] %d source(s) unavailable: %s",
                aggregation.warning_count,
                ", ".join(f.source_id for f in aggregation.failures),
            )
        report = self.match_snapshot(questions, aggregation.snapshot)
        return MatchingRun(aggregation=aggregation, report=report)
