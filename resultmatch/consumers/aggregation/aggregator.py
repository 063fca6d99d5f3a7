"""Source aggregation.

Runs every result fetcher in parallel, tolerates partial source failure,
merges, filters to the date window and de-duplicates fixtures reported
by more than one source. The output is an immutable snapshot that is
passed explicitly into each matching run.
"""

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import date, datetime

from resultmatch.consumers.aggregation.records import coerce_records
from resultmatch.consumers.aggregation.window import filter_window
from resultmatch.consumers.matching.constants import DEFAULT_FETCH_TIMEOUT
from resultmatch.consumers.matching.normalizer import normalize_team_name
from resultmatch.core import RawResult, ResultFetcher
from resultmatch.utilities.tz import now_utc

logger = logging.getLogger(__name__)


@dataclass
class SourceFailure:
    """A source excluded from this run."""

    source_id: str
    error: str
    timed_out: bool = False


@dataclass
class AggregationResult:
    """Merged snapshot plus what went wrong getting it."""

    snapshot: tuple[RawResult, ...] = ()
    failures: list[SourceFailure] = field(default_factory=list)
    rejected_records: int = 0
    duplicates_removed: int = 0

    @property
    def warning_count(self) -> int:
        return len(self.failures)


def fixture_key(result: RawResult) -> tuple[str, str, date]:
    """Identity of a fixture across sources: normalized teams and UTC day."""
    return (
        normalize_team_name(result.home_team_raw),
        normalize_team_name(result.away_team_raw),
        result.kickoff_utc.date(),
    )


def deduplicate(results: Sequence[RawResult]) -> list[RawResult]:
    """Collapse reports of the same fixture to the most complete one.

    aet/shootout beats finished, then a record with regulation scores
    beats one without. On a tie the earlier record wins, so source order
    decides. Output keeps the position of each fixture's first report.
    """
    best: dict[tuple[str, str, date], RawResult] = {}
    for result in results:
        key = fixture_key(result)
        current = best.get(key)
        if current is None:
            best[key] = result
        elif result.completeness > current.completeness:
            logger.debug(
                "[AGGREGATE] Replacing %s report of '%s - %s' with richer %s report",
                current.source_id,
                current.home_team_raw,
                current.away_team_raw,
                result.source_id,
            )
            best[key] = result
    return list(best.values())


class ResultAggregator:
    """Collects results from independent fetchers."""

    # Max parallel fetches
    MAX_WORKERS = 16

    def __init__(
        self,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        """Initialize aggregator.

        Args:
            timeout: Seconds each fetcher gets; all run at once, so this is
                also the upper bound for the whole fetch phase
            clock: Source of "now" for the date window
        """
        self._timeout = timeout
        self._clock = clock

    def aggregate(self, fetchers: Sequence[ResultFetcher], window_days: int) -> AggregationResult:
        """Fetch, merge, window-filter and de-duplicate results.

        Never raises because of a source: failing or slow fetchers are
        reported in AggregationResult.failures and left out.
        """
        start_time = time.time()
        outcome = AggregationResult()

        per_source = self._fetch_all(fetchers, outcome)

        merged: list[RawResult] = []
        for fetcher, records in zip(fetchers, per_source, strict=True):
            if records is None:
                continue
            coerced, rejected = coerce_records(fetcher.source_id, records)
            outcome.rejected_records += rejected
            merged.extend(coerced)

        in_window = filter_window(merged, window_days, self._clock())
        unique = deduplicate(in_window)
        outcome.duplicates_removed = len(in_window) - len(unique)
        outcome.snapshot = tuple(unique)

        logger.info(
            "[AGGREGATE] %d results from %d/%d sources in %.1fs "
            "(%d outside window, %d duplicates, %d rejected records)",
            len(outcome.snapshot),
            len(fetchers) - len(outcome.failures),
            len(fetchers),
            time.time() - start_time,
            len(merged) - len(in_window),
            outcome.duplicates_removed,
            outcome.rejected_records,
        )
        return outcome

    def _fetch_all(self, fetchers: Sequence[ResultFetcher], outcome: AggregationResult) -> list[list | None]:
        """Run all fetchers concurrently.

        Returns:
            Records per fetcher in fetcher order, None for failed sources
        """
        if not fetchers:
            return []

        executor = ThreadPoolExecutor(
            max_workers=min(self.MAX_WORKERS, len(fetchers)),
            thread_name_prefix="result-fetch",
        )
        try:
            futures = [executor.submit(fetcher.fetch) for fetcher in fetchers]
            wait(futures, timeout=self._timeout)

            per_source: list[list | None] = []
            for fetcher, future in zip(fetchers, futures, strict=True):
                source_id = fetcher.source_id
                if not future.done():
                    future.cancel()
                    logger.warning("[AGGREGATE] Source %s timed out after %.1fs", source_id, self._timeout)
                    outcome.failures.append(
                        SourceFailure(source_id, f"timed out after {self._timeout}s", timed_out=True)
                    )
                    per_source.append(None)
                    continue

                try:
                    records = list(future.result())
                except Exception as e:
                    logger.warning("[AGGREGATE] Source %s failed: %s", source_id, e)
                    outcome.failures.append(SourceFailure(source_id, str(e) or type(e).__name__))
                    per_source.append(None)
                    continue

                logger.debug("[AGGREGATE] Source %s returned %d records", source_id, len(records))
                per_source.append(records)

            return per_source
        finally:
            # Don't block on stragglers; their results are discarded.
            # A hung fetch still holds its thread until its own I/O timeout fires.
            executor.shutdown(wait=False, cancel_futures=True)

