"""Tests for source aggregation, de-duplication and the date window."""

import threading
import time
from datetime import datetime, timedelta, timezone

import pytest

from resultmatch.consumers.aggregation import ResultAggregator, deduplicate, filter_window
from resultmatch.consumers.aggregation.records import coerce_raw_result, coerce_records
from resultmatch.core import RawResult, ResultFetcher, ResultStatus, SourceUnavailableError
from resultmatch.providers import StaticFetcher

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


def make_result(home="CN Barcelona", away="CN Sabadell", days_ago=2, status=ResultStatus.FINISHED, **kwargs):
    return RawResult(
        source_id=kwargs.pop("source_id", "feed-a"),
        home_team_raw=home,
        away_team_raw=away,
        home_score=kwargs.pop("home_score", 10),
        away_score=kwargs.pop("away_score", 9),
        status=status,
        kickoff_time=NOW - timedelta(days=days_ago),
        **kwargs,
    )


class FailingFetcher(ResultFetcher):
    def __init__(self, source_id: str, error: Exception):
        self._source_id = source_id
        self._error = error

    @property
    def source_id(self) -> str:
        return self._source_id

    def fetch(self):
        raise self._error


class BlockingFetcher(ResultFetcher):
    """Blocks until released, simulating a stalled source."""

    def __init__(self, source_id: str):
        self._source_id = source_id
        self.release = threading.Event()

    @property
    def source_id(self) -> str:
        return self._source_id

    def fetch(self):
        self.release.wait(timeout=5)
        return [make_result(source_id=self._source_id)]


class TestFilterWindow:
    """Trailing date window."""

    def test_keeps_recent_concluded_results(self):
        recent = make_result(days_ago=1)
        old = make_result(days_ago=10)
        assert filter_window([recent, old], window_days=7, now=NOW) == [recent]

    def test_boundary_is_inclusive(self):
        edge = make_result(days_ago=7)
        assert filter_window([edge], window_days=7, now=NOW) == [edge]

    def test_drops_scheduled(self):
        scheduled = make_result(days_ago=0, status=ResultStatus.SCHEDULED)
        assert filter_window([scheduled], window_days=7, now=NOW) == []

    def test_naive_kickoff_taken_as_utc(self):
        naive = RawResult("feed", "A", "B", 1, 0, ResultStatus.FINISHED, datetime(2026, 10, 16, 12, 0))
        assert filter_window([naive], window_days=1, now=NOW) == [naive]

    def test_negative_window_rejected(self):
        with pytest.raises(ValueError):
            filter_window([], window_days=-1, now=NOW)


class TestDeduplicate:
    """Same fixture from several sources."""

    def test_keeps_record_with_regulation_score(self):
        plain = make_result(
            "Barcelona CN", "Sabadell CN", status=ResultStatus.SHOOTOUT, source_id="feed-b",
            home_score=14, away_score=13,
        )
        rich = make_result(
            status=ResultStatus.SHOOTOUT, source_id="feed-a", home_score=14, away_score=13,
            home_regulation_score=10, away_regulation_score=10,
        )
        assert deduplicate([plain, rich]) == [rich]

    def test_prefers_shootout_over_finished(self):
        finished = make_result(source_id="feed-a")
        shootout = make_result(source_id="feed-b", status=ResultStatus.SHOOTOUT)
        assert deduplicate([finished, shootout]) == [shootout]

    def test_tie_keeps_first_source(self):
        first = make_result(source_id="feed-a")
        second = make_result("Barcelona CN", "Sabadell CN", source_id="feed-b")
        assert deduplicate([first, second]) == [first]

    def test_different_day_is_different_fixture(self):
        first_leg = make_result(days_ago=5)
        second_leg = make_result(days_ago=1)
        assert deduplicate([first_leg, second_leg]) == [first_leg, second_leg]

    def test_reversed_home_away_is_different_fixture(self):
        home = make_result("CN Barcelona", "CN Sabadell")
        away = make_result("CN Sabadell", "CN Barcelona")
        assert len(deduplicate([home, away])) == 2


class TestRecordCoercion:
    """Loosely typed records at the aggregator boundary."""

    def test_camel_case_mapping(self):
        result = coerce_raw_result(
            {
                "homeTeamRaw": " CN Barcelona ",
                "awayTeamRaw": "CN Sabadell",
                "homeScore": "11",
                "awayScore": 11,
                "homeRegulationScore": 11,
                "awayRegulationScore": 11,
                "status": "PEN",
                "kickoffTime": "2026-10-15T18:00:00Z",
                "isChampionsLeague": True,
            },
            source_id="feed-a",
        )
        assert result.home_team_raw == "CN Barcelona"
        assert result.home_score == 11
        assert result.status == ResultStatus.SHOOTOUT
        assert result.kickoff_time == datetime(2026, 10, 15, 18, 0, tzinfo=timezone.utc)
        assert result.is_champions_league is True
        assert result.source_id == "feed-a"

    def test_unknown_status_is_not_matchable(self):
        result = coerce_raw_result(
            {"home_team": "A", "away_team": "B", "home_score": 0, "away_score": 0,
             "status": "abandoned", "kickoff_time": "2026-10-15T18:00:00+02:00"},
            source_id="feed-a",
        )
        assert result.status == ResultStatus.SCHEDULED
        assert result.kickoff_time == datetime(2026, 10, 15, 16, 0, tzinfo=timezone.utc)

    def test_half_regulation_score_dropped(self):
        result = coerce_raw_result(
            {"home_team": "A", "away_team": "B", "home_score": 2, "away_score": 2,
             "home_regulation_score": 2, "status": "shootout", "kickoff_time": "2026-10-15T18:00:00Z"},
            source_id="feed-a",
        )
        assert result.has_regulation_score is False

    def test_raw_result_passes_through(self):
        result = make_result()
        assert coerce_raw_result(result, "other") is result

    def test_malformed_records_counted(self):
        records = [
            make_result(),
            {"home_team": "", "away_team": "B", "home_score": 1, "away_score": 0, "kickoff_time": "2026-10-15"},
            {"home_team": "A", "away_team": "B", "home_score": -1, "away_score": 0, "kickoff_time": "2026-10-15"},
            "not a record",
        ]
        results, rejected = coerce_records("feed-a", records)
        assert len(results) == 1
        assert rejected == 3


class TestResultAggregator:
    """Concurrent fetch with partial failure."""

    def test_merges_sources(self):
        fetchers = [
            StaticFetcher("feed-a", [make_result(source_id="feed-a")]),
            StaticFetcher("feed-b", [make_result("CN Terrassa", "CN Mataró", source_id="feed-b")]),
        ]
        outcome = ResultAggregator(clock=fixed_clock).aggregate(fetchers, window_days=7)
        assert isinstance(outcome.snapshot, tuple)
        assert {r.source_id for r in outcome.snapshot} == {"feed-a", "feed-b"}
        assert outcome.warning_count == 0

    def test_failed_source_excluded(self):
        fetchers = [
            StaticFetcher("feed-a", [make_result()]),
            FailingFetcher("feed-b", SourceUnavailableError("feed-b", "HTTP 503")),
            FailingFetcher("feed-c", ValueError("bad html")),
        ]
        outcome = ResultAggregator(clock=fixed_clock).aggregate(fetchers, window_days=7)
        assert len(outcome.snapshot) == 1
        assert outcome.warning_count == 2
        assert [f.source_id for f in outcome.failures] == ["feed-b", "feed-c"]
        assert "HTTP 503" in outcome.failures[0].error

    def test_slow_source_times_out(self):
        slow = BlockingFetcher("feed-slow")
        try:
            fetchers = [StaticFetcher("feed-a", [make_result()]), slow]
            started = time.monotonic()
            outcome = ResultAggregator(timeout=0.2, clock=fixed_clock).aggregate(fetchers, window_days=7)
            elapsed = time.monotonic() - started
        finally:
            slow.release.set()
        assert len(outcome.snapshot) == 1
        assert outcome.failures[0].source_id == "feed-slow"
        assert outcome.failures[0].timed_out is True
        # Returned at the deadline, not when the stalled fetch gave up
        assert elapsed < 2

    def test_all_sources_failing_gives_empty_snapshot(self):
        outcome = ResultAggregator(clock=fixed_clock).aggregate(
            [FailingFetcher("feed-a", RuntimeError("down"))], window_days=7
        )
        assert outcome.snapshot == ()
        assert outcome.warning_count == 1

    def test_no_fetchers(self):
        outcome = ResultAggregator(clock=fixed_clock).aggregate([], window_days=7)
        assert outcome.snapshot == ()

    def test_window_and_dedup_applied(self):
        fetchers = [
            StaticFetcher("feed-a", [make_result(days_ago=1), make_result(days_ago=30)]),
            StaticFetcher("feed-b", [
                make_result("Barcelona CN", "Sabadell CN", days_ago=1, source_id="feed-b"),
                make_result("CN Terrassa", "CN Mataró", status=ResultStatus.SCHEDULED, days_ago=0),
            ]),
        ]
        outcome = ResultAggregator(clock=fixed_clock).aggregate(fetchers, window_days=7)
        assert len(outcome.snapshot) == 1
        assert outcome.snapshot[0].source_id == "feed-a"
        assert outcome.duplicates_removed == 1
